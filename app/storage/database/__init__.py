from .db_connector import async_session, create_all, dispose_engine, engine, get_db

__all__ = ["async_session", "create_all", "dispose_engine", "engine", "get_db"]
