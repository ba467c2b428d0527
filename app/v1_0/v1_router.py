from fastapi import APIRouter

from app.v1_0.routers import product_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(product_router)
