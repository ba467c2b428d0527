from dependency_injector import containers, providers
from app.v1_0.v1_containers import APIContainer

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "app.v1_0.routers.product_router",
            ]
    )

    api_container = providers.Container(
        APIContainer
    )
