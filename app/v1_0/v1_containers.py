from dependency_injector import containers, providers
from app.v1_0.repositories import ProductRepository
from app.v1_0.services import ProductService

class APIContainer(containers.DeclarativeContainer):
    product_repository = providers.Singleton(ProductRepository)

    product_service = providers.Singleton(
        ProductService,
        product_repository=product_repository,
    )
