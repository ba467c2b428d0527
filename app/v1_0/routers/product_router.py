from typing import List, Dict, Optional
from datetime import date
from fastapi import APIRouter, HTTPException, Depends, Query, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from app.storage.database.db_connector import get_db
from app.app_containers import ApplicationContainer
from app.core.logger import logger
from app.core.settings import settings

from app.v1_0.schemas import ProductUpsert, ProductSearchQuery
from app.v1_0.entities import ProductDTO, ProductPageResponse
from app.v1_0.services import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

@router.post(
    "/create",
    response_model=ProductDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
@inject
async def create_product(
    request: ProductUpsert,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> ProductDTO:
    logger.info("[ProductRouter] create code=%s", request.code)
    try:
        return await service.create(payload=request, db=db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ProductRouter] create error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create product")

@router.get(
    "/by-id/{product_id}",
    response_model=ProductDTO,
    summary="Get product by ID",
)
@inject
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
):
    logger.debug(f"[ProductRouter] get id={product_id}")
    try:
        return await service.get(product_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ProductRouter] get error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch product")

@router.get(
    "",
    response_model=List[ProductDTO],
    summary="List all products",
)
@inject
async def list_products(
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
):
    logger.debug("[ProductRouter] list_all")
    try:
        return await service.list_all(db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ProductRouter] list_all error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list products")

@router.get(
    "/search",
    response_model=ProductPageResponse,
    summary="Search products paginated",
)
@inject
async def search_products(
    code: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None, alias="fromDate"),
    date_to: Optional[date] = Query(None, alias="toDate"),
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
):
    logger.debug(f"[ProductRouter] search page={page} size={size}")
    try:
        params = ProductSearchQuery(
            code=code,
            name=name,
            date_from=date_from,
            date_to=date_to,
            page=page,
            size=size,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        )
    try:
        return await service.search(params, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ProductRouter] search error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to search products")

@router.patch(
    "/by-id/{product_id}",
    response_model=ProductDTO,
    summary="Update product",
)
@inject
async def update_product(
    product_id: int,
    data: ProductUpsert,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> ProductDTO:
    logger.info("[ProductRouter] update id=%s", product_id)
    try:
        return await service.update(product_id=product_id, payload=data, db=db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ProductRouter] update error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update product")

@router.delete(
    "/by-id/{product_id}",
    response_model=Dict[str, str],
    summary="Delete product",
)
@inject
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(
        Provide[ApplicationContainer.api_container.product_service]
    ),
) -> Dict[str, str]:
    logger.warning("[ProductRouter] delete id=%s", product_id)
    try:
        ok = await service.delete(product_id=product_id, db=db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ProductRouter] delete error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete product")

    if not ok:
        raise HTTPException(status_code=404, detail="Product not found")

    return {"message": f"Product with ID {product_id} deleted successfully"}
