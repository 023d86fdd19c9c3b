from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from app.core.database import get_async_session
from app.core.security import validate_admin, validate_request
from app.models.product import (
    ProductCreate, ProductUpdate, ProductRead, ProductWithSkusRead, ProductDetailRead
)
from app.schemas.common_schemas import APIResponse, Page
from app.schemas.product_schemas import ProductListParams, ProductSearchParams
from app.services.favorite_service import favorite_service
from app.services.product_service import product_service
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=APIResponse[Page[ProductWithSkusRead]])
async def list_products(
    params: ProductListParams = Depends(),
    admin=Depends(validate_admin),
    db: AsyncSession = Depends(get_async_session)
):
    """List products straight from the database (admin)"""
    data = await product_service.list_products(db, params)
    return APIResponse(code=status.HTTP_200_OK, data=data)


@router.get("/search", response_model=APIResponse[Page[ProductDetailRead]])
async def search_products(
    params: ProductSearchParams = Depends(),
    db: AsyncSession = Depends(get_async_session)
):
    """Search the on-sale catalog"""
    data = await product_service.search_products(db, params)
    return APIResponse(code=status.HTTP_200_OK, data=data)


@router.get("/favorites", response_model=APIResponse[Page[ProductRead]])
async def list_favorites(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    current_user=Depends(validate_request),
    db: AsyncSession = Depends(get_async_session)
):
    """Favorite products of the current user"""
    data = await favorite_service.list_favorites(db, current_user.get("user_id"), page, page_size)
    return APIResponse(code=status.HTTP_200_OK, data=data)


@router.get("/{product_id}", response_model=APIResponse[ProductWithSkusRead])
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_async_session)
):
    """Product detail with SKUs"""
    data = await product_service.get_product_detail(db, product_id)
    return APIResponse(code=status.HTTP_200_OK, data=data)


@router.post("", response_model=APIResponse[ProductDetailRead], status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    admin=Depends(validate_admin),
    db: AsyncSession = Depends(get_async_session)
):
    data = await product_service.create_product(db, product)
    logger.info("Product created via API", product_id=data.id, admin_id=admin.get("user_id"))
    return APIResponse(code=status.HTTP_201_CREATED, message="Product created", data=data)


@router.put("/{product_id}", response_model=APIResponse[ProductDetailRead])
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    admin=Depends(validate_admin),
    db: AsyncSession = Depends(get_async_session)
):
    data = await product_service.update_product(db, product_id, product_update)
    return APIResponse(code=status.HTTP_200_OK, message="Product updated", data=data)


@router.delete("/{product_id}", response_model=APIResponse)
async def delete_product(
    product_id: int,
    admin=Depends(validate_admin),
    db: AsyncSession = Depends(get_async_session)
):
    await product_service.delete_product(db, product_id)
    return APIResponse(code=status.HTTP_200_OK, message="Product deleted")


@router.post("/{product_id}/favorite", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def favor_product(
    product_id: int,
    current_user=Depends(validate_request),
    db: AsyncSession = Depends(get_async_session)
):
    await favorite_service.favor(db, current_user.get("user_id"), product_id)
    return APIResponse(code=status.HTTP_201_CREATED, message="Product favorited")


@router.delete("/{product_id}/favorite", response_model=APIResponse)
async def unfavor_product(
    product_id: int,
    current_user=Depends(validate_request),
    db: AsyncSession = Depends(get_async_session)
):
    await favorite_service.unfavor(db, current_user.get("user_id"), product_id)
    return APIResponse(code=status.HTTP_200_OK, message="Product unfavorited")
