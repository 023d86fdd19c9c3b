from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import httpx
from app.core.config import settings
from app.core.exceptions import ProductNotFoundError, ProductNotOnSaleError, SearchUnavailableError
from app.dao.category_dao import category_dao
from app.dao.product_dao import product_dao
from app.models.enums import ProductSortField, SortDirection
from app.models.product import (
    Product, ProductCreate, ProductUpdate, ProductWithSkusRead, ProductDetailRead
)
from app.sao.search_sao import search_sao
from app.schemas.common_schemas import Page
from app.schemas.product_schemas import ProductListParams, ProductSearchParams
from app.services.catalog_query_builder import ProductSearchBuilder
from datetime import datetime, timezone
import structlog

logger = structlog.get_logger()


def _parse_sort(field: Optional[str], order: Optional[str]):
    """Admin sort column and direction; unknown values disable sorting."""
    if not field or not order:
        return None, None
    try:
        return ProductSortField(field), SortDirection(order.lower())
    except ValueError:
        logger.info("Ignoring unsupported product sort", field=field, order=order)
        return None, None


class ProductService:
    def __init__(self):
        self.product_dao = product_dao
        self.category_dao = category_dao
        self.search_sao = search_sao

    async def list_products(self, db: AsyncSession, params: ProductListParams) -> Page[ProductWithSkusRead]:
        try:
            page = max(params.page, 1)
            page_size = settings.clamp_page_size(params.page_size)
            sort_field, direction = _parse_sort(params.field, params.order)

            products, total = await self.product_dao.paginate(
                db,
                search=params.search,
                sort_field=sort_field,
                direction=direction,
                skip=(page - 1) * page_size,
                limit=page_size,
            )
            logger.info("Listed products", search=params.search, count=len(products), total=total, page=page)
            return Page.build(
                [ProductWithSkusRead.model_validate(product) for product in products],
                total=total,
                per_page=page_size,
                current_page=page,
            )
        except Exception as e:
            logger.error("Error listing products", search=params.search, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not retrieve products"
            )

    async def search_products(self, db: AsyncSession, params: ProductSearchParams) -> Page[ProductDetailRead]:
        """Customer catalog search.

        The search index supplies the ordered ids and the total hit count; the
        rows themselves always come from the database, in the index's order.
        """
        try:
            page = max(params.page, 1)
            page_size = settings.clamp_page_size(params.page_size)

            category = None
            if params.category_id:
                try:
                    category_id = int(params.category_id)
                except ValueError:
                    category_id = None
                    logger.info("Ignoring invalid category filter", category_id=params.category_id)
                if category_id is not None:
                    category = await self.category_dao.get_by_id(db, category_id)
                    if category is None:
                        logger.info("Ignoring unknown category filter", category_id=category_id)

            body = (
                ProductSearchBuilder()
                .paginate(page, page_size)
                .order_by(params.order)
                .category(category)
                .keywords(params.search)
                .build()
            )

            hits = await self.search_sao.search(body)
            products = await self.product_dao.get_by_ids_in_order(db, hits.ids)

            logger.info(
                "Searched products",
                search=params.search,
                category_id=params.category_id,
                order=params.order,
                hit_count=len(hits.ids),
                total=hits.total,
            )
            return Page.build(
                [ProductDetailRead.model_validate(product) for product in products],
                total=hits.total,
                per_page=page_size,
                current_page=page,
            )
        except httpx.HTTPError as e:
            logger.error("Search index request failed", search=params.search, error=str(e))
            raise SearchUnavailableError()
        except Exception as e:
            logger.error("Error searching products", search=params.search, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not search products"
            )

    async def get_product(self, db: AsyncSession, product_id: int) -> Product:
        try:
            product = await self.product_dao.get_by_id(db, product_id)
            if not product:
                logger.warning("Product not found", product_id=product_id)
                raise ProductNotFoundError()
            return product
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error getting product", product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not retrieve product"
            )

    async def get_product_detail(self, db: AsyncSession, product_id: int) -> ProductWithSkusRead:
        """Customer-facing detail view; only on-sale products are visible."""
        try:
            product = await self.product_dao.get_with_skus(db, product_id)
            if not product:
                logger.warning("Product not found", product_id=product_id)
                raise ProductNotFoundError()
            if not product.on_sale:
                logger.warning("Product not on sale", product_id=product_id)
                raise ProductNotOnSaleError()
            return ProductWithSkusRead.model_validate(product)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error getting product detail", product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not retrieve product"
            )

    async def create_product(self, db: AsyncSession, product_create: ProductCreate) -> ProductDetailRead:
        try:
            product_data = product_create.model_dump(exclude={"skus", "properties"})
            skus = [sku.model_dump() for sku in product_create.skus]
            properties = [prop.model_dump() for prop in product_create.properties]
            if skus:
                product_data["price"] = min(sku["price"] for sku in skus)
            product_data["created_at"] = datetime.now(timezone.utc)

            product = await self.product_dao.create_with_children(
                db, obj_in=product_data, skus=skus, properties=properties
            )
            logger.info("Product created successfully", product_id=product.id)
            return ProductDetailRead.model_validate(
                await self.product_dao.get_with_relations(db, product.id)
            )
        except Exception as e:
            logger.error("Error creating product", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Product creation failed"
            )

    async def update_product(self, db: AsyncSession, product_id: int, product_update: ProductUpdate) -> ProductDetailRead:
        try:
            product = await self.get_product(db, product_id)

            update_data = product_update.model_dump(exclude_unset=True, exclude={"properties"})
            if update_data:
                update_data["updated_at"] = datetime.now(timezone.utc)
                await self.product_dao.update(db, db_obj=product, obj_in=update_data)

            # A non-empty properties list replaces the whole collection
            if product_update.properties:
                await self.product_dao.replace_properties(
                    db, product_id, [prop.model_dump() for prop in product_update.properties]
                )

            logger.info("Product updated successfully", product_id=product_id)
            return ProductDetailRead.model_validate(
                await self.product_dao.get_with_relations(db, product_id)
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error updating product", product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Product update failed"
            )

    async def delete_product(self, db: AsyncSession, product_id: int) -> bool:
        try:
            await self.get_product(db, product_id)
            deleted_product = await self.product_dao.delete(db, id=product_id)
            if deleted_product:
                logger.info("Product deleted successfully", product_id=product_id)
                return True
            return False
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error deleting product", product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Product deletion failed"
            )


product_service = ProductService()
