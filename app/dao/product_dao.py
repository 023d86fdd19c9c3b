from typing import List, Optional, Sequence, Tuple
from sqlmodel import select
from sqlalchemy import case, delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from app.dao.base_dao import BaseDAO
from app.models.enums import ProductSortField, SortDirection
from app.models.product import Product, ProductSku, ProductProperty
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product)

    @staticmethod
    def _keyword_filter(search: str):
        """Case-insensitive substring match on the product or any of its SKUs."""
        like = f"%{search}%"
        return or_(
            Product.title.ilike(like),
            Product.description.ilike(like),
            Product.skus.any(
                or_(ProductSku.title.ilike(like), ProductSku.description.ilike(like))
            ),
        )

    async def paginate(
        self,
        db: AsyncSession,
        *,
        search: Optional[str] = None,
        sort_field: Optional[ProductSortField] = None,
        direction: Optional[SortDirection] = None,
        skip: int = 0,
        limit: int = 15,
    ) -> Tuple[List[Product], int]:
        """Filtered, sorted page of products with SKUs loaded, plus the filtered total."""
        try:
            filters = []
            if search:
                filters.append(self._keyword_filter(search))

            query = select(Product).options(selectinload(Product.skus)).where(*filters)
            if sort_field and direction:
                column = getattr(Product, sort_field.value)
                query = query.order_by(
                    column.desc() if direction == SortDirection.DESC else column.asc(),
                    Product.id,
                )
            else:
                query = query.order_by(Product.id)

            result = await db.execute(query.offset(skip).limit(limit))
            total = await db.scalar(select(func.count(Product.id)).where(*filters))
            return result.scalars().all(), total or 0
        except Exception as e:
            logger.error("Error paginating products", search=search, error=str(e))
            raise

    async def get_with_skus(self, db: AsyncSession, product_id: int) -> Optional[Product]:
        try:
            result = await db.execute(
                select(Product)
                .options(selectinload(Product.skus))
                .where(Product.id == product_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting product with skus", product_id=product_id, error=str(e))
            raise

    async def get_with_relations(self, db: AsyncSession, product_id: int) -> Optional[Product]:
        try:
            result = await db.execute(
                select(Product)
                .options(
                    selectinload(Product.skus),
                    selectinload(Product.properties),
                    selectinload(Product.category),
                )
                .where(Product.id == product_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting product with relations", product_id=product_id, error=str(e))
            raise

    async def get_by_ids_in_order(self, db: AsyncSession, product_ids: Sequence[int]) -> List[Product]:
        """Fetch products by id, returned in the order of ``product_ids``.

        An ``IN`` fetch comes back in whatever order the database picks, so
        rows are explicitly ordered by each id's position in the input list.
        Ids with no matching row are skipped.
        """
        if not product_ids:
            return []
        positions = {}
        for position, product_id in enumerate(product_ids):
            positions.setdefault(product_id, position)
        try:
            result = await db.execute(
                select(Product)
                .options(
                    selectinload(Product.skus),
                    selectinload(Product.properties),
                    selectinload(Product.category),
                )
                .where(Product.id.in_(list(positions)))
                .order_by(case(positions, value=Product.id))
            )
            return result.scalars().all()
        except Exception as e:
            logger.error("Error getting products by ids", product_ids=list(product_ids), error=str(e))
            raise

    async def create_with_children(
        self,
        db: AsyncSession,
        *,
        obj_in: dict,
        skus: List[dict],
        properties: List[dict],
    ) -> Product:
        try:
            product = Product(**obj_in)
            product.skus = [ProductSku(**sku) for sku in skus]
            product.properties = [ProductProperty(**prop) for prop in properties]
            db.add(product)
            await db.commit()
            logger.info("Created Product", id=str(product.id), sku_count=len(skus))
            return product
        except Exception as e:
            await db.rollback()
            logger.error("Error creating Product", error=str(e))
            raise

    async def replace_properties(self, db: AsyncSession, product_id: int, properties: List[dict]) -> None:
        """Drop every property of the product and store ``properties`` instead."""
        try:
            await db.execute(delete(ProductProperty).where(ProductProperty.product_id == product_id))
            db.add_all([ProductProperty(product_id=product_id, **prop) for prop in properties])
            await db.commit()
            logger.info("Replaced product properties", product_id=product_id, count=len(properties))
        except Exception as e:
            await db.rollback()
            logger.error("Error replacing product properties", product_id=product_id, error=str(e))
            raise


product_dao = ProductDAO()
