from typing import List, Tuple
from sqlmodel import select
from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.favorite import UserFavoriteProduct
from app.models.product import Product
import structlog

logger = structlog.get_logger()


class FavoriteDAO:
    async def exists(self, db: AsyncSession, user_id: str, product_id: int) -> bool:
        try:
            result = await db.execute(
                select(UserFavoriteProduct.product_id).where(
                    UserFavoriteProduct.user_id == user_id,
                    UserFavoriteProduct.product_id == product_id,
                )
            )
            return result.first() is not None
        except Exception as e:
            logger.error("Error checking favorite", user_id=user_id, product_id=product_id, error=str(e))
            raise

    async def attach(self, db: AsyncSession, user_id: str, product_id: int) -> UserFavoriteProduct:
        """Insert the favorite edge; a duplicate pair raises IntegrityError."""
        try:
            favorite = UserFavoriteProduct(user_id=user_id, product_id=product_id)
            db.add(favorite)
            await db.commit()
            logger.info("Attached favorite", user_id=user_id, product_id=product_id)
            return favorite
        except Exception as e:
            await db.rollback()
            logger.error("Error attaching favorite", user_id=user_id, product_id=product_id, error=str(e))
            raise

    async def detach(self, db: AsyncSession, user_id: str, product_id: int) -> bool:
        try:
            result = await db.execute(
                delete(UserFavoriteProduct).where(
                    UserFavoriteProduct.user_id == user_id,
                    UserFavoriteProduct.product_id == product_id,
                )
            )
            await db.commit()
            logger.info("Detached favorite", user_id=user_id, product_id=product_id, removed=result.rowcount)
            return result.rowcount > 0
        except Exception as e:
            await db.rollback()
            logger.error("Error detaching favorite", user_id=user_id, product_id=product_id, error=str(e))
            raise

    async def paginate_products(
        self, db: AsyncSession, user_id: str, skip: int = 0, limit: int = 15
    ) -> Tuple[List[Product], int]:
        """The user's favorite products, most recently favorited first."""
        try:
            result = await db.execute(
                select(Product)
                .join(UserFavoriteProduct, UserFavoriteProduct.product_id == Product.id)
                .where(UserFavoriteProduct.user_id == user_id)
                .order_by(UserFavoriteProduct.created_at.desc(), Product.id.desc())
                .offset(skip)
                .limit(limit)
            )
            total = await db.scalar(
                select(func.count()).select_from(UserFavoriteProduct).where(UserFavoriteProduct.user_id == user_id)
            )
            return result.scalars().all(), total or 0
        except Exception as e:
            logger.error("Error listing favorites", user_id=user_id, error=str(e))
            raise


favorite_dao = FavoriteDAO()
