from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import AlreadyFavoritedError, NotFavoritedError
from app.dao.favorite_dao import favorite_dao
from app.models.product import ProductRead
from app.schemas.common_schemas import Page
from app.services.product_service import product_service
import structlog

logger = structlog.get_logger()


class FavoriteService:
    """Favorite edges between users and products.

    The existence checks below only turn the common duplicate/missing cases
    into friendly errors. The (user, product) primary key on the link table
    is what actually rejects a duplicate when two requests race.
    """

    def __init__(self):
        self.favorite_dao = favorite_dao
        self.product_service = product_service

    async def favor(self, db: AsyncSession, user_id: str, product_id: int) -> None:
        try:
            await self.product_service.get_product(db, product_id)

            if await self.favorite_dao.exists(db, user_id, product_id):
                logger.warning("Product already favorited", user_id=user_id, product_id=product_id)
                raise AlreadyFavoritedError()

            try:
                await self.favorite_dao.attach(db, user_id, product_id)
            except IntegrityError:
                # Only a duplicate edge is "already favorited"; other violations go to the 500 path
                if await self.favorite_dao.exists(db, user_id, product_id):
                    logger.warning("Concurrent favorite rejected by constraint", user_id=user_id, product_id=product_id)
                    raise AlreadyFavoritedError()
                raise

            logger.info("Product favorited", user_id=user_id, product_id=product_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error favoriting product", user_id=user_id, product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not favorite product"
            )

    async def unfavor(self, db: AsyncSession, user_id: str, product_id: int) -> None:
        try:
            await self.product_service.get_product(db, product_id)

            if not await self.favorite_dao.exists(db, user_id, product_id):
                logger.warning("Product not favorited", user_id=user_id, product_id=product_id)
                raise NotFavoritedError()

            if not await self.favorite_dao.detach(db, user_id, product_id):
                # Removed by a concurrent request between the check and the delete
                raise NotFavoritedError()

            logger.info("Product unfavorited", user_id=user_id, product_id=product_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error unfavoriting product", user_id=user_id, product_id=product_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not unfavorite product"
            )

    async def list_favorites(
        self, db: AsyncSession, user_id: str, page: int = 1, page_size: Optional[int] = None
    ) -> Page[ProductRead]:
        try:
            page = max(page, 1)
            per_page = settings.clamp_page_size(page_size)
            products, total = await self.favorite_dao.paginate_products(
                db, user_id, skip=(page - 1) * per_page, limit=per_page
            )
            logger.info("Retrieved favorite products", user_id=user_id, count=len(products), total=total)
            return Page.build(
                [ProductRead.model_validate(product) for product in products],
                total=total,
                per_page=per_page,
                current_page=page,
            )
        except Exception as e:
            logger.error("Error getting favorite products", user_id=user_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not retrieve favorite products"
            )


favorite_service = FavoriteService()
