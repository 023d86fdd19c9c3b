from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import datetime, timezone


class UserFavoriteProduct(SQLModel, table=True):
    """Favorite edge between a user and a product.

    Users are identified by the token's ``userId``; there is no local users
    table to reference. The composite primary key is the uniqueness guard for
    (user, product) pairs; the existence check in the service layer only
    produces an earlier, friendlier error.
    """
    __tablename__ = "user_favorite_products"

    user_id: str = Field(primary_key=True)
    product_id: int = Field(primary_key=True, foreign_key="products.id", ondelete="CASCADE")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        index=True,
    )
