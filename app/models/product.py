from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from typing import List, Optional
from datetime import datetime, timezone
from decimal import Decimal
from .category import Category, CategoryRead


class ProductBase(SQLModel):
    title: str = Field(index=True)
    description: str = Field(default="")
    long_title: str = Field(default="")
    image: Optional[str] = None
    on_sale: bool = Field(default=True, index=True)
    rating: float = Field(default=5.0)
    sold_count: int = Field(default=0)
    review_count: int = Field(default=0)
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)


class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True)
    )
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Relationships
    skus: List["ProductSku"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProductSku.id"},
    )
    properties: List["ProductProperty"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProductProperty.id"},
    )
    category: Optional[Category] = Relationship()


class ProductSkuBase(SQLModel):
    title: str
    description: str = Field(default="")
    price: Decimal = Field(max_digits=10, decimal_places=2)
    stock: int = Field(default=0)


class ProductSku(ProductSkuBase, table=True):
    __tablename__ = "product_skus"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: Optional[int] = Field(default=None, foreign_key="products.id", index=True, ondelete="CASCADE")

    product: Optional[Product] = Relationship(back_populates="skus")


class ProductPropertyBase(SQLModel):
    name: str
    value: str


class ProductProperty(ProductPropertyBase, table=True):
    __tablename__ = "product_properties"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: Optional[int] = Field(default=None, foreign_key="products.id", index=True, ondelete="CASCADE")

    product: Optional[Product] = Relationship(back_populates="properties")


class ProductSkuCreate(ProductSkuBase):
    pass


class ProductSkuRead(ProductSkuBase):
    id: int


class ProductPropertyCreate(ProductPropertyBase):
    pass


class ProductPropertyRead(ProductPropertyBase):
    id: int


class ProductCreate(ProductBase):
    skus: List[ProductSkuCreate] = []
    properties: List[ProductPropertyCreate] = []


class ProductRead(ProductBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime]


class ProductWithSkusRead(ProductRead):
    skus: List[ProductSkuRead] = []


class ProductDetailRead(ProductWithSkusRead):
    properties: List[ProductPropertyRead] = []
    category: Optional[CategoryRead] = None


class ProductUpdate(SQLModel):
    title: Optional[str] = None
    description: Optional[str] = None
    long_title: Optional[str] = None
    image: Optional[str] = None
    on_sale: Optional[bool] = None
    price: Optional[Decimal] = None
    category_id: Optional[int] = None
    properties: Optional[List[ProductPropertyCreate]] = None
