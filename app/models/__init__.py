# Import all models for easy access
from .enums import UserRole, SortDirection, SearchSortMetric, ProductSortField
from .category import Category, CategoryRead
from .product import (
    Product, ProductCreate, ProductRead, ProductWithSkusRead, ProductDetailRead, ProductUpdate,
    ProductSku, ProductSkuCreate, ProductSkuRead,
    ProductProperty, ProductPropertyCreate, ProductPropertyRead
)
from .favorite import UserFavoriteProduct

# Export all models
__all__ = [
    # Enums
    "UserRole", "SortDirection", "SearchSortMetric", "ProductSortField",

    # Catalog
    "Category", "CategoryRead",
    "Product", "ProductCreate", "ProductRead", "ProductWithSkusRead", "ProductDetailRead", "ProductUpdate",
    "ProductSku", "ProductSkuCreate", "ProductSkuRead",
    "ProductProperty", "ProductPropertyCreate", "ProductPropertyRead",

    # Junction tables
    "UserFavoriteProduct",
]
