# Export all DAO classes
from .base_dao import BaseDAO
from .product_dao import product_dao
from .category_dao import category_dao
from .favorite_dao import favorite_dao

__all__ = [
    "BaseDAO",
    "product_dao",
    "category_dao",
    "favorite_dao",
]
