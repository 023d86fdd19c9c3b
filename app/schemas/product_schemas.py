from pydantic import BaseModel
from typing import Optional


class ProductListParams(BaseModel):
    """Admin listing over the relational store."""
    search: Optional[str] = None
    order: Optional[str] = None
    field: Optional[str] = None
    page: int = 1
    page_size: Optional[int] = None


class ProductSearchParams(BaseModel):
    """Customer catalog search over the search index."""
    search: Optional[str] = None
    order: Optional[str] = None
    # Kept raw so a non-numeric id is ignored like an unknown one
    category_id: Optional[str] = None
    page: int = 1
    page_size: Optional[int] = None
