from pydantic import BaseModel
from typing import Generic, List, Optional, TypeVar
import math

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    per_page: int
    current_page: int
    last_page: int

    @classmethod
    def build(cls, items: List[T], total: int, per_page: int, current_page: int) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            per_page=per_page,
            current_page=current_page,
            last_page=max(math.ceil(total / per_page), 1) if per_page else 1,
        )


class APIResponse(BaseModel, Generic[T]):
    code: int
    message: str = ""
    data: Optional[T] = None
