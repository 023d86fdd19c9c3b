from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from typing import Optional
from datetime import datetime, timezone


class CategoryBase(SQLModel):
    name: str = Field(index=True)
    parent_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    is_directory: bool = Field(default=False)
    level: int = Field(default=0)
    # Ancestor ids joined by "-", e.g. "-1-4-" for a node under 1 -> 4; roots use "-"
    path: str = Field(default="-", index=True)


class Category(CategoryBase, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True)
    )
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    @property
    def descendants_path_prefix(self) -> str:
        """Path prefix shared by this node's descendants."""
        return f"{self.path}{self.id}-"


class CategoryRead(CategoryBase):
    id: int
