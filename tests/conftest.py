"""
Pytest configuration and shared fixtures
Provides an in-memory database, seeded catalog data and token helpers
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from decimal import Decimal

import pytest
import pytest_asyncio
from jose import jwt
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import app.models  # noqa: F401
from app.core.config import settings
from app.models.category import Category
from app.models.product import Product, ProductSku, ProductProperty


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # SQLite leaves foreign keys unenforced unless asked
    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def catalog(session_maker):
    """
    Seed a small category tree and products.

    Categories: 1 Apparel (directory, "-") with leaves 2 Shoes and 4 Bags
    (both "-1-"); 3 Books (leaf, "-"). Products 1..3 are on sale, product 4 is not.
    """
    async with session_maker() as session:
        apparel = Category(id=1, name="Apparel", is_directory=True, level=0, path="-")
        shoes = Category(id=2, name="Shoes", parent_id=1, is_directory=False, level=1, path="-1-")
        books = Category(id=3, name="Books", is_directory=False, level=0, path="-")
        bags = Category(id=4, name="Bags", parent_id=1, is_directory=False, level=1, path="-1-")
        session.add_all([apparel, shoes, books, bags])

        products = [
            Product(
                id=1, title="Red running shoes", description="Lightweight trainers",
                price=Decimal("59.00"), sold_count=10, rating=4.5, category_id=2,
                skus=[ProductSku(title="Size 42", description="EU 42", price=Decimal("59.00"), stock=5)],
                properties=[ProductProperty(name="color", value="red")],
            ),
            Product(
                id=2, title="Canvas tote", description="Everyday bag",
                price=Decimal("19.00"), sold_count=30, rating=4.0, category_id=4,
                skus=[ProductSku(title="Natural", description="Undyed canvas", price=Decimal("19.00"), stock=12)],
            ),
            Product(
                id=3, title="Python cookbook", description="Recipes for pythonistas",
                price=Decimal("39.00"), sold_count=5, rating=4.9, category_id=3,
                skus=[ProductSku(title="Paperback", description="Red cover edition", price=Decimal("39.00"), stock=3)],
            ),
            Product(
                id=4, title="Discontinued boots", description="No longer sold",
                price=Decimal("99.00"), on_sale=False, category_id=2,
            ),
        ]
        session.add_all(products)
        await session.commit()
    return products


def make_token(user_id: str, role: str = "USER") -> str:
    return jwt.encode(
        {"userId": user_id, "role": role},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {make_token('5')}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token('admin', 'ADMIN')}"}
