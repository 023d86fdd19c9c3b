"""
Integration tests for ProductDAO and FavoriteDAO against in-memory SQLite
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.dao.favorite_dao import favorite_dao
from app.dao.product_dao import product_dao
from app.models.enums import ProductSortField, SortDirection
from app.models.favorite import UserFavoriteProduct
from app.models.product import Product

pytestmark = pytest.mark.integration


class TestGetByIdsInOrder:
    async def test_rows_follow_input_order(self, catalog, db_session):
        products = await product_dao.get_by_ids_in_order(db_session, [3, 1, 2])

        assert [p.id for p in products] == [3, 1, 2]

    async def test_relations_are_loaded(self, catalog, db_session):
        products = await product_dao.get_by_ids_in_order(db_session, [1])

        product = products[0]
        assert [sku.title for sku in product.skus] == ["Size 42"]
        assert [(p.name, p.value) for p in product.properties] == [("color", "red")]
        assert product.category.name == "Shoes"

    async def test_unknown_ids_are_skipped(self, catalog, db_session):
        products = await product_dao.get_by_ids_in_order(db_session, [99, 2, 42, 1])

        assert [p.id for p in products] == [2, 1]

    async def test_empty_id_list(self, catalog, db_session):
        assert await product_dao.get_by_ids_in_order(db_session, []) == []

    async def test_order_is_independent_of_insert_order(self, session_maker):
        async with session_maker() as session:
            session.add_all([
                Product(id=i, title=f"Product {i}", price=Decimal("1.00"))
                for i in (10, 20, 30, 40)
            ])
            await session.commit()

        async with session_maker() as session:
            products = await product_dao.get_by_ids_in_order(session, [30, 10, 40, 20])

        assert [p.id for p in products] == [30, 10, 40, 20]


class TestPaginate:
    async def test_default_order_and_total(self, catalog, db_session):
        products, total = await product_dao.paginate(db_session, skip=0, limit=2)

        assert [p.id for p in products] == [1, 2]
        assert total == 4

    async def test_search_matches_product_title_case_insensitively(self, catalog, db_session):
        products, total = await product_dao.paginate(db_session, search="COOKBOOK")

        assert [p.id for p in products] == [3]
        assert total == 1

    async def test_search_matches_sku_fields(self, catalog, db_session):
        # Product 3 only mentions "red" in its SKU description
        products, total = await product_dao.paginate(db_session, search="red")

        assert [p.id for p in products] == [1, 3]
        assert total == 2

    async def test_search_matches_sku_title(self, catalog, db_session):
        products, _ = await product_dao.paginate(db_session, search="natural")

        assert [p.id for p in products] == [2]

    async def test_skus_are_loaded(self, catalog, db_session):
        products, _ = await product_dao.paginate(db_session, search="tote")

        assert [sku.title for sku in products[0].skus] == ["Natural"]

    async def test_sort_by_field(self, catalog, db_session):
        products, _ = await product_dao.paginate(
            db_session, sort_field=ProductSortField.SOLD_COUNT, direction=SortDirection.DESC
        )

        assert [p.id for p in products] == [2, 1, 3, 4]

    async def test_sort_requires_direction(self, catalog, db_session):
        products, _ = await product_dao.paginate(db_session, sort_field=ProductSortField.PRICE)

        assert [p.id for p in products] == [1, 2, 3, 4]


class TestReplaceProperties:
    async def test_replaces_whole_collection(self, catalog, session_maker):
        async with session_maker() as session:
            await product_dao.replace_properties(
                session, 1, [{"name": "size", "value": "42"}, {"name": "material", "value": "mesh"}]
            )
            product = await product_dao.get_with_relations(session, 1)

        assert sorted((p.name, p.value) for p in product.properties) == [("material", "mesh"), ("size", "42")]


class TestFavoriteDAO:
    async def test_attach_exists_detach(self, catalog, db_session):
        assert not await favorite_dao.exists(db_session, "5", 1)

        await favorite_dao.attach(db_session, "5", 1)
        assert await favorite_dao.exists(db_session, "5", 1)

        assert await favorite_dao.detach(db_session, "5", 1)
        assert not await favorite_dao.exists(db_session, "5", 1)

    async def test_detach_missing_edge_reports_nothing_removed(self, catalog, db_session):
        assert not await favorite_dao.detach(db_session, "5", 2)

    async def test_duplicate_edge_violates_primary_key(self, catalog, session_maker):
        async with session_maker() as session:
            await favorite_dao.attach(session, "5", 1)

        async with session_maker() as session:
            with pytest.raises(IntegrityError):
                await favorite_dao.attach(session, "5", 1)

    async def test_attach_unknown_product_violates_foreign_key(self, catalog, db_session):
        with pytest.raises(IntegrityError):
            await favorite_dao.attach(db_session, "5", 999)

        assert not await favorite_dao.exists(db_session, "5", 999)

    async def test_paginate_products_newest_first(self, catalog, db_session):
        db_session.add_all([
            UserFavoriteProduct(user_id="5", product_id=3, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            UserFavoriteProduct(user_id="5", product_id=1, created_at=datetime(2024, 2, 1, tzinfo=timezone.utc)),
            UserFavoriteProduct(user_id="6", product_id=2, created_at=datetime(2024, 3, 1, tzinfo=timezone.utc)),
        ])
        await db_session.commit()

        products, total = await favorite_dao.paginate_products(db_session, "5")

        assert total == 2
        assert [p.id for p in products] == [1, 3]

    async def test_paginate_products_pages(self, catalog, db_session):
        await favorite_dao.attach(db_session, "5", 3)
        await favorite_dao.attach(db_session, "5", 1)

        products, total = await favorite_dao.paginate_products(db_session, "5", skip=1, limit=1)

        assert total == 2
        assert len(products) == 1
