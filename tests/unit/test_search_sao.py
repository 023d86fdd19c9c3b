"""
Unit tests for the search index access object

The HTTP layer is replaced by httpx.MockTransport so no cluster is needed.
"""

import json

import httpx
import pytest

from app.entities.search_hits import SearchHits
from app.sao.search_sao import SearchSAO

pytestmark = pytest.mark.unit


def es_response(ids, total):
    return {
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": total,
            "max_score": 1.0,
            "hits": [{"_index": "products", "_id": str(i), "_score": 1.0} for i in ids],
        },
    }


class TestSearchHits:
    def test_integer_total(self):
        hits = SearchHits.from_response(es_response([3, 1, 2], 17))

        assert hits.ids == [3, 1, 2]
        assert hits.total == 17

    def test_object_total(self):
        hits = SearchHits.from_response(es_response([8], {"value": 42, "relation": "eq"}))

        assert hits.ids == [8]
        assert hits.total == 42

    def test_empty_response(self):
        hits = SearchHits.from_response({})

        assert hits.ids == []
        assert hits.total == 0


class TestSearchSAO:
    async def test_posts_body_to_index_search_endpoint(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=es_response([3, 1, 2], {"value": 17, "relation": "eq"}))

        sao = SearchSAO(
            base_url="http://search.test:9200/",
            index="products",
            transport=httpx.MockTransport(handler),
        )
        body = {"from": 0, "size": 10, "query": {"bool": {"filter": [{"term": {"on_sale": True}}]}}}

        hits = await sao.search(body)

        assert seen["method"] == "POST"
        assert seen["url"] == "http://search.test:9200/products/_search"
        assert seen["body"] == body
        assert hits.ids == [3, 1, 2]
        assert hits.total == 17

    async def test_sends_basic_auth_when_configured(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["authorization"] = request.headers.get("authorization")
            return httpx.Response(200, json=es_response([], 0))

        sao = SearchSAO(
            base_url="http://search.test:9200",
            index="products",
            username="elastic",
            password="secret",
            transport=httpx.MockTransport(handler),
        )

        await sao.search({"query": {"match_all": {}}})

        assert seen["authorization"].startswith("Basic ")

    async def test_error_status_is_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": "cluster unavailable"})

        sao = SearchSAO(
            base_url="http://search.test:9200",
            index="products",
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(httpx.HTTPStatusError):
            await sao.search({"query": {"match_all": {}}})
