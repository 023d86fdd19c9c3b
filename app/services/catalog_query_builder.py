"""
Catalog search query construction.

Translates the customer-facing catalog parameters (free text, sort value,
category, page) into an Elasticsearch `_search` body. Malformed sort values
and unknown categories never raise; they simply leave the corresponding
clause out so the search falls back to relevance order over the whole
on-sale catalog.
"""

import copy
import re
from typing import Any, Dict, List, Optional, Tuple

from app.core.config import settings
from app.models.category import Category
from app.models.enums import SearchSortMetric, SortDirection

# Customer searches only ever see products that are on sale
ON_SALE_FILTER: Dict[str, Any] = {"term": {"on_sale": True}}

# Weighted fields every keyword is matched against
KEYWORD_FIELDS: Tuple[str, ...] = (
    "title^2",
    "long_title^2",
    "category^2",
    "skus.title^2",
    "description",
    "skus.description",
    "properties.value",
)

ORDER_PATTERN = re.compile(r"^(.+)_(asc|desc)$")


def parse_order(order: Optional[str]) -> Optional[Tuple[SearchSortMetric, SortDirection]]:
    """Parse `<metric>_<direction>`; anything unrecognised yields None."""
    if not order:
        return None
    match = ORDER_PATTERN.match(order)
    if not match:
        return None
    metric, direction = match.groups()
    if metric not in {m.value for m in SearchSortMetric}:
        return None
    return SearchSortMetric(metric), SortDirection(direction)


def split_keywords(search: Optional[str]) -> List[str]:
    if not search:
        return []
    return search.split()


class ProductSearchBuilder:
    """Builds the `_search` body for the product index step by step."""

    def __init__(self):
        self._from = 0
        self._size = settings.default_page_size
        self._filters: List[Dict[str, Any]] = [copy.deepcopy(ON_SALE_FILTER)]
        self._must: List[Dict[str, Any]] = []
        self._sort: List[Dict[str, str]] = []

    def paginate(self, page: int, page_size: int) -> "ProductSearchBuilder":
        page = max(page, 1)
        self._from = (page - 1) * page_size
        self._size = page_size
        return self

    def order_by(self, order: Optional[str]) -> "ProductSearchBuilder":
        parsed = parse_order(order)
        if parsed:
            metric, direction = parsed
            self._sort = [{metric.value: direction.value}]
        return self

    def category(self, category: Optional[Category]) -> "ProductSearchBuilder":
        if category is None:
            return self
        if category.is_directory:
            # Directory node: match it and every descendant through the path
            self._filters.append({"prefix": {"category_path": category.descendants_path_prefix}})
        else:
            self._filters.append({"term": {"category_id": category.id}})
        return self

    def keywords(self, search: Optional[str]) -> "ProductSearchBuilder":
        for keyword in split_keywords(search):
            self._must.append({
                "multi_match": {
                    "query": keyword,
                    "fields": list(KEYWORD_FIELDS),
                }
            })
        return self

    def build(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {"bool": {"filter": copy.deepcopy(self._filters)}}
        if self._must:
            query["bool"]["must"] = copy.deepcopy(self._must)

        body: Dict[str, Any] = {
            "from": self._from,
            "size": self._size,
            "query": query,
        }
        if self._sort:
            body["sort"] = copy.deepcopy(self._sort)
        return body
