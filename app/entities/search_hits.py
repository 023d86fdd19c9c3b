"""
SearchHits entity holding the part of a search-index response the catalog needs:
the matching product ids in relevance order and the total hit count.
"""

from typing import Any, Dict, List
from dataclasses import dataclass, field


@dataclass
class SearchHits:
    ids: List[int] = field(default_factory=list)
    total: int = 0

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'SearchHits':
        """Create SearchHits from a raw `_search` response body.

        `hits.total` is a plain integer on older clusters and
        `{"value": n, "relation": "eq"}` on 7.x and later; both are accepted.
        """
        hits = data.get("hits") or {}
        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)
        return cls(
            ids=[int(hit["_id"]) for hit in hits.get("hits", [])],
            total=int(total or 0),
        )
