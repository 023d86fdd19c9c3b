from __future__ import annotations

import httpx
import structlog
from typing import Any, Dict, Optional

from app.core.config import settings
from app.entities.search_hits import SearchHits


class SearchSAO:
    """Service Access Object for the product search index (Elasticsearch REST API)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        index: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        request_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or settings.elasticsearch_url).rstrip("/")
        self._index = index or settings.elasticsearch_index
        self._username = username or settings.elasticsearch_username
        self._password = password or settings.elasticsearch_password
        self._timeout = request_timeout or settings.elasticsearch_timeout
        self._transport = transport
        self._logger = structlog.get_logger().bind(component="SearchSAO")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def index(self) -> str:
        return self._index

    def _auth(self) -> Optional[httpx.BasicAuth]:
        if self._username and self._password:
            return httpx.BasicAuth(self._username, self._password)
        return None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            auth=self._auth(),
            transport=self._transport,
        )

    async def search(self, body: Dict[str, Any]) -> SearchHits:
        """Run a `_search` request against the product index."""
        url = f"/{self.index}/_search"
        async with self._client() as client:
            response = await client.post(url, json=body)

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                self._logger.error(
                    "Search request failed",
                    index=self.index,
                    status_code=exc.response.status_code,
                    response_body=exc.response.text,
                )
                raise

            hits = SearchHits.from_response(response.json())
            self._logger.debug("Search request completed", index=self.index, hit_count=len(hits.ids), total=hits.total)
            return hits


search_sao = SearchSAO()
