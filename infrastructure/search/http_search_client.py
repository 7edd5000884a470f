"""Similarity search delegated to a remote vector-search service."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

import requests

from domain.entities import ContentChunkMatch, SearchRequest
from domain.interfaces import SimilaritySearchClient
from infrastructure.serialization import match_from_dict

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpSearchConfig:
    base_url: str | None = None
    path: str = "/api/search"
    timeout: float = 30.0
    api_key: str | None = None


class HttpSimilaritySearchClient(SimilaritySearchClient):
    """POSTs the query to ``{base_url}{path}`` and parses ``{distance, section}`` rows.

    Transport and HTTP errors are raised to the caller as ``requests`` exceptions.
    """

    def __init__(self, config: HttpSearchConfig, session: requests.Session | None = None) -> None:
        if not config.base_url:
            raise RuntimeError("Missing base URL for the remote search service.")
        self._config = config
        self._session = session or requests.Session()

    def search(
        self,
        query: str,
        *,
        limit: int,
        threshold: float | None = None,
        filters: SearchRequest | None = None,
    ) -> list[ContentChunkMatch]:
        payload: dict[str, object] = {"query": query, "limit": limit, "threshold": threshold}
        if filters is not None:
            payload.update({key: value for key, value in asdict(filters).items() if key != "query"})
        headers = {"Authorization": f"Bearer {self._config.api_key}"} if self._config.api_key else {}
        url = f"{self._config.base_url.rstrip('/')}{self._config.path}"
        logger.debug("POST %s (limit=%d)", url, limit)
        response = self._session.post(url, json=payload, headers=headers, timeout=self._config.timeout)
        response.raise_for_status()
        body = response.json()
        rows = body.get("results", []) if isinstance(body, dict) else body
        if not isinstance(rows, list):
            return []
        return [match_from_dict(row) for row in rows if isinstance(row, dict)]


__all__ = ["HttpSimilaritySearchClient", "HttpSearchConfig"]
