"""Tavily search wrapper with async support."""

from __future__ import annotations

import logging
import os

from tavily import AsyncTavilyClient

logger = logging.getLogger(__name__)

MAX_QUERY_CHARS = 400  # Tavily rejects longer queries


class SearchClient:
    """Async Tavily search client used for originality checks."""

    def __init__(self, api_key: str | None = None):
        key = api_key or os.environ.get("TAVILY_API_KEY")
        if not key:
            raise ValueError(
                "Tavily API key required. Set TAVILY_API_KEY env var or pass api_key."
            )
        self.client = AsyncTavilyClient(api_key=key)
        self._search_count: int = 0

    async def search(
        self,
        query: str,
        max_results: int = 3,
        search_depth: str = "basic",
    ) -> list[dict]:
        """Search the web and return ``{title, url, content}`` dicts."""
        logger.info("Searching: %.80s", query)
        self._search_count += 1
        try:
            response = await self.client.search(
                query=query,
                max_results=max_results,
                search_depth=search_depth,
            )
        except Exception:
            logger.error("Search failed", exc_info=True)
            raise
        return [
            {
                "title": r.get("title", ""),
                "url": r.get("url", ""),
                "content": r.get("content", ""),
            }
            for r in response.get("results", [])
        ]

    async def search_phrase(
        self,
        phrase: str,
        max_results: int = 3,
        search_depth: str = "basic",
    ) -> list[dict]:
        """Exact-phrase search for a passage of the user's document."""
        phrase = " ".join(phrase.split())[: MAX_QUERY_CHARS - 2]
        return await self.search(
            f'"{phrase}"', max_results=max_results, search_depth=search_depth
        )

    def get_search_count(self) -> int:
        """Return accumulated search count and reset the counter."""
        count = self._search_count
        self._search_count = 0
        return count
