"""Tavily API search client.

Tavily returns ranked results with a cleaned content excerpt per page, which is
used as the result snippet.
"""

import asyncio

from models.search import EvidenceResult
from utils.logger import get_logger

from .search_clients import SearchClient

logger = get_logger(__name__)


class TavilySearchClient(SearchClient):
    provider_name = "tavily"

    def __init__(self, api_key: str, max_results: int = 10, search_depth: str = "advanced", client=None):
        """
        Initialize Tavily client.

        Args:
            api_key: Tavily API key
            max_results: Maximum number of results requested (capped at 10)
            search_depth: "basic" (faster) or "advanced" (deeper)
            client: Pre-built TavilyClient (tests inject a fake here)
        """
        super().__init__(max_results=max_results)
        self.search_depth = search_depth

        if client is None:
            if not api_key:
                raise ValueError("TAVILY_API_KEY is required for Tavily search")

            # Lazy import so tests don't need the tavily package unless they use it
            try:
                from tavily import TavilyClient
            except ModuleNotFoundError as e:
                raise ModuleNotFoundError(
                    "Optional dependency 'tavily' is not installed. "
                    "Install it to enable Tavily search: pip install tavily-python"
                ) from e

            client = TavilyClient(api_key=api_key)

        self.client = client
        logger.info("Tavily client initialized")

    def _search_sync(self, query: str) -> dict:
        return self.client.search(
            query=query,
            max_results=self.max_results,
            search_depth=self.search_depth,
            include_raw_content=False,  # pages are fetched separately
            include_answer=False,  # we generate our own answer
        )

    async def search(self, query: str) -> list[EvidenceResult]:
        logger.info(
            f"Tavily search: '{query[:100]}'",
            extra={"extra_fields": {"max_results": self.max_results, "depth": self.search_depth}},
        )

        try:
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(None, self._search_sync, query)
        except Exception as e:
            logger.error(f"❌ Tavily search failed: {e}", exc_info=True)
            return []

        items = response.get("results", []) if isinstance(response, dict) else []
        results = self._to_results(items, url_key="url", snippet_key="content")
        logger.info(f"✅ Tavily returned {len(results)} results")
        return results
