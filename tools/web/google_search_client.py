"""Google Programmable Search (Custom Search JSON API) client."""

import httpx

from models.search import EvidenceResult
from utils.logger import get_logger

from .search_clients import SearchClient

logger = get_logger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
DEFAULT_TIMEOUT_S = 8.0


class GoogleSearchClient(SearchClient):
    provider_name = "google"

    def __init__(
        self,
        api_key: str,
        engine_id: str,
        max_results: int = 10,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(max_results=max_results)
        if not api_key or not engine_id:
            raise ValueError("GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_ENGINE_ID are required for Google search")
        self.api_key = api_key
        self.engine_id = engine_id
        self.timeout_s = timeout_s
        self._transport = transport

    async def search(self, query: str) -> list[EvidenceResult]:
        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            "num": self.max_results,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.get(GOOGLE_SEARCH_URL, params=params)
                response.raise_for_status()
                payload = response.json() if response.content else {}
        except Exception as exc:
            logger.warning(
                "Google search failed",
                extra={"extra_fields": {"error": str(exc), "error_type": type(exc).__name__}},
            )
            return []

        items = payload.get("items") if isinstance(payload, dict) else None
        results = self._to_results(items or [], url_key="link", snippet_key="snippet")
        logger.info(
            f"Google returned {len(results)} results",
            extra={"extra_fields": {"result_count": len(results)}},
        )
        return results
