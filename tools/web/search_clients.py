"""Common interface for web search providers."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from models.search import MAX_EVIDENCE_RESULTS, EvidenceResult
from utils.logger import get_logger

logger = get_logger(__name__)


class SearchClient(ABC):
    """A search provider. ``search`` never raises; failures return an empty list."""

    provider_name = "unknown"

    def __init__(self, max_results: int = MAX_EVIDENCE_RESULTS):
        self.max_results = max(1, min(int(max_results), MAX_EVIDENCE_RESULTS))

    @abstractmethod
    async def search(self, query: str) -> list[EvidenceResult]:
        ...

    def _to_results(self, items: list[dict[str, Any]], *, url_key: str, snippet_key: str) -> list[EvidenceResult]:
        """Validate raw provider items, dropping the malformed ones."""
        results: list[EvidenceResult] = []
        for item in items or []:
            url = str(item.get(url_key) or "").strip()
            title = str(item.get("title") or "").strip() or url
            try:
                results.append(
                    EvidenceResult(title=title, url=url, snippet=str(item.get(snippet_key) or "").strip())
                )
            except ValidationError:
                logger.debug(
                    f"Dropping {self.provider_name} result with invalid url",
                    extra={"extra_fields": {"url": url}},
                )
            if len(results) >= self.max_results:
                break
        return results
