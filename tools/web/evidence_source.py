"""Web evidence source: search, page opening and page summarization behind one interface."""

from abc import ABC, abstractmethod

from models.search import EvidenceResult, OpenedPage

from .page_reader import PageReader
from .search_clients import SearchClient
from .summarizer import PageSummarizer


class EvidenceSource(ABC):
    """
    What the web strategy needs from the outside world.

    ``search`` never raises (failures come back as an empty list); ``open`` and
    ``summarize`` raise per item and the caller isolates those failures.
    """

    @abstractmethod
    async def search(self, query: str) -> list[EvidenceResult]:
        ...

    @abstractmethod
    async def open(self, url: str) -> OpenedPage:
        ...

    @abstractmethod
    async def summarize(self, content: str) -> str:
        ...


class WebEvidenceSource(EvidenceSource):
    def __init__(self, search_client: SearchClient, reader: PageReader, summarizer: PageSummarizer):
        self.search_client = search_client
        self.reader = reader
        self.summarizer = summarizer

    async def search(self, query: str) -> list[EvidenceResult]:
        return await self.search_client.search(query)

    async def open(self, url: str) -> OpenedPage:
        return await self.reader.open(url)

    async def summarize(self, content: str) -> str:
        return await self.summarizer.summarize(content)
