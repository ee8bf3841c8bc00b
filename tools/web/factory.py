"""Factory for building the web evidence source from configuration."""

from config.config import Config, SearchProvider
from models.errors import ConfigurationError
from orchestrator.model_gateway import ModelGateway
from utils.logger import get_logger

from .evidence_source import WebEvidenceSource
from .page_reader import PageReader
from .search_clients import SearchClient
from .summarizer import PageSummarizer

logger = get_logger(__name__)


def create_search_client(config: Config) -> SearchClient:
    """
    Create the search client selected by SEARCH_PROVIDER.

    Raises:
        ConfigurationError: If the provider is unknown or its credentials are missing
    """
    provider = (config.SEARCH_PROVIDER or "").lower()

    if provider == SearchProvider.TAVILY.value:
        if not config.TAVILY_API_KEY:
            raise ConfigurationError("TAVILY_API_KEY not set in environment")
        from .tavily_client import TavilySearchClient

        logger.info("Using Tavily for web search")
        return TavilySearchClient(api_key=config.TAVILY_API_KEY)

    if provider == SearchProvider.GOOGLE.value:
        if not config.GOOGLE_SEARCH_API_KEY or not config.GOOGLE_SEARCH_ENGINE_ID:
            raise ConfigurationError("GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_ENGINE_ID must both be set")
        from .google_search_client import GoogleSearchClient

        logger.info("Using Google Programmable Search for web search")
        return GoogleSearchClient(
            api_key=config.GOOGLE_SEARCH_API_KEY,
            engine_id=config.GOOGLE_SEARCH_ENGINE_ID,
        )

    raise ConfigurationError(f"Unsupported search provider: {provider!r}")


def create_evidence_source(config: Config, summarizer_gateway: ModelGateway | None = None) -> WebEvidenceSource:
    """Wire search, page reading and summarization; summaries use RAG_MODEL_PROVIDER."""
    gateway = summarizer_gateway or ModelGateway(config, provider=config.RAG_MODEL_PROVIDER)
    return WebEvidenceSource(
        search_client=create_search_client(config),
        reader=PageReader(timeout_s=config.PAGE_TIMEOUT_S),
        summarizer=PageSummarizer(gateway, max_chars=config.FETCH_MAX_CHARS),
    )
