from models.errors import SummarizationError
from models.search import MIN_SUMMARIZE_CHARS
from models.unified_response import human, system
from orchestrator.model_gateway import ModelGateway
from orchestrator.prompts import SUMMARIZE_SYSTEM_PROMPT
from utils.logger import get_logger

logger = get_logger(__name__)

SUMMARY_TEMPERATURE = 0.2


class PageSummarizer:
    """Condenses page text into a short summary using the summarization model."""

    def __init__(self, gateway: ModelGateway, max_chars: int = 12000):
        self.gateway = gateway
        self.max_chars = max_chars

    async def summarize(self, content: str) -> str:
        text = (content or "").strip()
        if len(text) < MIN_SUMMARIZE_CHARS:
            raise SummarizationError("Need more text to summarize")

        if self.max_chars and len(text) > self.max_chars:
            text = text[: self.max_chars]

        summary = await self.gateway.invoke(
            [system(SUMMARIZE_SYSTEM_PROMPT), human(text)],
            temperature=SUMMARY_TEMPERATURE,
        )
        summary = (summary or "").strip()
        if not summary:
            raise SummarizationError("Model returned an empty summary")

        logger.debug(
            "Page summarized",
            extra={"extra_fields": {"input_chars": len(text), "summary_chars": len(summary)}},
        )
        return summary
