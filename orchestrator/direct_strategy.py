from models.search import Candidate, Mode
from models.unified_response import human, system
from orchestrator.model_gateway import ModelGateway
from orchestrator.prompts import DIRECT_SYSTEM_PROMPT
from utils.logger import get_logger

logger = get_logger(__name__)

DIRECT_TEMPERATURE = 0.3


class DirectStrategy:
    """Answers from the model's internal knowledge with a single model call."""

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    async def run(self, query: str) -> Candidate:
        text = await self.gateway.invoke(
            [system(DIRECT_SYSTEM_PROMPT), human(query)],
            temperature=DIRECT_TEMPERATURE,
        )
        answer = text.strip()
        logger.info(
            "Direct answer generated",
            extra={"extra_fields": {"answer_chars": len(answer)}},
        )
        return Candidate(answer=answer, sources=[], mode=Mode.DIRECT)
