"""
AnswerValidator - enforces the SearchAnswer schema on a strategy's candidate.

A candidate that already conforms is returned unchanged. Otherwise one
model-assisted repair pass reformats it; if that still does not conform,
SchemaRepairExhaustedError is raised. There is no second repair attempt.
"""

from typing import Any

from pydantic import ValidationError

from models.errors import SchemaRepairExhaustedError
from models.search import Candidate, SearchAnswer
from models.unified_response import human, system
from orchestrator.model_gateway import ModelGateway
from orchestrator.prompts import REPAIR_SYSTEM_PROMPT, build_repair_request
from utils.json_extract import extract_json_object
from utils.logger import get_logger

logger = get_logger(__name__)

REPAIR_TEMPERATURE = 0.3


def coerce_repaired(parsed: dict[str, Any]) -> dict[str, Any]:
    """Force the repair output into {answer: str, sources: list[str]}."""
    answer = parsed.get("answer")
    sources = parsed.get("sources")
    return {
        "answer": ("" if answer is None else str(answer)).strip(),
        "sources": [str(item) for item in sources] if isinstance(sources, list) else [],
    }


class AnswerValidator:
    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    async def finalize(self, candidate: Candidate) -> SearchAnswer:
        draft = {"answer": candidate.answer, "sources": list(candidate.sources or [])}

        try:
            return SearchAnswer.model_validate(draft)
        except ValidationError as e:
            logger.warning(
                "Candidate failed schema validation; attempting repair",
                extra={
                    "extra_fields": {
                        "mode": candidate.mode.value,
                        "error_count": e.error_count(),
                        "source_count": len(draft["sources"]),
                    }
                },
            )

        return await self._repair(draft)

    async def _repair(self, draft: dict[str, Any]) -> SearchAnswer:
        text = await self.gateway.invoke(
            [system(REPAIR_SYSTEM_PROMPT), human(build_repair_request(draft))],
            temperature=REPAIR_TEMPERATURE,
        )
        repaired = coerce_repaired(extract_json_object(text))

        try:
            answer = SearchAnswer.model_validate(repaired)
        except ValidationError as e:
            logger.error(
                "Schema repair exhausted",
                extra={"extra_fields": {"error_count": e.error_count(), "repaired_sources": len(repaired["sources"])}},
            )
            raise SchemaRepairExhaustedError(draft, repaired, str(e)) from e

        logger.info(
            "Schema repair succeeded",
            extra={"extra_fields": {"source_count": len(answer.sources)}},
        )
        return answer
