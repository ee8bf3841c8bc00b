"""
Web strategy: gather search results, open and summarize the top pages, then
synthesize a grounded answer from the summaries.

Degrades instead of failing: page-level errors are dropped, an all-failed batch
falls back to search snippets, and an empty evidence set falls back to a
direct answer.
"""

import asyncio

from pydantic import ValidationError

from models.search import (
    MAX_EVIDENCE_RESULTS,
    Candidate,
    EvidenceResult,
    FallbackState,
    Mode,
    PageSummary,
)
from models.unified_response import human, system
from orchestrator.direct_strategy import DirectStrategy
from orchestrator.model_gateway import ModelGateway
from orchestrator.prompts import SYNTHESIS_SYSTEM_PROMPT, build_synthesis_request
from orchestrator.routing_types import WebResearchState
from tools.web.evidence_source import EvidenceSource
from utils.logger import get_logger

logger = get_logger(__name__)

TOP_N_RESULTS = 5
SYNTHESIS_TEMPERATURE = 0.2


def coerce_results(raw: object) -> list[EvidenceResult]:
    """Accept only a list of well-formed results, capped at MAX_EVIDENCE_RESULTS."""
    if not isinstance(raw, list):
        return []

    results: list[EvidenceResult] = []
    for item in raw:
        if isinstance(item, EvidenceResult):
            results.append(item)
            continue
        try:
            results.append(EvidenceResult.model_validate(item))
        except ValidationError as e:
            logger.debug(
                "Dropping malformed search result",
                extra={"extra_fields": {"error_count": e.error_count()}},
            )
    return results[:MAX_EVIDENCE_RESULTS]


def snippet_summaries(results: list[EvidenceResult]) -> list[PageSummary]:
    """Build summaries from each result's snippet, else its title; drop results with neither."""
    summaries = []
    for result in results:
        text = (result.snippet or "").strip() or (result.title or "").strip()
        if text:
            summaries.append(PageSummary(url=result.url, summary=text))
    return summaries


class WebStrategy:
    def __init__(
        self,
        evidence: EvidenceSource,
        gateway: ModelGateway,
        direct: DirectStrategy,
        page_timeout_s: float | None = 15.0,
        top_n: int = TOP_N_RESULTS,
    ):
        self.evidence = evidence
        self.gateway = gateway
        self.direct = direct
        self.page_timeout_s = page_timeout_s
        self.top_n = top_n

    async def run(self, query: str) -> Candidate:
        state = WebResearchState(query=query)
        for step in (self.gather, self.open_and_summarize, self.synthesize):
            state = await step(state)
        return state.candidate

    # ---------- steps ----------

    async def gather(self, state: WebResearchState) -> WebResearchState:
        try:
            raw = await self.evidence.search(state.query)
        except Exception as e:
            logger.warning(
                "Web search failed; continuing without results",
                extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}},
            )
            raw = []
        state.results = coerce_results(raw)
        logger.info(
            "Web evidence gathered",
            extra={"extra_fields": {"result_count": len(state.results)}},
        )
        return state

    async def open_and_summarize(self, state: WebResearchState) -> WebResearchState:
        if not state.results:
            state.page_summaries = []
            state.fallback = FallbackState.NO_RESULTS
            logger.warning("No search results; skipping page summarization")
            return state

        top_results = state.results[: self.top_n]

        # gather keeps input order, so citations follow search rank
        outcomes = await asyncio.gather(
            *(self._summarize_result(result) for result in top_results),
            return_exceptions=True,
        )

        summaries: list[PageSummary] = []
        for result, outcome in zip(top_results, outcomes):
            if isinstance(outcome, PageSummary):
                summaries.append(outcome)
                continue
            if not isinstance(outcome, Exception):
                raise outcome
            state.failed_urls.append(result.url)
            logger.warning(
                f"Page skipped: {result.url}",
                extra={
                    "extra_fields": {
                        "url": result.url,
                        "error": str(outcome) or type(outcome).__name__,
                        "error_type": type(outcome).__name__,
                    }
                },
            )

        if summaries:
            state.page_summaries = summaries
            state.fallback = FallbackState.NONE
        else:
            state.page_summaries = snippet_summaries(top_results)
            state.fallback = FallbackState.SNIPPETS

        logger.info(
            f"Page summarization finished with fallback={state.fallback.value}",
            extra={
                "extra_fields": {
                    "attempted": len(top_results),
                    "summarized": len(summaries),
                    "failed": len(state.failed_urls),
                    "page_summaries": len(state.page_summaries),
                    "fallback": state.fallback.value,
                }
            },
        )
        return state

    async def synthesize(self, state: WebResearchState) -> WebResearchState:
        if not state.page_summaries:
            logger.info(
                "No usable web evidence; answering from internal knowledge",
                extra={"extra_fields": {"fallback": state.fallback.value if state.fallback else None}},
            )
            state.candidate = await self.direct.run(state.query)
            return state

        text = await self.gateway.invoke(
            [
                system(SYNTHESIS_SYSTEM_PROMPT),
                human(build_synthesis_request(state.query, state.page_summaries)),
            ],
            temperature=SYNTHESIS_TEMPERATURE,
        )
        state.candidate = Candidate(
            answer=text.strip(),
            sources=[page.url for page in state.page_summaries],
            mode=Mode.WEB,
        )
        return state

    # ---------- per-page work ----------

    async def _open_and_summarize(self, result: EvidenceResult) -> PageSummary:
        opened = await self.evidence.open(result.url)
        summary = await self.evidence.summarize(opened.content)
        return PageSummary(url=opened.url, summary=summary)

    async def _summarize_result(self, result: EvidenceResult) -> PageSummary:
        if not self.page_timeout_s:
            return await self._open_and_summarize(result)
        return await asyncio.wait_for(self._open_and_summarize(result), timeout=self.page_timeout_s)
