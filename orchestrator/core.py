"""
SearchPipeline - core business logic layer.

query -> route -> dispatch -> finalize -> SearchAnswer

Key guarantees:
- The query is validated before any model or network call
- Exactly one strategy runs per request
- The returned answer always conforms to SearchAnswer, or an error is raised
- Each request is stateless; nothing is shared between calls except clients
"""

import asyncio
import concurrent.futures
import time
import uuid

from config.config import Config
from models.search import SearchAnswer
from orchestrator.answer_validator import AnswerValidator
from orchestrator.branch import BranchDispatcher
from orchestrator.direct_strategy import DirectStrategy
from orchestrator.model_gateway import ModelGateway
from orchestrator.route_classifier import RouteClassifier, validate_query
from orchestrator.routing_types import SearchContext
from orchestrator.web_strategy import WebStrategy
from tools.web.evidence_source import EvidenceSource
from utils.logger import get_logger

logger = get_logger(__name__)


class SearchPipeline:
    def __init__(
        self,
        classifier: RouteClassifier,
        dispatcher: BranchDispatcher,
        validator: AnswerValidator,
    ):
        self.classifier = classifier
        self.dispatcher = dispatcher
        self.validator = validator

    # ---------- steps ----------

    async def route(self, ctx: SearchContext) -> SearchContext:
        decision = self.classifier.decide(ctx.query)
        ctx.mode = decision.mode
        ctx.route_reasons = list(decision.reasons)
        logger.info(
            f"Query routed to {decision.mode.value}",
            extra={"extra_fields": {"mode": decision.mode.value, "reasons": decision.reasons}},
        )
        return ctx

    async def dispatch(self, ctx: SearchContext) -> SearchContext:
        ctx.candidate = await self.dispatcher.dispatch(ctx.query, ctx.mode)
        return ctx

    async def finalize(self, ctx: SearchContext) -> SearchContext:
        ctx.answer = await self.validator.finalize(ctx.candidate)
        return ctx

    # ---------- entry points ----------

    async def run(self, query: object) -> SearchContext:
        """
        Run the full pipeline and return the finished context.

        Raises:
            QueryValidationError: query missing or too short
            ModelGatewayError: the answering model is unavailable
            SchemaRepairExhaustedError: the answer could not be repaired
        """
        ctx = SearchContext(query=validate_query(query))
        request_id = str(uuid.uuid4())
        start = time.perf_counter()

        for step in (self.route, self.dispatch, self.finalize):
            ctx = await step(ctx)

        logger.info(
            f"Search answered via {ctx.mode.value}",
            extra={
                "extra_fields": {
                    "request_id": request_id,
                    "mode": ctx.mode.value,
                    "route_reasons": ctx.route_reasons,
                    "source_count": len(ctx.answer.sources),
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                }
            },
        )
        return ctx

    async def search(self, query: object) -> SearchAnswer:
        ctx = await self.run(query)
        return ctx.answer

    def search_sync(self, query: object) -> SearchAnswer:
        """
        Synchronous wrapper for search.

        Handles the case where an event loop is already running by
        executing in a separate thread with its own loop.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.search(query))

        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(asyncio.run, self.search(query))
            return future.result()


def build_pipeline(
    answer_gateway: ModelGateway,
    evidence: EvidenceSource,
    page_timeout_s: float | None = 15.0,
) -> SearchPipeline:
    """Wire the pipeline from its collaborators. Tests pass fakes here."""
    direct = DirectStrategy(answer_gateway)
    web = WebStrategy(evidence, answer_gateway, direct, page_timeout_s=page_timeout_s)
    return SearchPipeline(
        classifier=RouteClassifier(),
        dispatcher=BranchDispatcher(direct, web),
        validator=AnswerValidator(answer_gateway),
    )


def create_pipeline(config: Config) -> SearchPipeline:
    """Build the production pipeline: MODEL_PROVIDER answers, RAG_MODEL_PROVIDER summarizes pages."""
    from tools.web.factory import create_evidence_source

    answer_gateway = ModelGateway(config, provider=config.MODEL_PROVIDER)
    evidence = create_evidence_source(config)
    logger.info(f"Search pipeline ready: {config.get_model_info()}")
    return build_pipeline(answer_gateway, evidence, page_timeout_s=config.PAGE_TIMEOUT_S)
