"""End-to-end runs of the search pipeline with in-memory collaborators."""

import asyncio

import pytest

from models.errors import ModelGatewayError, QueryValidationError
from models.search import Mode, SearchAnswer
from orchestrator.core import SearchPipeline, build_pipeline
from tests.fakes import FakeEvidenceSource, FakeGateway, gateway_error, make_results


def _pipeline(gateway, evidence) -> SearchPipeline:
    return build_pipeline(gateway, evidence, page_timeout_s=1.0)


@pytest.mark.integration
def test_short_query_is_rejected_before_any_call():
    gateway = FakeGateway()
    evidence = FakeEvidenceSource(results=make_results(3))

    with pytest.raises(QueryValidationError):
        asyncio.run(_pipeline(gateway, evidence).search("hi"))

    assert gateway.calls == []
    assert evidence.search_calls == []


@pytest.mark.integration
def test_conceptual_query_answers_directly():
    gateway = FakeGateway("Self-balancing trees use rotations after inserts and deletes.")
    evidence = FakeEvidenceSource(results=make_results(3))

    ctx = asyncio.run(_pipeline(gateway, evidence).run("Explain how a binary search tree balances itself"))

    assert ctx.mode == Mode.DIRECT
    assert ctx.answer.sources == []
    assert len(gateway.calls) == 1
    assert evidence.search_calls == []


@pytest.mark.integration
def test_price_query_searches_and_cites_in_order():
    gateway = FakeGateway("The latest iPhone starts at $799 [1][2][3].")
    results = make_results(3)
    evidence = FakeEvidenceSource(results=results)

    ctx = asyncio.run(_pipeline(gateway, evidence).run("latest iPhone price"))

    assert ctx.mode == Mode.WEB
    assert {"pricing", "recency"} <= set(ctx.route_reasons)
    assert ctx.answer.sources == [r.url for r in results]
    assert evidence.opened == [r.url for r in results]
    assert len(gateway.calls) == 1


@pytest.mark.integration
def test_web_query_with_no_results_falls_back_to_direct_answer():
    gateway = FakeGateway("Based on what I know, it depends on the region.")
    evidence = FakeEvidenceSource(results=[])

    ctx = asyncio.run(_pipeline(gateway, evidence).run("current mortgage rates"))

    assert ctx.mode == Mode.WEB
    assert ctx.candidate.mode == Mode.DIRECT
    assert ctx.answer == SearchAnswer(answer="Based on what I know, it depends on the region.", sources=[])
    assert evidence.opened == []


@pytest.mark.integration
def test_budget_laptop_query_with_no_results_answers_without_sources():
    gateway = FakeGateway("Look for models with at least 8GB of RAM.")
    evidence = FakeEvidenceSource(results=[])

    ctx = asyncio.run(_pipeline(gateway, evidence).run("top 10 budget laptops under 500"))

    assert ctx.mode == Mode.WEB
    assert {"comparison", "pricing"} <= set(ctx.route_reasons)
    assert evidence.search_calls == ["top 10 budget laptops under 500"]
    assert ctx.answer.sources == []
    assert len(gateway.calls) == 1


@pytest.mark.integration
def test_search_backend_failure_still_answers():
    class FailingSearchSource(FakeEvidenceSource):
        async def search(self, query):
            raise RuntimeError("search backend down")

    ctx = asyncio.run(_pipeline(FakeGateway("From memory."), FailingSearchSource()).run("latest gadget news"))

    assert ctx.mode == Mode.WEB
    assert ctx.candidate.mode == Mode.DIRECT
    assert ctx.answer == SearchAnswer(answer="From memory.", sources=[])


@pytest.mark.integration
def test_model_unavailable_surfaces_as_gateway_error():
    with pytest.raises(ModelGatewayError):
        asyncio.run(_pipeline(FakeGateway(gateway_error("auth")), FakeEvidenceSource()).search("what is a monad"))


@pytest.mark.integration
def test_empty_model_answer_goes_through_repair():
    gateway = FakeGateway("   ", '{"answer": "Repaired answer", "sources": []}')

    answer = asyncio.run(_pipeline(gateway, FakeEvidenceSource()).search("what is a monad"))

    assert answer.answer == "Repaired answer"
    assert len(gateway.calls) == 2


@pytest.mark.integration
def test_search_sync_runs_without_an_event_loop():
    gateway = FakeGateway("A monad is a monoid in the category of endofunctors.")

    answer = _pipeline(gateway, FakeEvidenceSource()).search_sync("what is a monad")

    assert answer.sources == []


@pytest.mark.integration
def test_search_sync_works_inside_a_running_loop():
    pipeline = _pipeline(FakeGateway("Answer."), FakeEvidenceSource())

    async def call_sync():
        return pipeline.search_sync("what is a monad")

    assert asyncio.run(call_sync()).answer == "Answer."
