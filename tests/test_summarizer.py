import asyncio

import pytest

from models.errors import SummarizationError
from orchestrator.prompts import SUMMARIZE_SYSTEM_PROMPT
from tests.fakes import FakeGateway
from tools.web.summarizer import PageSummarizer

LONG_TEXT = "Python 3.13 adds an experimental free-threaded build and a new interactive shell. " * 3


@pytest.mark.unit
def test_summarize_calls_model_with_page_text():
    gateway = FakeGateway("  Python 3.13 adds free threading.  ")

    summary = asyncio.run(PageSummarizer(gateway).summarize(LONG_TEXT))

    assert summary == "Python 3.13 adds free threading."
    call = gateway.calls[0]
    assert call["temperature"] == 0.2
    assert call["messages"][0].text == SUMMARIZE_SYSTEM_PROMPT
    assert call["messages"][1].text == LONG_TEXT.strip()


@pytest.mark.unit
def test_short_text_is_rejected_without_model_call():
    gateway = FakeGateway("unused")

    with pytest.raises(SummarizationError):
        asyncio.run(PageSummarizer(gateway).summarize("   too short   "))

    assert gateway.calls == []


@pytest.mark.unit
def test_long_text_is_truncated():
    gateway = FakeGateway("summary")

    asyncio.run(PageSummarizer(gateway, max_chars=60).summarize(LONG_TEXT))

    assert len(gateway.calls[0]["messages"][1].text) == 60


@pytest.mark.unit
def test_empty_summary_is_an_error():
    with pytest.raises(SummarizationError):
        asyncio.run(PageSummarizer(FakeGateway("   ")).summarize(LONG_TEXT))
