"""Provider adapters return UnifiedResponse and never raise; SDK objects are faked."""

from types import SimpleNamespace

import pytest

from api.deepseek_client import DeepSeekClient
from api.google_gemini_client import GeminiClient
from api.openai_client import OpenAIClient
from models.unified_response import human, system


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.response


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = None

    def generate_content(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.response


class RateLimitError(Exception):
    status_code = 429


def _openai_client(completions):
    client = OpenAIClient(api_key="sk-test")
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


def _gemini_client(models):
    client = GeminiClient(api_key="g-test")
    client.client = SimpleNamespace(models=models)
    return client


@pytest.mark.unit
def test_openai_success_maps_text_usage_and_roles():
    completions = FakeCompletions(
        SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="Hi there"), finish_reason="stop")],
            usage=SimpleNamespace(prompt_tokens=5, completion_tokens=2, total_tokens=7),
        )
    )

    response = _openai_client(completions).get_completion([system("be kind"), human("hello")], temperature=0.2)

    assert response.is_error is False
    assert response.text == "Hi there"
    assert response.finish_reason == "stop"
    assert response.token_usage.total_tokens == 7
    assert completions.kwargs["temperature"] == 0.2
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "be kind"},
        {"role": "user", "content": "hello"},
    ]


@pytest.mark.unit
def test_openai_failure_is_normalized_not_raised():
    response = _openai_client(FakeCompletions(error=RateLimitError("Too many requests"))).get_completion(
        [human("hello")]
    )

    assert response.is_error
    assert response.error.code == "rate_limit"
    assert response.error.retryable is True
    assert response.finish_reason == "error"


@pytest.mark.unit
def test_deepseek_uses_its_own_endpoint_and_model():
    client = DeepSeekClient(api_key="ds-test")

    assert client.provider_name == "deepseek"
    assert client.model_name == "deepseek-chat"
    assert str(client.client.base_url).startswith("https://api.deepseek.com/v1")


@pytest.mark.unit
def test_gemini_sends_system_messages_as_instruction():
    models = FakeModels(
        SimpleNamespace(
            text="Bonjour",
            usage_metadata=SimpleNamespace(prompt_token_count=3, candidates_token_count=1, total_token_count=4),
            candidates=[SimpleNamespace(finish_reason=SimpleNamespace(name="STOP"))],
        )
    )

    response = _gemini_client(models).get_completion([system("translate"), human("hello")])

    assert response.text == "Bonjour"
    assert response.finish_reason == "stop"
    assert models.kwargs["contents"] == "hello"
    assert models.kwargs["config"]["system_instruction"] == "translate"


@pytest.mark.unit
def test_gemini_failure_is_normalized_not_raised():
    response = _gemini_client(FakeModels(error=TimeoutError("timed out"))).get_completion([human("hello")])

    assert response.is_error
    assert response.error.code == "timeout"


@pytest.mark.unit
def test_missing_api_key_is_rejected():
    with pytest.raises(ValueError):
        OpenAIClient(api_key="")
