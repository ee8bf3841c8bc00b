import asyncio
import time

import pytest

from api.base_client import BaseAIClient
from models.errors import ConfigurationError, ModelGatewayError
from models.unified_response import NormalizedError, UnifiedResponse, human, system
from orchestrator.model_gateway import ModelGateway, create_client


class FakeClient(BaseAIClient):
    provider_name = "fake"

    def __init__(self, text="hello", error=None, delay_s=0.0):
        super().__init__("fake-key", model_name="fake-model")
        self.text = text
        self.error = error
        self.delay_s = delay_s
        self.calls = []

    def get_completion(self, messages, **kwargs):
        self.calls.append((messages, kwargs))
        if self.delay_s:
            time.sleep(self.delay_s)
        if self.error:
            return self._create_error_response(
                request_id="req", error=self.error, latency_ms=1, model=self.model_name
            )
        return UnifiedResponse(
            request_id="req", text=self.text, provider=self.provider_name, model=self.model_name, latency_ms=1
        )


@pytest.mark.unit
def test_invoke_returns_text_and_passes_temperature(config):
    client = FakeClient(text="pong")
    gateway = ModelGateway(config, client=client)

    text = asyncio.run(gateway.invoke([system("be brief"), human("ping")], temperature=0.2))

    assert text == "pong"
    messages, kwargs = client.calls[0]
    assert [m.role for m in messages] == ["system", "human"]
    assert kwargs["temperature"] == 0.2


@pytest.mark.unit
def test_error_response_raises_gateway_error(config):
    error = NormalizedError(code="rate_limit", message="slow down", provider="fake", retryable=True)
    gateway = ModelGateway(config, client=FakeClient(error=error))

    with pytest.raises(ModelGatewayError) as exc_info:
        asyncio.run(gateway.invoke([human("ping")]))

    assert exc_info.value.error.code == "rate_limit"
    assert exc_info.value.retryable is True


@pytest.mark.unit
def test_slow_client_times_out(config):
    config.MODEL_TIMEOUT_S = 0.05
    gateway = ModelGateway(config, client=FakeClient(delay_s=0.3))

    with pytest.raises(ModelGatewayError) as exc_info:
        asyncio.run(gateway.invoke([human("ping")]))

    assert exc_info.value.error.code == "timeout"


@pytest.mark.unit
def test_gateway_uses_configured_provider_by_default(config):
    assert ModelGateway(config).provider == "openai"
    assert ModelGateway(config, provider="GROQ").provider == "groq"


@pytest.mark.unit
def test_create_client_rejects_unknown_provider(config):
    with pytest.raises(ConfigurationError):
        create_client(config, "llamafile")


@pytest.mark.unit
def test_create_client_requires_api_key(config):
    with pytest.raises(ConfigurationError):
        create_client(config, "deepseek")


@pytest.mark.unit
def test_create_client_builds_openai_compatible_clients(config):
    config.GROQ_API_KEY = "gsk-test"

    client = create_client(config, "groq")

    assert client.provider_name == "groq"
    assert client.model_name == "llama-3.3-70b-versatile"


@pytest.mark.unit
def test_base_client_maps_human_role_to_user():
    client = FakeClient()
    assert client._to_openai_messages([system("s"), human("h")]) == [
        {"role": "system", "content": "s"},
        {"role": "user", "content": "h"},
    ]
