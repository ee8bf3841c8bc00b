"""
ModelGateway - async entry point for every language model call in the pipeline.

Provider clients are synchronous and never raise; the gateway runs them in the
default executor with a timeout and turns error responses into ModelGatewayError.
"""

import asyncio
import threading
import uuid

from api.base_client import BaseAIClient
from config.config import Config, ModelProvider
from models.errors import ConfigurationError, ModelGatewayError
from models.unified_response import ChatMessage, NormalizedError, UnifiedResponse
from utils.logger import get_logger

logger = get_logger(__name__)


def create_client(config: Config, provider: str) -> BaseAIClient:
    """Build the provider client selected by ``provider`` from explicit configuration."""
    provider = (provider or "").lower().strip()
    api_key = config.api_key_for(provider)
    model_name = config.model_for(provider)

    if provider not in {p.value for p in ModelProvider}:
        raise ConfigurationError(f"Unsupported model provider: {provider!r}")
    if not api_key:
        raise ConfigurationError(f"No API key configured for model provider {provider!r}")

    if provider == ModelProvider.OPENAI.value:
        from api.openai_client import OpenAIClient

        return OpenAIClient(api_key=api_key, model_name=model_name, timeout_s=config.MODEL_TIMEOUT_S)

    if provider == ModelProvider.GEMINI.value:
        from api.google_gemini_client import GeminiClient

        return GeminiClient(api_key=api_key, model_name=model_name)

    if provider == ModelProvider.DEEPSEEK.value:
        from api.deepseek_client import DeepSeekClient

        return DeepSeekClient(api_key=api_key, model_name=model_name, timeout_s=config.MODEL_TIMEOUT_S)

    from api.groq_client import GroqClient

    return GroqClient(api_key=api_key, model_name=model_name, timeout_s=config.MODEL_TIMEOUT_S)


class ModelGateway:
    """
    Role-tagged messages in, generated text out.

    Example usage:
        gateway = ModelGateway(config)
        text = await gateway.invoke([system("Be brief."), human("What is DNS?")], temperature=0.3)
    """

    def __init__(
        self,
        config: Config,
        provider: str | None = None,
        client: BaseAIClient | None = None,
    ):
        self.provider = (provider or config.MODEL_PROVIDER).lower()
        self.timeout_s = config.MODEL_TIMEOUT_S
        self._config = config
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> BaseAIClient:
        with self._client_lock:
            if self._client is None:
                self._client = create_client(self._config, self.provider)
            return self._client

    def _timeout_error(self) -> NormalizedError:
        return NormalizedError(
            code="timeout",
            message=f"Request timed out after {self.timeout_s}s",
            provider=self.provider,
            retryable=True,
            details={"timeout_seconds": self.timeout_s},
        )

    async def complete(self, messages: list[ChatMessage], temperature: float = 0.3) -> UnifiedResponse:
        """Run one completion and return the provider response, raising on any failure."""
        client = self.client
        loop = asyncio.get_running_loop()
        call_id = str(uuid.uuid4())

        try:
            response = await asyncio.wait_for(
                loop.run_in_executor(
                    None, lambda: client.get_completion(messages, temperature=temperature)
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError:
            error = self._timeout_error()
            logger.warning(
                f"Model call timed out for {self.provider}",
                extra={"extra_fields": {"call_id": call_id, "timeout_s": self.timeout_s}},
            )
            raise ModelGatewayError(error)

        if response.is_error:
            logger.error(
                f"Model call failed for {self.provider}: {response.error.code}",
                extra={
                    "extra_fields": {
                        "call_id": call_id,
                        "request_id": response.request_id,
                        "error_code": response.error.code,
                        "retryable": response.error.retryable,
                    }
                },
            )
            raise ModelGatewayError(response.error)

        return response

    async def invoke(self, messages: list[ChatMessage], temperature: float = 0.3) -> str:
        response = await self.complete(messages, temperature=temperature)
        return response.text or ""
