import time

import openai

from models.unified_response import ChatMessage, TokenUsage, UnifiedResponse
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class OpenAIClient(BaseAIClient):
    """
    Chat-completions client returning UnifiedResponse.

    Also serves OpenAI-compatible providers: subclasses only change
    ``provider_name``, ``base_url`` and the default model.
    """

    provider_name = "openai"
    base_url: str | None = None
    default_model = "gpt-4o-mini"

    def __init__(self, api_key: str, model_name: str | None = None, timeout_s: float = 60.0, **kwargs):
        """
        Initialize the client.

        Args:
            api_key: Provider API key
            model_name: Model to use (defaults to the class default)
            timeout_s: HTTP timeout handed to the SDK
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        self.model_name = model_name or self.default_model
        self.client = openai.OpenAI(api_key=api_key, base_url=self.base_url, timeout=timeout_s)

    def get_completion(self, messages: list[ChatMessage], **kwargs) -> UnifiedResponse:
        """
        Get a completion from a chat-completions endpoint.

        IMPORTANT: Never raises exceptions - returns UnifiedResponse with error instead
        """
        request_id = self._generate_request_id()
        start_time = time.time()

        model = kwargs.get("model", self.model_name)
        temperature = kwargs.get("temperature", 0.3)
        max_tokens = kwargs.get("max_tokens", 1024)

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=self._to_openai_messages(messages),
                temperature=temperature,
                max_tokens=max_tokens,
            )

            latency_ms = self._measure_latency(start_time)
            choice = response.choices[0] if response.choices else None
            text = (choice.message.content if choice else None) or ""

            usage = getattr(response, "usage", None)
            token_usage = TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            )

            logger.info(
                f"{self.provider_name} completion successful",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "latency_ms": latency_ms,
                        "tokens": token_usage.total_tokens,
                    }
                },
            )

            return UnifiedResponse(
                request_id=request_id,
                text=text,
                provider=self.provider_name,
                model=model,
                latency_ms=latency_ms,
                token_usage=token_usage,
                finish_reason=self._normalize_finish_reason(choice.finish_reason if choice else None),
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            error = self._normalize_error(e)

            logger.error(
                f"{self.provider_name} completion failed: {error.code}",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "error_code": error.code,
                        "error_message": error.message,
                        "retryable": error.retryable,
                    }
                },
            )

            return self._create_error_response(
                request_id=request_id, error=error, latency_ms=latency_ms, model=model
            )
