import time
import uuid
from abc import ABC, abstractmethod
from typing import Any

from models.unified_response import ChatMessage, NormalizedError, UnifiedResponse


class BaseAIClient(ABC):
    """
    Abstract base class for language model provider clients.

    Subclasses implement ``get_completion`` and must never raise: every failure is
    returned as a UnifiedResponse carrying a NormalizedError.
    """

    provider_name: str = "unknown"

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
        """
        if not api_key:
            raise ValueError(f"API key is required for {self.provider_name}")
        self.api_key = api_key
        self.model_name = kwargs.get("model_name")

    @abstractmethod
    def get_completion(self, messages: list[ChatMessage], **kwargs) -> UnifiedResponse:
        """
        Get a completion for an ordered list of role-tagged messages.

        Args:
            messages: system/human messages, in order
            **kwargs: Additional parameters for the API call
                - temperature: sampling temperature
                - max_tokens: maximum number of tokens to generate

        Returns:
            UnifiedResponse with either text or error set
        """

    # ---------- helpers shared by provider adapters ----------

    def _generate_request_id(self) -> str:
        return str(uuid.uuid4())

    def _measure_latency(self, start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    def _to_openai_messages(self, messages: list[ChatMessage]) -> list[dict[str, str]]:
        """Map system/human messages onto the chat-completions role names."""
        if not messages:
            raise ValueError("At least one message is required")
        role_map = {"system": "system", "human": "user"}
        return [{"role": role_map[m.role], "content": m.text} for m in messages]

    def _normalize_finish_reason(self, reason: Any) -> str | None:
        if reason is None:
            return None
        value = str(reason).lower()
        if value in {"stop", "end_turn", "finish_reason_stop"}:
            return "stop"
        if value in {"length", "max_tokens", "finish_reason_max_tokens"}:
            return "length"
        if value in {"tool_calls", "function_call", "tool"}:
            return "tool"
        if value in {"content_filter", "safety", "recitation", "blocklist", "prohibited_content"}:
            return "content_filter"
        return value

    def _normalize_error(self, exc: Exception) -> NormalizedError:
        """Classify a provider exception into a stable error code."""
        name = type(exc).__name__.lower()
        message = str(exc) or type(exc).__name__
        lowered = message.lower()
        status = getattr(exc, "status_code", None) or getattr(exc, "code", None)

        if "timeout" in name or "timed out" in lowered:
            code, retryable = "timeout", True
        elif status == 429 or "ratelimit" in name or "rate limit" in lowered or "quota" in lowered:
            code, retryable = "rate_limit", True
        elif status in (401, 403) or "authentication" in name or "permissiondenied" in name or "api key" in lowered:
            code, retryable = "auth", False
        elif status in (400, 404, 422) or "badrequest" in name or "notfound" in name:
            code, retryable = "bad_request", False
        elif (isinstance(status, int) and status >= 500) or "connection" in name or "apierror" in name:
            code, retryable = "provider_error", True
        else:
            code, retryable = "unknown", False

        return NormalizedError(
            code=code,
            message=message,
            provider=self.provider_name,
            retryable=retryable,
            details={"exception_type": type(exc).__name__},
        )

    def _create_error_response(
        self, *, request_id: str, error: NormalizedError, latency_ms: int, model: str
    ) -> UnifiedResponse:
        return UnifiedResponse(
            request_id=request_id,
            text="",
            provider=self.provider_name,
            model=model,
            latency_ms=latency_ms,
            finish_reason="error",
            error=error,
        )
