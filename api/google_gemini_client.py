import time

from google import genai

from models.unified_response import ChatMessage, TokenUsage, UnifiedResponse
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class GeminiClient(BaseAIClient):
    """
    A client for the Google Gemini API using the google.genai package.

    System messages are sent as the system instruction; human messages become
    the user content, in order.
    """

    provider_name = "gemini"

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash", **kwargs):
        """
        Initialize the Gemini client.

        Args:
            api_key: The Google Gemini API key
            model_name: The name of the model to use (default: gemini-2.5-flash)
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name

    def _split_messages(self, messages: list[ChatMessage]) -> tuple[str | None, str]:
        if not messages:
            raise ValueError("At least one message is required")
        system_parts = [m.text for m in messages if m.role == "system"]
        human_parts = [m.text for m in messages if m.role == "human"]
        system_instruction = "\n\n".join(system_parts) if system_parts else None
        return system_instruction, "\n\n".join(human_parts)

    def get_completion(self, messages: list[ChatMessage], **kwargs) -> UnifiedResponse:
        """
        Get a completion from the Gemini API.

        IMPORTANT: Never raises exceptions - returns UnifiedResponse with error instead
        """
        request_id = self._generate_request_id()
        start_time = time.time()

        model_name = kwargs.get("model", self.model_name)
        temperature = kwargs.get("temperature", 0.3)
        max_output_tokens = kwargs.get("max_tokens", 1024)

        try:
            system_instruction, contents = self._split_messages(messages)
            config = {
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            }
            if system_instruction:
                config["system_instruction"] = system_instruction

            response = self.client.models.generate_content(
                model=model_name,
                contents=contents,
                config=config,
            )

            latency_ms = self._measure_latency(start_time)
            text = getattr(response, "text", None) or ""

            usage_metadata = getattr(response, "usage_metadata", None)
            token_usage = TokenUsage(
                prompt_tokens=getattr(usage_metadata, "prompt_token_count", 0) or 0,
                completion_tokens=getattr(usage_metadata, "candidates_token_count", 0) or 0,
                total_tokens=getattr(usage_metadata, "total_token_count", 0) or 0,
            )

            finish_reason = None
            candidates = getattr(response, "candidates", None) or []
            if candidates:
                raw_reason = getattr(candidates[0], "finish_reason", None)
                finish_reason = getattr(raw_reason, "name", raw_reason)

            logger.info(
                "Gemini completion successful",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model_name,
                        "latency_ms": latency_ms,
                        "tokens": token_usage.total_tokens,
                    }
                },
            )

            return UnifiedResponse(
                request_id=request_id,
                text=text,
                provider=self.provider_name,
                model=model_name,
                latency_ms=latency_ms,
                token_usage=token_usage,
                finish_reason=self._normalize_finish_reason(finish_reason),
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            error = self._normalize_error(e)

            logger.error(
                f"Gemini completion failed: {error.code}",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model_name,
                        "error_code": error.code,
                        "error_message": error.message,
                        "retryable": error.retryable,
                    }
                },
            )

            return self._create_error_response(
                request_id=request_id, error=error, latency_ms=latency_ms, model=model_name
            )
