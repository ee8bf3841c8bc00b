"""
Error types raised across the search pipeline.

Only QueryValidationError, ModelGatewayError and SchemaRepairExhaustedError are
meant to reach callers; page-level failures are absorbed by the web strategy.
"""

from typing import Any

from models.unified_response import NormalizedError

QUERY_TOO_SHORT_MESSAGE = "Please input a query..."


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""


class QueryValidationError(ValueError):
    """Raised when the query is missing, not a string, or too short."""

    def __init__(self, message: str = QUERY_TOO_SHORT_MESSAGE) -> None:
        self.message = message
        super().__init__(message)


class ModelGatewayError(RuntimeError):
    """Raised when the model provider cannot produce a completion."""

    def __init__(self, error: NormalizedError) -> None:
        self.error = error
        super().__init__(f"{error.provider} {error.code}: {error.message}")

    @property
    def retryable(self) -> bool:
        return self.error.retryable


class PageFetchError(Exception):
    """A single page could not be fetched or had no readable text."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class SummarizationError(Exception):
    """A single page could not be summarized."""


class SchemaRepairExhaustedError(Exception):
    """The one-shot repair pass still did not produce a valid answer."""

    kind = "schema_repair_exhausted"

    def __init__(self, draft: dict[str, Any], repaired: dict[str, Any], detail: str) -> None:
        self.draft = draft
        self.repaired = repaired
        self.detail = detail
        super().__init__(f"Answer failed schema validation after repair: {detail}")
