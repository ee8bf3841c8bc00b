"""
Models package: model responses, search contracts and error types.
"""

from .search import (
    Candidate,
    EvidenceResult,
    FallbackState,
    Mode,
    OpenedPage,
    PageSummary,
    SearchAnswer,
    SearchInput,
)
from .unified_response import ChatMessage, NormalizedError, TokenUsage, UnifiedResponse

__all__ = [
    "Candidate",
    "ChatMessage",
    "EvidenceResult",
    "FallbackState",
    "Mode",
    "NormalizedError",
    "OpenedPage",
    "PageSummary",
    "SearchAnswer",
    "SearchInput",
    "TokenUsage",
    "UnifiedResponse",
]
