"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class SearchResponseDTO(BaseModel):
    answer: str
    sources: list[str] = Field(default_factory=list)
    mode: Literal["web", "direct"]

    @classmethod
    def from_context(cls, ctx):
        """Convert a finished SearchContext to DTO."""
        return cls(answer=ctx.answer.answer, sources=list(ctx.answer.sources), mode=ctx.mode.value)


class ErrorDTO(BaseModel):
    error: str
    kind: str | None = None


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
