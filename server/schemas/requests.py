"""Pydantic request models for FastAPI endpoints."""

from pydantic import BaseModel, Field

MAX_QUERY_CHARS = 2000


class SearchRequest(BaseModel):
    # Minimum length is enforced by the pipeline so the error message stays uniform
    query: str = Field(..., max_length=MAX_QUERY_CHARS)
