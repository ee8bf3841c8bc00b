"""Data contracts for the search pipeline."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator

MIN_QUERY_CHARS = 5
MAX_EVIDENCE_RESULTS = 10
MIN_SUMMARIZE_CHARS = 50

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_url(value: object) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        _url_adapter.validate_python(value)
    except ValueError:
        return False
    return True


def _check_url(value: str) -> str:
    # validate, but keep the caller's exact string (AnyUrl would normalize it)
    if not is_valid_url(value):
        raise ValueError(f"not a valid URL: {value!r}")
    return value


class Mode(str, Enum):
    WEB = "web"
    DIRECT = "direct"


class FallbackState(str, Enum):
    NO_RESULTS = "no-results"
    SNIPPETS = "snippets"
    NONE = "none"


class SearchInput(BaseModel):
    query: str = Field(..., min_length=MIN_QUERY_CHARS)


class EvidenceResult(BaseModel):
    title: str = Field(..., min_length=1)
    url: str
    snippet: str = ""

    @field_validator("url")
    @classmethod
    def _url(cls, value: str) -> str:
        return _check_url(value)

    @field_validator("snippet", mode="before")
    @classmethod
    def _snippet(cls, value):
        return "" if value is None else value


class OpenedPage(BaseModel):
    url: str
    content: str = Field(..., min_length=1)

    @field_validator("url")
    @classmethod
    def _url(cls, value: str) -> str:
        return _check_url(value)


class PageSummary(BaseModel):
    url: str
    summary: str = Field(..., min_length=1)

    @field_validator("url")
    @classmethod
    def _url(cls, value: str) -> str:
        return _check_url(value)


class SearchAnswer(BaseModel):
    """The public answer contract: a non-empty answer plus cited URLs."""

    answer: str = Field(..., min_length=1)
    sources: list[str] = Field(default_factory=list)

    @field_validator("sources")
    @classmethod
    def _sources(cls, value: list[str]) -> list[str]:
        return [_check_url(url) for url in value]


@dataclass
class Candidate:
    """Unvalidated answer produced by a strategy."""

    answer: str
    sources: list[str] = field(default_factory=list)
    mode: Mode = Mode.DIRECT
