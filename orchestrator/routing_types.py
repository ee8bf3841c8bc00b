from dataclasses import dataclass, field

from models.search import Candidate, EvidenceResult, FallbackState, Mode, PageSummary, SearchAnswer


@dataclass(frozen=True)
class RouteDecision:
    mode: Mode
    reasons: list[str] = field(default_factory=list)


@dataclass
class SearchContext:
    """State carried through route -> dispatch -> finalize for one request."""

    query: str
    mode: Mode | None = None
    route_reasons: list[str] = field(default_factory=list)
    candidate: Candidate | None = None
    answer: SearchAnswer | None = None


@dataclass
class WebResearchState:
    """State carried through gather -> open_and_summarize -> synthesize."""

    query: str
    results: list[EvidenceResult] = field(default_factory=list)
    page_summaries: list[PageSummary] = field(default_factory=list)
    fallback: FallbackState | None = None
    failed_urls: list[str] = field(default_factory=list)
    candidate: Candidate | None = None
