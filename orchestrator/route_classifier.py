"""
Route classifier: decides from the query text alone whether live web evidence is needed.

Pure and deterministic. Errs toward "web" whenever recency, comparison or
verifiability signals are present.
"""

import re
import sys
import unicodedata

from pydantic import ValidationError

from models.errors import QueryValidationError
from models.search import Mode, SearchInput
from orchestrator.routing_types import RouteDecision

LONG_QUERY_CHARS = 50

# every Unicode currency symbol (category Sc)
_CURRENCY_SYMBOLS = "".join(
    chr(cp) for cp in range(sys.maxunicode + 1) if unicodedata.category(chr(cp)) == "Sc"
)

# signal name -> patterns; any match routes the query to the web
WEB_SIGNALS: dict[str, list[re.Pattern]] = {
    "comparison": [
        re.compile(r"\btop[-\s]*\d+\b"),
        re.compile(r"\bbest\b"),
        re.compile(r"\brank(?:s|ed|ing|ings)?\b"),
        re.compile(r"\bwhich\s+is\s+better\b"),
        re.compile(r"\b(?:vs\.?|versus)\b"),
        re.compile(r"\bcompar(?:e[ds]?|ing|isons?)\b"),
    ],
    "pricing": [
        re.compile(r"\b(?:prices?|pricing|costs?|cheap(?:er|est)?|affordable)\b"),
        re.compile(r"\bunder\s*\d+(?:\s*k)?\b"),
        re.compile(rf"[{re.escape(_CURRENCY_SYMBOLS)}]\s*\d+"),
    ],
    "recency": [
        re.compile(r"\b(?:latest|today|now|current|currently)\b"),
        re.compile(r"\b(?:news|breaking|trending)\b"),
        re.compile(r"\b(?:release[ds]?|launch(?:e[ds])?|announce[ds]?|update[ds]?)\b"),
        re.compile(r"\b(?:changelog|release\s*notes?)\b"),
    ],
    "lifecycle": [
        re.compile(r"\b(?:deprecated|eol|end[\s-]*of[\s-]*life|sunset)\b"),
        re.compile(r"\broadmap\b"),
    ],
    "compatibility": [
        re.compile(r"\b(?:works\s+with|compatible\s+with|support(?:s|ed)?\s+on)\b"),
        re.compile(r"\binstall(?:s|ing|ation)?\b"),
    ],
    "locality": [
        re.compile(r"\b(?:near\s+me|nearby)\b"),
    ],
    "url": [
        re.compile(r"https?://\S+"),
        re.compile(r"\.(?:com|org|net|io|edu|gov)\b"),
    ],
    "reviews": [
        re.compile(r"\b(?:reviews?|ratings?)\b"),
        re.compile(r"\b(?:reddit|twitter|forums?)\b|\bx\.com\b"),
    ],
    "troubleshooting": [
        re.compile(r"\bhow\s+to\s+(?:setup|set\s+up|fix|build|configure)\b"),
        re.compile(r"\b(?:stuck\s+on|error\s+code)\b"),
    ],
}

RECENT_YEAR = re.compile(r"\b20(?:2[4-9]|3[0-9])\b")


def validate_query(query: object) -> str:
    """
    Return the trimmed query or raise QueryValidationError.

    Runs before any model or network call.
    """
    if not isinstance(query, str):
        raise QueryValidationError()
    trimmed = query.strip()
    try:
        SearchInput(query=trimmed)
    except ValidationError:
        raise QueryValidationError()
    return trimmed


def normalize_query(query: str) -> str:
    return query.strip().lower()


class RouteClassifier:
    def decide(self, query: str) -> RouteDecision:
        """Classify ``query`` and report which signal groups fired."""
        text = normalize_query(query)
        reasons: list[str] = []

        if len(text) > LONG_QUERY_CHARS:
            reasons.append("length")

        for signal, patterns in WEB_SIGNALS.items():
            if any(p.search(text) for p in patterns):
                reasons.append(signal)

        if RECENT_YEAR.search(text):
            reasons.append("recent_year")

        return RouteDecision(mode=Mode.WEB if reasons else Mode.DIRECT, reasons=reasons)

    def classify(self, query: str) -> Mode:
        return self.decide(query).mode
