"""Web evidence tools: search providers, page reading and summarization."""

from .evidence_source import EvidenceSource, WebEvidenceSource
from .factory import create_evidence_source, create_search_client

__all__ = ["EvidenceSource", "WebEvidenceSource", "create_evidence_source", "create_search_client"]
