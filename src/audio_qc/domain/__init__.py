"""Domain layer: events emitted around the quality engine."""

from .events import AnalysisFailed, BatchAnalyzed, DomainEvent, RecordAnalyzed, RecordRejected

__all__ = [
    "DomainEvent",
    "RecordAnalyzed",
    "RecordRejected",
    "BatchAnalyzed",
    "AnalysisFailed",
]
