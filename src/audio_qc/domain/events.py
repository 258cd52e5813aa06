"""Domain event contracts for quality analysis runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class RecordAnalyzed(DomainEvent):
    """A single measurement record was classified and scored."""


@dataclass(frozen=True, slots=True)
class RecordRejected(DomainEvent):
    """A measurement entry failed validation and was skipped."""


@dataclass(frozen=True, slots=True)
class BatchAnalyzed(DomainEvent):
    """Every record of a batch was analyzed against one profile."""


@dataclass(frozen=True, slots=True)
class AnalysisFailed(DomainEvent):
    """An analysis run could not start or complete."""
