"""Quality engine composing classification, scoring, gating and notes."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Sequence

from .classification import QualityStatus, classify, matching_statuses
from .confidence import estimate_confidence
from .elite import DEFAULT_REMAP_POLICY, EliteGateResult, RemapPolicy, finalize_score
from .measurements import MeasurementRecord
from .notes import generate_notes
from .penalties import CappedScore, resolve_capped_score
from .profiles import Profile
from .scoring import DimensionScores, score_dimensions

PARALLEL_MIN_RECORDS = 10


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Intermediate scoring values kept for traceability."""

    dimensions: DimensionScores
    capped: CappedScore
    elite: EliteGateResult

    @property
    def raw_score(self) -> float:
        return self.dimensions.total


@dataclass(frozen=True, slots=True)
class QualityAnalysis:
    """Immutable result of analyzing one measurement record."""

    file_path: str
    profile: str
    status: QualityStatus
    score: int
    confidence: float
    notes: tuple[str, ...]
    breakdown: ScoreBreakdown
    measurements: MeasurementRecord

    def as_dict(self) -> dict[str, Any]:
        dimensions = self.breakdown.dimensions
        elite = self.breakdown.elite
        return {
            "file_path": self.file_path,
            "profile": self.profile,
            "status": self.status.value,
            "score": self.score,
            "confidence": self.confidence,
            "notes": list(self.notes),
            "breakdown": {
                "compliance": round(dimensions.compliance, 2),
                "dynamics": round(dimensions.dynamics, 2),
                "spectrum": round(dimensions.spectrum, 2),
                "authenticity": round(dimensions.authenticity, 2),
                "integrity": round(dimensions.integrity, 2),
                "raw_score": round(self.breakdown.raw_score, 2),
                "penalties": {p.code: p.points for p in self.breakdown.capped.penalties},
                "status_cap": self.breakdown.capped.cap,
                "capped_score": self.breakdown.capped.value,
                "elite_gate": {
                    "evaluated": elite.evaluated,
                    "passed": elite.passed,
                    "readiness": elite.readiness,
                    "failed_indicators": [i.name for i in elite.failed_indicators],
                },
            },
            "measurements": self.measurements.as_dict(),
        }


def analyze_record(
    record: MeasurementRecord,
    profile: Profile,
    remap_policy: RemapPolicy = DEFAULT_REMAP_POLICY,
) -> QualityAnalysis:
    """Classify and score a single record against ``profile``."""

    status = classify(record, profile)
    dimensions = score_dimensions(record, profile)
    capped = resolve_capped_score(dimensions.total, record, profile, status)
    elite = finalize_score(capped.value, record, profile, policy=remap_policy)
    notes = generate_notes(
        record,
        profile,
        status,
        matching_statuses(record, profile),
        capped=capped,
        elite=elite,
    )
    return QualityAnalysis(
        file_path=record.file_path,
        profile=profile.name,
        status=status,
        score=elite.final_score,
        confidence=estimate_confidence(record),
        notes=notes,
        breakdown=ScoreBreakdown(dimensions=dimensions, capped=capped, elite=elite),
        measurements=record,
    )


def analyze_records(
    records: Sequence[MeasurementRecord],
    profile: Profile,
    max_workers: int | None = None,
) -> list[QualityAnalysis]:
    """Analyze many records, preserving input order.

    Small batches run inline; larger ones are spread over a thread pool.
    """

    if len(records) < PARALLEL_MIN_RECORDS:
        return [analyze_record(record, profile) for record in records]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda record: analyze_record(record, profile), records))
