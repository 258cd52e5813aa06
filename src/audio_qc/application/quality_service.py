"""Application services orchestrating quality analysis use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from audio_qc.application.event_publisher import EventPublisher, NullEventPublisher
from audio_qc.domain.events import AnalysisFailed, BatchAnalyzed, RecordAnalyzed, RecordRejected
from audio_qc.engine import QualityAnalysis, analyze_record, analyze_records
from audio_qc.infrastructure.measurement_store import (
    MeasurementBatch,
    MeasurementLoadError,
    RejectedEntry,
    load_measurements,
)
from audio_qc.measurements import MeasurementRecord
from audio_qc.profiles import DEFAULT_PROFILE_NAME, Profile, UnknownProfileError, resolve_profile


@dataclass(frozen=True, slots=True)
class BatchOutcome:
    """Analyses of a batch plus the entries that could not be analyzed."""

    correlation_id: str
    profile: Profile
    analyses: list[QualityAnalysis]
    rejected: list[RejectedEntry] = field(default_factory=list)

    @property
    def summary_counts(self) -> dict[str, int]:
        return {
            "total": len(self.analyses) + len(self.rejected),
            "analyzed": len(self.analyses),
            "rejected": len(self.rejected),
        }


@dataclass(slots=True)
class AssessAudioQuality:
    """Use case that scores measurement records against one profile."""

    event_publisher: EventPublisher = NullEventPublisher()
    max_workers: int | None = None

    def analyze_one(
        self,
        record: MeasurementRecord,
        profile_name: str = DEFAULT_PROFILE_NAME,
        correlation_id: str | None = None,
    ) -> QualityAnalysis:
        run_correlation_id = correlation_id or str(uuid4())
        profile = self._resolve(profile_name, run_correlation_id)
        analysis = analyze_record(record, profile)
        self._publish_analyzed(analysis, run_correlation_id)
        return analysis

    def analyze_batch(
        self,
        records: Sequence[MeasurementRecord],
        profile_name: str = DEFAULT_PROFILE_NAME,
        correlation_id: str | None = None,
        rejected: Sequence[RejectedEntry] = (),
    ) -> BatchOutcome:
        run_correlation_id = correlation_id or str(uuid4())
        profile = self._resolve(profile_name, run_correlation_id)

        for entry in rejected:
            self.event_publisher.publish(
                RecordRejected(
                    correlation_id=run_correlation_id,
                    payload_summary={
                        "index": entry.index,
                        "file_path": entry.file_path,
                        "message": entry.message,
                    },
                )
            )

        analyses = analyze_records(records, profile, max_workers=self.max_workers)
        for analysis in analyses:
            self._publish_analyzed(analysis, run_correlation_id)

        outcome = BatchOutcome(
            correlation_id=run_correlation_id,
            profile=profile,
            analyses=analyses,
            rejected=list(rejected),
        )
        self.event_publisher.publish(
            BatchAnalyzed(
                correlation_id=run_correlation_id,
                payload_summary={"profile": profile.name, **outcome.summary_counts},
            )
        )
        return outcome

    def analyze_file(
        self,
        path: Path,
        profile_name: str = DEFAULT_PROFILE_NAME,
        correlation_id: str | None = None,
    ) -> BatchOutcome:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            batch: MeasurementBatch = load_measurements(path)
        except MeasurementLoadError as error:
            self._publish_failure(run_correlation_id, "load", error.as_dict())
            raise
        return self.analyze_batch(
            batch.records,
            profile_name=profile_name,
            correlation_id=run_correlation_id,
            rejected=batch.rejected,
        )

    def _resolve(self, profile_name: str, correlation_id: str) -> Profile:
        try:
            return resolve_profile(profile_name)
        except UnknownProfileError as error:
            self._publish_failure(
                correlation_id,
                "resolve_profile",
                {"code": "unknown_profile", "message": str(error)},
            )
            raise

    def _publish_analyzed(self, analysis: QualityAnalysis, correlation_id: str) -> None:
        self.event_publisher.publish(
            RecordAnalyzed(
                correlation_id=correlation_id,
                payload_summary={
                    "file_path": analysis.file_path,
                    "profile": analysis.profile,
                    "status": analysis.status.value,
                    "score": analysis.score,
                    "confidence": analysis.confidence,
                },
            )
        )

    def _publish_failure(self, correlation_id: str, stage: str, detail: dict[str, str]) -> None:
        self.event_publisher.publish(
            AnalysisFailed(
                correlation_id=correlation_id,
                payload_summary={"stage": stage, **detail},
            )
        )
