"""API-facing handlers that delegate to application services."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from uuid import uuid4

from audio_qc.application.quality_service import AssessAudioQuality
from audio_qc.infrastructure.logging_event_publisher import LoggingEventPublisher
from audio_qc.infrastructure.measurement_store import parse_measurement_rows
from audio_qc.payloads import MeasurementPayload
from audio_qc.profiles import PROFILES

_event_publisher = LoggingEventPublisher()
quality_service = AssessAudioQuality(event_publisher=_event_publisher)


def analyze_payload(
    payload: MeasurementPayload, profile: str, correlation_id: str | None = None
) -> dict[str, Any]:
    analysis = quality_service.analyze_one(
        payload.to_record(),
        profile_name=profile,
        correlation_id=correlation_id or str(uuid4()),
    )
    return analysis.as_dict()


def analyze_rows(
    rows: list[dict[str, Any]], profile: str, correlation_id: str | None = None
) -> dict[str, Any]:
    batch = parse_measurement_rows(rows, source=Path("upload://batch"))
    outcome = quality_service.analyze_batch(
        batch.records,
        profile_name=profile,
        correlation_id=correlation_id or str(uuid4()),
        rejected=batch.rejected,
    )
    return {
        "correlation_id": outcome.correlation_id,
        "profile": outcome.profile.name,
        "summary": outcome.summary_counts,
        "analyses": [analysis.as_dict() for analysis in outcome.analyses],
        "rejected": [
            {"index": entry.index, "file_path": entry.file_path, "message": entry.message}
            for entry in outcome.rejected
        ],
    }


def profiles_to_dict() -> list[dict[str, Any]]:
    return [
        {
            "name": profile.name,
            "description": profile.description,
            "target_lufs": profile.target_lufs,
            "loudness_band_lufs": list(profile.loudness_band_lufs),
            "true_peak_warning_dbtp": profile.true_peak_warning_dbtp,
            "true_peak_critical_dbtp": profile.true_peak_critical_dbtp,
        }
        for profile in PROFILES.values()
    ]
