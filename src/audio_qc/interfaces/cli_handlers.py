"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from audio_qc.application.quality_service import AssessAudioQuality, BatchOutcome
from audio_qc.engine import QualityAnalysis
from audio_qc.infrastructure.logging_event_publisher import LoggingEventPublisher
from audio_qc.summary import BatchSummary, rank_analyses, summarize
from audio_qc.utils.config import AnalysisConfig, load_analysis_config

_event_publisher = LoggingEventPublisher()
quality_service = AssessAudioQuality(event_publisher=_event_publisher)


@dataclass(frozen=True, slots=True)
class AnalysisRun:
    outcome: BatchOutcome
    summary: BatchSummary
    reported: list[QualityAnalysis]


def resolve_run_config(
    config_path: Path | None,
    profile: str | None,
    top_n: int | None,
) -> AnalysisConfig:
    config = load_analysis_config(config_path)
    overrides: dict[str, object] = {}
    if profile is not None:
        overrides["profile"] = profile
    if top_n is not None:
        overrides["top_n"] = top_n
    if not overrides:
        return config
    return AnalysisConfig.model_validate({**config.model_dump(), **overrides})


def write_report_json(analyses: list[QualityAnalysis], report_json: Path) -> Path:
    report_json.parent.mkdir(parents=True, exist_ok=True)
    report_json.write_text(
        json.dumps([analysis.as_dict() for analysis in analyses], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return report_json


def analyze_from_path(
    input_path: Path,
    config: AnalysisConfig,
    correlation_id: str | None = None,
    report_json: Path | None = None,
) -> AnalysisRun:
    quality_service.max_workers = config.max_workers
    outcome = quality_service.analyze_file(
        input_path,
        profile_name=config.profile,
        correlation_id=correlation_id or str(uuid4()),
    )
    reported = rank_analyses(outcome.analyses)
    if config.min_score is not None:
        reported = [analysis for analysis in reported if analysis.score >= config.min_score]
    if report_json is not None:
        write_report_json(reported, report_json)
    return AnalysisRun(
        outcome=outcome,
        summary=summarize(reported, top_n=config.top_n),
        reported=reported,
    )
