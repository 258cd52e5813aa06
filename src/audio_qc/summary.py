"""Batch-level summary of analyses: status distribution, ranking and score stats."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import PurePath
from typing import Sequence

import numpy as np

from .classification import QualityStatus, severity_rank
from .engine import QualityAnalysis


@dataclass(frozen=True, slots=True)
class StatusShare:
    status: QualityStatus
    count: int
    percentage: float


@dataclass(frozen=True, slots=True)
class RankedFile:
    rank: int
    file_path: str
    score: int
    status: QualityStatus

    @property
    def file_name(self) -> str:
        return PurePath(self.file_path).name or "Unknown"


@dataclass(frozen=True, slots=True)
class BatchSummary:
    total_files: int
    distribution: tuple[StatusShare, ...]
    top_files: tuple[RankedFile, ...]
    mean_score: float | None
    max_score: int | None
    min_score: int | None


def rank_analyses(analyses: Sequence[QualityAnalysis]) -> list[QualityAnalysis]:
    """Highest score first; ties keep a stable path order."""

    return sorted(analyses, key=lambda analysis: (-analysis.score, analysis.file_path))


def summarize(analyses: Sequence[QualityAnalysis], top_n: int = 10) -> BatchSummary:
    total = len(analyses)
    if total == 0:
        return BatchSummary(0, (), (), None, None, None)

    counts = Counter(analysis.status for analysis in analyses)
    distribution = tuple(
        StatusShare(status=status, count=count, percentage=round(count / total * 100.0, 1))
        for status, count in sorted(counts.items(), key=lambda item: severity_rank(item[0]))
    )
    top_files = tuple(
        RankedFile(rank=index, file_path=a.file_path, score=a.score, status=a.status)
        for index, a in enumerate(rank_analyses(analyses)[:top_n], start=1)
    )
    scores = np.array([analysis.score for analysis in analyses], dtype=np.float64)
    return BatchSummary(
        total_files=total,
        distribution=distribution,
        top_files=top_files,
        mean_score=round(float(np.mean(scores)), 1),
        max_score=int(np.max(scores)),
        min_score=int(np.min(scores)),
    )


def render_summary(summary: BatchSummary) -> list[str]:
    """Console lines for a batch summary."""

    if summary.total_files == 0:
        return ["No analysis results to display."]

    lines = ["Quality status distribution:"]
    lines.extend(
        f" - {share.status.value}: {share.count} file(s) ({share.percentage:.1f}%)"
        for share in summary.distribution
    )
    lines.append(f"Top {len(summary.top_files)} files by quality score:")
    lines.extend(
        f" {item.rank}. [score: {item.score}] [status: {item.status.value}] {item.file_name}"
        for item in summary.top_files
    )
    lines.append("Score statistics:")
    lines.append(f" - files: {summary.total_files}")
    lines.append(f" - mean: {summary.mean_score:.1f}")
    lines.append(f" - max: {summary.max_score}")
    lines.append(f" - min: {summary.min_score}")
    return lines
