"""Profile-driven deductions and status-driven upper bounds on the raw score."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import numpy as np

from .classification import QualityStatus
from .measurements import MeasurementRecord
from .profiles import Profile

SCORE_FLOOR = 0
SCORE_CEILING = 99

LOW_BITRATE_PENALTY = 30.0
HIGH_BITRATE_POOR_SPECTRUM_PENALTY = 25.0
LOW_SAMPLE_RATE_PENALTY = 20.0
MONO_PENALTY = 5.0

STATUS_CAPS: Mapping[QualityStatus, int] = MappingProxyType(
    {
        QualityStatus.SUSPICIOUS: 25,
        QualityStatus.INCOMPLETE: 45,
        QualityStatus.PROCESSED: 60,
        QualityStatus.CLIPPED: 85,
        QualityStatus.TRUE_PEAK_RISK: 92,
    }
)


@dataclass(frozen=True, slots=True)
class Penalty:
    code: str
    points: float


@dataclass(frozen=True, slots=True)
class CappedScore:
    """Integer score after penalties, status cap and range clamp."""

    value: int
    penalties: tuple[Penalty, ...]
    cap: int

    @property
    def penalty_points(self) -> float:
        return sum(penalty.points for penalty in self.penalties)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def status_cap(status: QualityStatus) -> int:
    return STATUS_CAPS.get(status, SCORE_CEILING)


def applicable_penalties(record: MeasurementRecord, profile: Profile) -> tuple[Penalty, ...]:
    thresholds = profile.thresholds
    bitrate = record.bitrate_kbps
    rms_18k = record.rms_above_18k_db
    penalties: list[Penalty] = []

    if record.is_lossy and bitrate is not None and bitrate < thresholds.min_bitrate_kbps:
        penalties.append(Penalty("low_bitrate", LOW_BITRATE_PENALTY))
    if (
        record.is_lossy
        and bitrate is not None
        and bitrate > thresholds.high_bitrate_anomaly_kbps
        and rms_18k is not None
        and rms_18k < thresholds.spectrum_processed_db
    ):
        penalties.append(Penalty("high_bitrate_poor_spectrum", HIGH_BITRATE_POOR_SPECTRUM_PENALTY))
    if record.sample_rate_hz is not None and record.sample_rate_hz < thresholds.min_sample_rate_hz:
        penalties.append(Penalty("low_sample_rate", LOW_SAMPLE_RATE_PENALTY))
    if record.channels is not None and record.channels < thresholds.min_channels:
        penalties.append(Penalty("mono", MONO_PENALTY))
    return tuple(penalties)


def resolve_capped_score(
    raw_score: float,
    record: MeasurementRecord,
    profile: Profile,
    status: QualityStatus,
) -> CappedScore:
    """Apply penalties, bound by the status cap and clamp into ``[0, 99]``."""

    penalties = applicable_penalties(record, profile)
    cap = status_cap(status)
    penalized = raw_score - sum(penalty.points for penalty in penalties)
    bounded = float(np.clip(min(penalized, cap), SCORE_FLOOR, SCORE_CEILING))
    value = min(round_half_up(bounded), cap, SCORE_CEILING)
    return CappedScore(value=max(SCORE_FLOOR, value), penalties=penalties, cap=cap)
