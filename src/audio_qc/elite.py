"""Elite admission gate and the near-elite compression remap.

Scores above :data:`ELITE_THRESHOLD` are honored only when every elite
indicator passes at once. Otherwise the score is compressed into
:data:`NEAR_ELITE_BAND` by a :class:`RemapPolicy`, so files that nearly made
it are ranked above files that missed on several fronts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .measurements import MeasurementRecord
from .penalties import round_half_up
from .profiles import Profile

ELITE_THRESHOLD = 90
NEAR_ELITE_BAND: tuple[int, int] = (85, 89)
NEAR_MISS_CLOSENESS = 0.5

_LOUDNESS_SPAN_LU = 2.0
_TRUE_PEAK_SPAN_DB = 2.0
_LRA_SPAN_LU = 4.0
_HF_SPAN_DB = 10.0
_BITRATE_SPAN_KBPS = 64.0
_HIGH_EXCESS_POINTS = 5


@dataclass(frozen=True, slots=True)
class EliteIndicator:
    """One elite criterion and how close a failing value came to passing."""

    name: str
    passed: bool
    closeness: float
    measured: float | None = None


@dataclass(frozen=True, slots=True)
class EliteGateResult:
    input_score: int
    final_score: int
    indicators: tuple[EliteIndicator, ...] = ()
    readiness: float | None = None

    @property
    def evaluated(self) -> bool:
        return self.input_score > ELITE_THRESHOLD

    @property
    def passed(self) -> bool:
        return self.evaluated and all(indicator.passed for indicator in self.indicators)

    @property
    def remapped(self) -> bool:
        return self.final_score != self.input_score

    @property
    def failed_indicators(self) -> tuple[EliteIndicator, ...]:
        return tuple(indicator for indicator in self.indicators if not indicator.passed)


class RemapPolicy(Protocol):
    """Maps a failed-gate score into the near-elite band."""

    def remap(self, excess: int, readiness: float) -> int:
        """Return a score in ``NEAR_ELITE_BAND`` for ``ELITE_THRESHOLD + excess``."""


class SteppedRemapPolicy:
    """Readiness quarters set the base step; a large excess adds one more.

    Non-decreasing in both arguments and bounded to the near-elite band.
    """

    def remap(self, excess: int, readiness: float) -> int:
        low, high = NEAR_ELITE_BAND
        steps = round_half_up((high - low) * float(np.clip(readiness, 0.0, 1.0)))
        if excess >= _HIGH_EXCESS_POINTS:
            steps += 1
        return low + int(np.clip(steps, 0, high - low))


DEFAULT_REMAP_POLICY: RemapPolicy = SteppedRemapPolicy()


def _indicator(
    name: str,
    measured: float | None,
    miss: float | None,
    span: float,
    strict: bool = False,
) -> EliteIndicator:
    if measured is None or miss is None:
        return EliteIndicator(name=name, passed=False, closeness=0.0, measured=None)
    passed = miss < 0.0 if strict else miss <= 0.0
    if passed:
        return EliteIndicator(name=name, passed=True, closeness=1.0, measured=measured)
    closeness = float(np.clip(1.0 - miss / span, 0.0, 1.0))
    return EliteIndicator(name=name, passed=False, closeness=closeness, measured=measured)


def evaluate_elite_indicators(
    record: MeasurementRecord, profile: Profile
) -> tuple[EliteIndicator, ...]:
    thresholds = profile.thresholds
    indicators: list[EliteIndicator] = []

    loudness = record.integrated_lufs
    loudness_miss = (
        abs(loudness - profile.target_lufs) - profile.elite_loudness_tolerance_lu
        if loudness is not None
        else None
    )
    indicators.append(_indicator("loudness", loudness, loudness_miss, _LOUDNESS_SPAN_LU))

    true_peak = record.true_peak_dbtp
    true_peak_miss = true_peak - profile.true_peak_warning_dbtp if true_peak is not None else None
    indicators.append(
        _indicator("true_peak", true_peak, true_peak_miss, _TRUE_PEAK_SPAN_DB, strict=True)
    )

    lra = record.lra
    lra_miss = None
    if lra is not None:
        lra_miss = max(thresholds.lra_excellent_min - lra, lra - thresholds.lra_excellent_max, 0.0)
    indicators.append(_indicator("lra", lra, lra_miss, _LRA_SPAN_LU))

    rms_18k = record.rms_above_18k_db
    hf_miss = thresholds.elite_hf_floor_db - rms_18k if rms_18k is not None else None
    indicators.append(_indicator("high_frequency", rms_18k, hf_miss, _HF_SPAN_DB))

    if record.is_lossy:
        bitrate = record.bitrate_kbps
        bitrate_miss = float(thresholds.elite_min_bitrate_kbps - bitrate) if bitrate is not None else None
        indicators.append(
            _indicator(
                "bitrate",
                float(bitrate) if bitrate is not None else None,
                bitrate_miss,
                _BITRATE_SPAN_KBPS,
            )
        )
    return tuple(indicators)


def elite_readiness(indicators: tuple[EliteIndicator, ...]) -> float:
    """1.0 when every indicator passes, one quarter lost per failure.

    A failure that was not a near miss costs an extra quarter.
    """

    lost = 0
    for indicator in indicators:
        if indicator.passed:
            continue
        lost += 1
        if indicator.closeness < NEAR_MISS_CLOSENESS:
            lost += 1
    return max(0.0, 1.0 - lost / 4.0)


def finalize_score(
    capped_score: int,
    record: MeasurementRecord,
    profile: Profile,
    policy: RemapPolicy = DEFAULT_REMAP_POLICY,
) -> EliteGateResult:
    if capped_score <= ELITE_THRESHOLD:
        return EliteGateResult(input_score=capped_score, final_score=capped_score)

    indicators = evaluate_elite_indicators(record, profile)
    readiness = elite_readiness(indicators)
    if all(indicator.passed for indicator in indicators):
        return EliteGateResult(
            input_score=capped_score,
            final_score=capped_score,
            indicators=indicators,
            readiness=readiness,
        )

    low, high = NEAR_ELITE_BAND
    remapped = policy.remap(capped_score - ELITE_THRESHOLD, readiness)
    return EliteGateResult(
        input_score=capped_score,
        final_score=int(np.clip(remapped, low, high)),
        indicators=indicators,
        readiness=readiness,
    )
