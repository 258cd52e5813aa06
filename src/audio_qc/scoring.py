"""Dimension scorers turning measurements into bounded sub-scores."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .measurements import CRITICAL_FIELDS, REQUIRED_FIELDS, MeasurementRecord
from .profiles import Profile

MAX_COMPLIANCE = 35.0
MAX_LOUDNESS_COMPLIANCE = 20.0
MAX_TRUE_PEAK_COMPLIANCE = 15.0
MAX_DYNAMICS = 20.0
MAX_SPECTRUM = 25.0
MAX_SPECTRUM_16K = 15.0
MAX_SPECTRUM_18K = 10.0
MAX_AUTHENTICITY = 10.0
MAX_INTEGRITY = 10.0

_TRUE_PEAK_FULL_SCORE_HEADROOM_DB = 1.0
_SPECTRUM_16K_RANGE_DB = (-90.0, -55.0)
_AUTHENTICITY_LEVEL_POINTS = 6.0
_AUTHENTICITY_CUTOFF_POINTS = 4.0
_AUTHENTICITY_UNVERIFIED = 5.0
# 16k -> 18k drop in dB: full points at or below the first, none at or above the second.
_CUTOFF_DROP_RANGE_DB = (10.0, 25.0)
_CRITICAL_FIELD_COST = 3.0
_REQUIRED_FIELD_COST = 1.0
_ERROR_CODE_COST = 3.0


def _clamp(value: float, low: float, high: float) -> float:
    return float(np.clip(value, low, high))


def map_to_score(
    value: float, in_min: float, in_max: float, out_min: float, out_max: float
) -> float:
    """Linearly map ``value`` from the input range onto the output range, clamped."""

    if np.isnan(value) or abs(in_max - in_min) < np.finfo(float).eps:
        return out_min
    low, high = min(in_min, in_max), max(in_min, in_max)
    clamped = _clamp(value, low, high)
    return out_min + (clamped - in_min) * (out_max - out_min) / (in_max - in_min)


@dataclass(frozen=True, slots=True)
class DimensionScores:
    """Sub-scores for the five quality dimensions."""

    compliance: float
    dynamics: float
    spectrum: float
    authenticity: float
    integrity: float

    @property
    def total(self) -> float:
        return self.compliance + self.dynamics + self.spectrum + self.authenticity + self.integrity


def _loudness_compliance(record: MeasurementRecord, profile: Profile) -> float:
    if record.integrated_lufs is None:
        return 0.0
    deviation = abs(record.integrated_lufs - profile.target_lufs)
    return map_to_score(
        deviation,
        profile.elite_loudness_tolerance_lu,
        profile.loudness_zero_score_deviation_lu,
        MAX_LOUDNESS_COMPLIANCE,
        0.0,
    )


def _true_peak_compliance(record: MeasurementRecord, profile: Profile) -> float:
    if record.true_peak_dbtp is None:
        return 0.0
    return map_to_score(
        record.true_peak_dbtp,
        profile.true_peak_warning_dbtp - _TRUE_PEAK_FULL_SCORE_HEADROOM_DB,
        profile.true_peak_critical_dbtp,
        MAX_TRUE_PEAK_COMPLIANCE,
        0.0,
    )


def score_compliance(record: MeasurementRecord, profile: Profile) -> float:
    """Loudness deviation from target plus true-peak margin below critical."""

    score = _loudness_compliance(record, profile) + _true_peak_compliance(record, profile)
    return _clamp(score, 0.0, MAX_COMPLIANCE)


def score_dynamics(record: MeasurementRecord, profile: Profile) -> float:
    """Non-decreasing in LRA up to the excellent band, flat above it."""

    lra = record.lra
    if lra is None:
        return 0.0
    thresholds = profile.thresholds
    if lra >= thresholds.lra_excellent_min:
        return MAX_DYNAMICS
    if lra >= thresholds.lra_low_max:
        return map_to_score(lra, thresholds.lra_low_max, thresholds.lra_excellent_min, 14.0, MAX_DYNAMICS)
    if lra >= thresholds.lra_poor_max:
        return map_to_score(lra, thresholds.lra_poor_max, thresholds.lra_low_max, 6.0, 14.0)
    return map_to_score(lra, 0.0, thresholds.lra_poor_max, 0.0, 6.0)


def score_spectrum(record: MeasurementRecord, profile: Profile) -> float:
    """More energy above 16 kHz and 18 kHz means a fuller encode."""

    thresholds = profile.thresholds
    score = 0.0
    if record.rms_above_16k_db is not None:
        score += map_to_score(record.rms_above_16k_db, *_SPECTRUM_16K_RANGE_DB, 0.0, MAX_SPECTRUM_16K)
    if record.rms_above_18k_db is not None:
        score += map_to_score(
            record.rms_above_18k_db,
            thresholds.spectrum_fake_db,
            thresholds.spectrum_good_db,
            0.0,
            MAX_SPECTRUM_18K,
        )
    return _clamp(score, 0.0, MAX_SPECTRUM)


def score_authenticity(record: MeasurementRecord, profile: Profile) -> float:
    """Penalize lossless claims whose high band looks like a lossy encode.

    The absolute 18 kHz level and the steepness of the 16k -> 18k drop are
    judged separately from the spectrum score: a loud master can carry plenty
    of 16 kHz energy and still show the brick-wall cutoff of a transcode.
    """

    if not record.is_lossless:
        return MAX_AUTHENTICITY
    rms_18k = record.rms_above_18k_db
    if rms_18k is None:
        return _AUTHENTICITY_UNVERIFIED

    thresholds = profile.thresholds
    score = map_to_score(
        rms_18k,
        thresholds.spectrum_fake_db,
        thresholds.spectrum_good_db,
        0.0,
        _AUTHENTICITY_LEVEL_POINTS,
    )
    if record.rms_above_16k_db is not None:
        drop_db = record.rms_above_16k_db - rms_18k
        if np.isfinite(drop_db):
            score += map_to_score(
                drop_db,
                _CUTOFF_DROP_RANGE_DB[1],
                _CUTOFF_DROP_RANGE_DB[0],
                0.0,
                _AUTHENTICITY_CUTOFF_POINTS,
            )
    return _clamp(score, 0.0, MAX_AUTHENTICITY)


def score_integrity(record: MeasurementRecord, profile: Profile) -> float:
    missing_critical = record.missing_fields(CRITICAL_FIELDS)
    missing_other = [name for name in record.missing_fields(REQUIRED_FIELDS) if name not in CRITICAL_FIELDS]
    score = MAX_INTEGRITY
    score -= _CRITICAL_FIELD_COST * len(missing_critical)
    score -= _REQUIRED_FIELD_COST * len(missing_other)
    if record.error_codes:
        score -= _ERROR_CODE_COST
    return _clamp(score, 0.0, MAX_INTEGRITY)


def score_dimensions(record: MeasurementRecord, profile: Profile) -> DimensionScores:
    return DimensionScores(
        compliance=score_compliance(record, profile),
        dynamics=score_dynamics(record, profile),
        spectrum=score_spectrum(record, profile),
        authenticity=score_authenticity(record, profile),
        integrity=score_integrity(record, profile),
    )
