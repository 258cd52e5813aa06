"""Ordered status rules mapping a measurement record to one quality status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .measurements import MeasurementRecord
from .profiles import Profile


class QualityStatus(str, Enum):
    """Closed set of statuses, declared from most to least severe."""

    INCOMPLETE = "Incomplete"
    SUSPICIOUS = "Suspicious"
    PROCESSED = "Processed"
    CLIPPED = "Clipped"
    TRUE_PEAK_RISK = "TruePeakRisk"
    LOUDNESS_OFF_TARGET = "LoudnessOffTarget"
    LOW_BITRATE = "LowBitrate"
    LOW_SAMPLE_RATE = "LowSampleRate"
    MONO = "Mono"
    SEVERELY_COMPRESSED = "SeverelyCompressed"
    LOW_DYNAMIC = "LowDynamic"
    GOOD = "Good"


_SEVERITY_ORDER: tuple[QualityStatus, ...] = tuple(QualityStatus)


def severity_rank(status: QualityStatus) -> int:
    """Return 0 for the most severe status and grow toward ``Good``."""

    return _SEVERITY_ORDER.index(status)


Predicate = Callable[[MeasurementRecord, Profile], bool]


@dataclass(frozen=True, slots=True)
class StatusRule:
    status: QualityStatus
    predicate: Predicate


def _is_incomplete(record: MeasurementRecord, profile: Profile) -> bool:
    return len(record.missing_critical_fields) >= 2


def _is_suspicious(record: MeasurementRecord, profile: Profile) -> bool:
    rms_18k = record.rms_above_18k_db
    return (
        record.is_lossless
        and rms_18k is not None
        and rms_18k < profile.thresholds.spectrum_fake_db
    )


def _is_processed(record: MeasurementRecord, profile: Profile) -> bool:
    rms_18k = record.rms_above_18k_db
    return rms_18k is not None and rms_18k < profile.thresholds.spectrum_processed_db


def _is_clipped(record: MeasurementRecord, profile: Profile) -> bool:
    true_peak = record.true_peak_dbtp
    return true_peak is not None and true_peak >= profile.true_peak_critical_dbtp


def _is_true_peak_risk(record: MeasurementRecord, profile: Profile) -> bool:
    true_peak = record.true_peak_dbtp
    return true_peak is not None and true_peak >= profile.true_peak_warning_dbtp


def _is_loudness_off_target(record: MeasurementRecord, profile: Profile) -> bool:
    loudness = record.integrated_lufs
    return loudness is not None and not profile.loudness_in_band(loudness)


def _is_low_bitrate(record: MeasurementRecord, profile: Profile) -> bool:
    bitrate = record.bitrate_kbps
    return (
        record.is_lossy
        and bitrate is not None
        and bitrate < profile.thresholds.min_bitrate_kbps
    )


def _is_low_sample_rate(record: MeasurementRecord, profile: Profile) -> bool:
    sample_rate = record.sample_rate_hz
    return sample_rate is not None and sample_rate < profile.thresholds.min_sample_rate_hz


def _is_mono(record: MeasurementRecord, profile: Profile) -> bool:
    channels = record.channels
    return channels is not None and channels < profile.thresholds.min_channels


def _is_severely_compressed(record: MeasurementRecord, profile: Profile) -> bool:
    lra = record.lra
    return lra is not None and lra < profile.thresholds.lra_poor_max


def _is_low_dynamic(record: MeasurementRecord, profile: Profile) -> bool:
    lra = record.lra
    thresholds = profile.thresholds
    return lra is not None and thresholds.lra_poor_max <= lra < thresholds.lra_low_max


STATUS_RULES: tuple[StatusRule, ...] = (
    StatusRule(QualityStatus.INCOMPLETE, _is_incomplete),
    StatusRule(QualityStatus.SUSPICIOUS, _is_suspicious),
    StatusRule(QualityStatus.PROCESSED, _is_processed),
    StatusRule(QualityStatus.CLIPPED, _is_clipped),
    StatusRule(QualityStatus.TRUE_PEAK_RISK, _is_true_peak_risk),
    StatusRule(QualityStatus.LOUDNESS_OFF_TARGET, _is_loudness_off_target),
    StatusRule(QualityStatus.LOW_BITRATE, _is_low_bitrate),
    StatusRule(QualityStatus.LOW_SAMPLE_RATE, _is_low_sample_rate),
    StatusRule(QualityStatus.MONO, _is_mono),
    StatusRule(QualityStatus.SEVERELY_COMPRESSED, _is_severely_compressed),
    StatusRule(QualityStatus.LOW_DYNAMIC, _is_low_dynamic),
)


def classify(record: MeasurementRecord, profile: Profile) -> QualityStatus:
    """Return the status of the first rule that fires, or ``Good``."""

    for rule in STATUS_RULES:
        if rule.predicate(record, profile):
            return rule.status
    return QualityStatus.GOOD


def matching_statuses(
    record: MeasurementRecord, profile: Profile
) -> tuple[QualityStatus, ...]:
    """Evaluate every rule without short-circuiting, in table order."""

    return tuple(rule.status for rule in STATUS_RULES if rule.predicate(record, profile))
