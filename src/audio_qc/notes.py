"""Human-readable notes for the conditions that fired during an analysis.

Every classification rule that matches contributes a note, not only the rule
that decided the status, so a ``Suspicious`` mono file still says it is mono.
Notes follow rule order, which puts the winning status first, and are
followed by observations from scoring.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .classification import QualityStatus
from .elite import EliteGateResult
from .measurements import MeasurementRecord
from .penalties import CappedScore
from .profiles import Profile

NO_ISSUES_NOTE = "No hard technical issues detected."


def _fmt(value: float | None, spec: str = ".1f") -> str:
    return "n/a" if value is None else format(value, spec)


def _incomplete(record: MeasurementRecord, profile: Profile) -> str:
    missing = ", ".join(record.missing_critical_fields)
    return f"Key measurements missing ({missing}); analysis may be inaccurate."


def _suspicious(record: MeasurementRecord, profile: Profile) -> str:
    return (
        f"Hard spectral cutoff near 18 kHz ({_fmt(record.rms_above_18k_db)} dB) in a lossless "
        "container; likely transcoded from a lossy source."
    )


def _processed(record: MeasurementRecord, profile: Profile) -> str:
    return (
        f"Low energy above 18 kHz ({_fmt(record.rms_above_18k_db)} dB); "
        "a soft low-pass or lossy processing is likely."
    )


def _clipped(record: MeasurementRecord, profile: Profile) -> str:
    return (
        f"True peak {_fmt(record.true_peak_dbtp)} dBTP reaches the "
        f"{profile.true_peak_critical_dbtp:.1f} dBTP limit; clipping is likely."
    )


def _true_peak_risk(record: MeasurementRecord, profile: Profile) -> str:
    return (
        f"True peak {_fmt(record.true_peak_dbtp)} dBTP is above the "
        f"{profile.true_peak_warning_dbtp:.1f} dBTP warning level; inter-sample overs possible."
    )


def _loudness_off_target(record: MeasurementRecord, profile: Profile) -> str:
    low, high = profile.loudness_band_lufs
    return (
        f"Integrated loudness {_fmt(record.integrated_lufs)} LUFS is outside the "
        f"{profile.name} range [{low:.1f}, {high:.1f}] LUFS."
    )


def _low_bitrate(record: MeasurementRecord, profile: Profile) -> str:
    return f"Low bit rate ({record.bitrate_kbps} kbps); detail loss is likely."


def _low_sample_rate(record: MeasurementRecord, profile: Profile) -> str:
    return f"Low sample rate ({record.sample_rate_hz} Hz) limits the high-frequency ceiling."


def _mono(record: MeasurementRecord, profile: Profile) -> str:
    return "File is mono."


def _severely_compressed(record: MeasurementRecord, profile: Profile) -> str:
    return f"Very low loudness range (LRA: {_fmt(record.lra)} LU); severely over-compressed."


def _low_dynamic(record: MeasurementRecord, profile: Profile) -> str:
    return f"Low loudness range (LRA: {_fmt(record.lra)} LU); possibly over-compressed."


_STATUS_NOTES: dict[QualityStatus, Callable[[MeasurementRecord, Profile], str]] = {
    QualityStatus.INCOMPLETE: _incomplete,
    QualityStatus.SUSPICIOUS: _suspicious,
    QualityStatus.PROCESSED: _processed,
    QualityStatus.CLIPPED: _clipped,
    QualityStatus.TRUE_PEAK_RISK: _true_peak_risk,
    QualityStatus.LOUDNESS_OFF_TARGET: _loudness_off_target,
    QualityStatus.LOW_BITRATE: _low_bitrate,
    QualityStatus.LOW_SAMPLE_RATE: _low_sample_rate,
    QualityStatus.MONO: _mono,
    QualityStatus.SEVERELY_COMPRESSED: _severely_compressed,
    QualityStatus.LOW_DYNAMIC: _low_dynamic,
}


def _ordered_statuses(
    status: QualityStatus, triggered: Iterable[QualityStatus]
) -> list[QualityStatus]:
    ordered = [item for item in triggered if item is not QualityStatus.GOOD]
    if status is not QualityStatus.GOOD and status not in ordered:
        ordered.insert(0, status)
    return ordered


def generate_notes(
    record: MeasurementRecord,
    profile: Profile,
    status: QualityStatus,
    triggered: Iterable[QualityStatus],
    capped: CappedScore | None = None,
    elite: EliteGateResult | None = None,
) -> tuple[str, ...]:
    notes = [_STATUS_NOTES[item](record, profile) for item in _ordered_statuses(status, triggered)]

    if capped is not None and any(p.code == "high_bitrate_poor_spectrum" for p in capped.penalties):
        notes.append(
            f"High bit rate ({record.bitrate_kbps} kbps) but little energy above 18 kHz; "
            "possibly re-encoded from a lower-quality source."
        )
    if record.lra is not None and record.lra > profile.thresholds.lra_too_high:
        notes.append(f"Very wide loudness range (LRA: {record.lra:.1f} LU); may need compression for playback.")
    if record.error_codes:
        notes.append(f"Extraction reported errors: {', '.join(sorted(record.error_codes))}.")
    if elite is not None and elite.remapped:
        failed = ", ".join(indicator.name for indicator in elite.failed_indicators)
        notes.append(
            f"Score {elite.input_score} compressed to {elite.final_score}; "
            f"elite criteria not met: {failed}."
        )

    return tuple(notes) if notes else (NO_ISSUES_NOTE,)
