"""Named target/threshold sets used to judge measurement records."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class QualityThresholds:
    """Profile-independent thresholds shared by every catalog entry."""

    spectrum_fake_db: float = -85.0
    spectrum_processed_db: float = -80.0
    spectrum_good_db: float = -70.0
    lra_poor_max: float = 3.0
    lra_low_max: float = 6.0
    lra_excellent_min: float = 8.0
    lra_excellent_max: float = 12.0
    lra_acceptable_max: float = 15.0
    lra_too_high: float = 20.0
    min_bitrate_kbps: int = 192
    high_bitrate_anomaly_kbps: int = 256
    min_sample_rate_hz: int = 44_100
    min_channels: int = 2
    elite_hf_floor_db: float = -70.0
    elite_min_bitrate_kbps: int = 320


DEFAULT_THRESHOLDS = QualityThresholds()


@dataclass(frozen=True, slots=True)
class Profile:
    """Loudness and true-peak targets for one delivery context."""

    name: str
    target_lufs: float
    loudness_band_lufs: tuple[float, float]
    elite_loudness_tolerance_lu: float
    loudness_zero_score_deviation_lu: float
    true_peak_warning_dbtp: float
    true_peak_critical_dbtp: float
    description: str = ""
    thresholds: QualityThresholds = field(default=DEFAULT_THRESHOLDS)

    def loudness_in_band(self, integrated_lufs: float) -> bool:
        low, high = self.loudness_band_lufs
        return low <= integrated_lufs <= high


PROFILES: Mapping[str, Profile] = MappingProxyType(
    {
        "pop": Profile(
            name="pop",
            target_lufs=-14.0,
            loudness_band_lufs=(-18.0, -8.0),
            elite_loudness_tolerance_lu=1.0,
            loudness_zero_score_deviation_lu=8.0,
            true_peak_warning_dbtp=-1.0,
            true_peak_critical_dbtp=-0.1,
            description="Streaming music delivery with wide loudness tolerance.",
        ),
        "broadcast": Profile(
            name="broadcast",
            target_lufs=-23.0,
            loudness_band_lufs=(-24.0, -22.0),
            elite_loudness_tolerance_lu=0.5,
            loudness_zero_score_deviation_lu=4.0,
            true_peak_warning_dbtp=-2.0,
            true_peak_critical_dbtp=-1.0,
            description="Broadcast loudness compliance around -23 LUFS.",
        ),
        "archive": Profile(
            name="archive",
            target_lufs=-18.0,
            loudness_band_lufs=(-30.0, -6.0),
            elite_loudness_tolerance_lu=2.0,
            loudness_zero_score_deviation_lu=12.0,
            true_peak_warning_dbtp=-0.5,
            true_peak_critical_dbtp=0.0,
            description="Preservation auditing with the widest tolerance.",
        ),
    }
)

DEFAULT_PROFILE_NAME = "pop"


class UnknownProfileError(ValueError):
    """Raised when a caller requests a profile outside the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.allowed = tuple(sorted(PROFILES))
        super().__init__(
            f"Unknown quality profile '{name}'. Allowed: {', '.join(self.allowed)}."
        )


def profile_names() -> tuple[str, ...]:
    return tuple(PROFILES)


def resolve_profile(name: str = DEFAULT_PROFILE_NAME) -> Profile:
    try:
        return PROFILES[name.strip().lower()]
    except (KeyError, AttributeError) as exc:
        raise UnknownProfileError(str(name)) from exc
