"""Measurement records consumed by the quality engine.

Records are produced by the extraction layer (an external analyzer run per
file). Every acoustic and metadata field is optional: ``None`` means the
extractor could not provide the value, while ``0.0`` is a real measurement.
NaN readings are treated as absent.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import PurePath
from typing import Any

E_TIMEOUT = "E_TIMEOUT"
E_EXEC_FAILED = "E_EXEC_FAILED"
E_PARSE_LRA = "E_PARSE_LRA"
E_PARSE_STATS = "E_PARSE_STATS"
E_PARSE_HIGHPASS = "E_PARSE_HIGHPASS"
E_PROBE_FAILED = "E_PROBE_FAILED"

KNOWN_ERROR_CODES: tuple[str, ...] = (
    E_TIMEOUT,
    E_EXEC_FAILED,
    E_PARSE_LRA,
    E_PARSE_STATS,
    E_PARSE_HIGHPASS,
    E_PROBE_FAILED,
)

LOSSLESS_EXTENSIONS: frozenset[str] = frozenset({"flac", "alac", "wav", "aiff", "aif"})
LOSSLESS_CODECS: frozenset[str] = frozenset({"flac", "alac", "wavpack", "ape"})
LOSSLESS_CONTAINER_MARKERS: tuple[str, ...] = ("flac", "wav", "aiff")
LOSSY_EXTENSIONS: frozenset[str] = frozenset({"mp3", "aac", "m4a", "ogg", "opus", "wma"})
LOSSY_CODECS: frozenset[str] = frozenset({"mp3", "aac", "vorbis", "opus", "wmav2", "mp2", "ac3"})

CRITICAL_FIELDS: tuple[str, ...] = ("rms_above_18k_db", "lra", "peak_db")
REQUIRED_FIELDS: tuple[str, ...] = (
    "integrated_lufs",
    "true_peak_dbtp",
    "lra",
    "peak_db",
    "overall_rms_db",
    "rms_above_16k_db",
    "rms_above_18k_db",
    "rms_above_20k_db",
    "sample_rate_hz",
    "channels",
)


class OriginFormat(str, Enum):
    """Origin format family derived from extension, codec and container."""

    LOSSLESS = "lossless"
    LOSSY = "lossy"
    UNDETERMINED = "undetermined"


def _extension(file_path: str) -> str:
    return PurePath(file_path).suffix.lstrip(".").lower()


def detect_origin(
    file_path: str,
    codec_name: str | None = None,
    container_format: str | None = None,
) -> OriginFormat:
    """Classify a file as lossless, lossy or undetermined."""

    ext = _extension(file_path)
    codec = (codec_name or "").strip().lower()
    container = (container_format or "").strip().lower()

    lossless = (
        ext in LOSSLESS_EXTENSIONS
        or codec.startswith("pcm_")
        or codec in LOSSLESS_CODECS
        or any(marker in container for marker in LOSSLESS_CONTAINER_MARKERS)
    )
    if lossless:
        return OriginFormat.LOSSLESS
    if ext in LOSSY_EXTENSIONS or codec in LOSSY_CODECS:
        return OriginFormat.LOSSY
    return OriginFormat.UNDETERMINED


@dataclass(frozen=True, slots=True)
class MeasurementRecord:
    """Already-computed measurements for a single audio file."""

    file_path: str = ""
    integrated_lufs: float | None = None
    true_peak_dbtp: float | None = None
    lra: float | None = None
    peak_db: float | None = None
    overall_rms_db: float | None = None
    rms_above_16k_db: float | None = None
    rms_above_18k_db: float | None = None
    rms_above_20k_db: float | None = None
    sample_rate_hz: int | None = None
    bitrate_kbps: int | None = None
    channels: int | None = None
    codec_name: str | None = None
    container_format: str | None = None
    duration_seconds: float | None = None
    file_size_bytes: int | None = None
    error_codes: frozenset[str] = field(default_factory=frozenset)
    origin: OriginFormat | None = None

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, float) and math.isnan(value):
                object.__setattr__(self, item.name, None)
        if not isinstance(self.error_codes, frozenset):
            object.__setattr__(self, "error_codes", frozenset(self.error_codes))
        if self.origin is None:
            object.__setattr__(
                self,
                "origin",
                detect_origin(self.file_path, self.codec_name, self.container_format),
            )

    @property
    def is_lossless(self) -> bool:
        return self.origin is OriginFormat.LOSSLESS

    @property
    def is_lossy(self) -> bool:
        return self.origin is OriginFormat.LOSSY

    def missing_fields(self, names: tuple[str, ...] = REQUIRED_FIELDS) -> tuple[str, ...]:
        """Return the subset of ``names`` whose value is absent."""

        return tuple(name for name in names if getattr(self, name) is None)

    @property
    def missing_critical_fields(self) -> tuple[str, ...]:
        return self.missing_fields(CRITICAL_FIELDS)

    def as_dict(self) -> dict[str, Any]:
        """JSON-ready view; non-finite readings are emitted as ``None``."""

        payload: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, frozenset):
                value = sorted(value)
            elif isinstance(value, Enum):
                value = value.value
            elif isinstance(value, float) and not math.isfinite(value):
                value = None
            payload[item.name] = value
        return payload
