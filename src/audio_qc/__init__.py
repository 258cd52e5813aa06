"""Public package exports for audio_qc with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "MeasurementRecord",
    "OriginFormat",
    "detect_origin",
    "Profile",
    "UnknownProfileError",
    "resolve_profile",
    "QualityStatus",
    "classify",
    "QualityAnalysis",
    "analyze_record",
    "analyze_records",
    "estimate_confidence",
    "summarize",
]

_EXPORT_MODULES: dict[str, str] = {
    "MeasurementRecord": "audio_qc.measurements",
    "OriginFormat": "audio_qc.measurements",
    "detect_origin": "audio_qc.measurements",
    "Profile": "audio_qc.profiles",
    "UnknownProfileError": "audio_qc.profiles",
    "resolve_profile": "audio_qc.profiles",
    "QualityStatus": "audio_qc.classification",
    "classify": "audio_qc.classification",
    "QualityAnalysis": "audio_qc.engine",
    "analyze_record": "audio_qc.engine",
    "analyze_records": "audio_qc.engine",
    "estimate_confidence": "audio_qc.confidence",
    "summarize": "audio_qc.summary",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'audio_qc' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
