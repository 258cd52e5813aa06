"""Reliability estimate for an analysis from field completeness and error codes."""

from __future__ import annotations

import numpy as np

from .measurements import REQUIRED_FIELDS, MeasurementRecord

CONFIDENCE_FLOOR = 0.1
CONFIDENCE_CEILING = 1.0
MISSING_FIELD_DECREMENT = 0.1
ERROR_CODE_DECREMENT = 0.1


def estimate_confidence(record: MeasurementRecord) -> float:
    missing = len(record.missing_fields(REQUIRED_FIELDS))
    errors = len(record.error_codes)
    confidence = CONFIDENCE_CEILING - missing * MISSING_FIELD_DECREMENT - errors * ERROR_CODE_DECREMENT
    return round(float(np.clip(confidence, CONFIDENCE_FLOOR, CONFIDENCE_CEILING)), 2)
