from dataclasses import replace

import pytest

from audio_qc.measurements import MeasurementRecord
from audio_qc.profiles import resolve_profile

IDEAL_RECORD = MeasurementRecord(
    file_path="album/track01.flac",
    integrated_lufs=-14.0,
    true_peak_dbtp=-2.0,
    lra=9.0,
    peak_db=-1.5,
    overall_rms_db=-16.0,
    rms_above_16k_db=-55.0,
    rms_above_18k_db=-60.0,
    rms_above_20k_db=-75.0,
    sample_rate_hz=44_100,
    bitrate_kbps=900,
    channels=2,
    codec_name="flac",
    container_format="flac",
    duration_seconds=200.0,
)


@pytest.fixture
def ideal_record():
    return IDEAL_RECORD


@pytest.fixture
def make_record():
    def _make(**overrides):
        overrides.setdefault("origin", None)
        return replace(IDEAL_RECORD, **overrides)

    return _make


@pytest.fixture
def pop():
    return resolve_profile("pop")


@pytest.fixture
def broadcast():
    return resolve_profile("broadcast")
