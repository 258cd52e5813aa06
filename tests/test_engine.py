import itertools

import pytest

from audio_qc.classification import QualityStatus
from audio_qc.engine import PARALLEL_MIN_RECORDS, analyze_record, analyze_records
from audio_qc.measurements import MeasurementRecord
from audio_qc.notes import NO_ISSUES_NOTE


def _lossy_low_bitrate(make_record):
    return make_record(
        file_path="album/track02.mp3",
        codec_name="mp3",
        container_format="mp3",
        bitrate_kbps=128,
        lra=7.0,
        peak_db=-1.0,
        overall_rms_db=-12.0,
        rms_above_16k_db=-65.0,
        rms_above_18k_db=-75.0,
        rms_above_20k_db=-90.0,
    )


def test_ideal_record_is_good_and_tops_out_at_99(ideal_record, pop) -> None:
    analysis = analyze_record(ideal_record, pop)

    assert analysis.status is QualityStatus.GOOD
    assert analysis.score == 99
    assert analysis.confidence == 1.0
    assert analysis.notes == (NO_ISSUES_NOTE,)
    assert analysis.breakdown.raw_score == pytest.approx(100.0)
    assert analysis.breakdown.elite.passed


def test_fake_lossless_is_suspicious_and_capped(make_record, pop) -> None:
    analysis = analyze_record(make_record(rms_above_18k_db=-90.0, channels=1), pop)

    assert analysis.status is QualityStatus.SUSPICIOUS
    assert analysis.score <= 25
    assert analysis.notes[0].startswith("Hard spectral cutoff")
    assert "File is mono." in analysis.notes


def test_low_bitrate_lossy_gets_penalized(make_record, pop) -> None:
    analysis = analyze_record(_lossy_low_bitrate(make_record), pop)

    assert analysis.status is QualityStatus.LOW_BITRATE
    assert analysis.breakdown.raw_score == pytest.approx(89.381, abs=1e-3)
    assert [p.code for p in analysis.breakdown.capped.penalties] == ["low_bitrate"]
    assert analysis.score == 59
    assert analysis.notes[0] == "Low bit rate (128 kbps); detail loss is likely."


def test_empty_record_is_incomplete_with_floor_confidence(pop) -> None:
    analysis = analyze_record(MeasurementRecord(file_path="silence.bin"), pop)

    assert analysis.status is QualityStatus.INCOMPLETE
    assert analysis.score <= 45
    assert analysis.score == 10
    assert analysis.confidence == 0.1
    assert analysis.notes[0].startswith("Key measurements missing")


def test_near_elite_ordering_between_one_and_two_failures(make_record, pop) -> None:
    one_miss = make_record(integrated_lufs=-15.5, rms_above_16k_db=-60.0)
    two_misses = make_record(integrated_lufs=-15.5, rms_above_16k_db=-60.0, lra=13.0)

    first = analyze_record(one_miss, pop)
    second = analyze_record(two_misses, pop)

    assert first.status is QualityStatus.GOOD
    assert second.status is QualityStatus.GOOD
    assert first.breakdown.capped.value == 96
    assert first.score == 89
    assert second.score == 88
    assert first.notes[-1] == "Score 96 compressed to 89; elite criteria not met: loudness."


def test_true_peak_risk_under_broadcast(ideal_record, broadcast) -> None:
    analysis = analyze_record(ideal_record, broadcast)

    assert analysis.status is QualityStatus.TRUE_PEAK_RISK
    assert analysis.breakdown.raw_score == pytest.approx(72.5)
    assert analysis.score == 73
    assert not analysis.breakdown.elite.evaluated


def test_analysis_is_deterministic(make_record, pop) -> None:
    record = _lossy_low_bitrate(make_record)

    assert analyze_record(record, pop) == analyze_record(record, pop)


def test_scores_and_confidence_stay_in_bounds(make_record, pop, broadcast) -> None:
    grid = itertools.product(
        (None, -30.0, -14.0, -6.0),
        (None, -4.0, -0.5, 1.0),
        (None, 0.0, 5.0, 10.0, 25.0),
        (None, -95.0, -78.0, -60.0),
        ("a.flac", "a.mp3"),
    )
    for loudness, true_peak, lra, rms_18k, path in grid:
        record = make_record(
            file_path=path,
            codec_name=None,
            container_format=None,
            integrated_lufs=loudness,
            true_peak_dbtp=true_peak,
            lra=lra,
            rms_above_18k_db=rms_18k,
        )
        for profile in (pop, broadcast):
            analysis = analyze_record(record, profile)
            assert 0 <= analysis.score <= 99
            assert 0.1 <= analysis.confidence <= 1.0
            assert analysis.notes


def test_batch_preserves_input_order_in_parallel(make_record, pop) -> None:
    records = [
        make_record(file_path=f"batch/{index:02d}.flac", lra=float(index))
        for index in range(PARALLEL_MIN_RECORDS + 2)
    ]

    analyses = analyze_records(records, pop, max_workers=4)

    assert [analysis.file_path for analysis in analyses] == [record.file_path for record in records]
    assert analyses == [analyze_record(record, pop) for record in records]


def test_as_dict_is_json_ready(ideal_record, pop) -> None:
    payload = analyze_record(ideal_record, pop).as_dict()

    assert payload["status"] == "Good"
    assert payload["score"] == 99
    assert payload["breakdown"]["status_cap"] == 99
    assert payload["breakdown"]["elite_gate"] == {
        "evaluated": True,
        "passed": True,
        "readiness": 1.0,
        "failed_indicators": [],
    }
    assert payload["measurements"]["file_path"] == "album/track01.flac"


@pytest.mark.parametrize(
    "overrides",
    [
        {"rms_above_16k_db": float("-inf"), "rms_above_18k_db": float("-inf")},
        {"integrated_lufs": float("nan")},
        {"true_peak_dbtp": float("inf"), "lra": float("nan")},
        {"lra": float("-inf"), "rms_above_16k_db": float("nan"), "peak_db": float("-inf")},
        {"integrated_lufs": float("-inf"), "true_peak_dbtp": float("-inf"), "lra": float("inf")},
    ],
)
def test_non_finite_readings_keep_the_engine_total(make_record, pop, overrides) -> None:
    analysis = analyze_record(make_record(**overrides), pop)

    assert 0 <= analysis.score <= 99
    assert 0.1 <= analysis.confidence <= 1.0
    assert analysis.notes


def test_silent_high_band_on_lossless_is_suspicious(make_record, pop) -> None:
    record = make_record(rms_above_16k_db=float("-inf"), rms_above_18k_db=float("-inf"))

    analysis = analyze_record(record, pop)

    assert analysis.status is QualityStatus.SUSPICIOUS
    assert analysis.score <= 25
    assert analysis.as_dict()["measurements"]["rms_above_18k_db"] is None
