import pytest

from audio_qc.measurements import MeasurementRecord
from audio_qc.scoring import (
    MAX_AUTHENTICITY,
    MAX_COMPLIANCE,
    MAX_DYNAMICS,
    MAX_INTEGRITY,
    MAX_SPECTRUM,
    map_to_score,
    score_authenticity,
    score_compliance,
    score_dimensions,
    score_dynamics,
    score_integrity,
    score_spectrum,
)


def test_map_to_score_is_linear_and_clamped() -> None:
    assert map_to_score(5.0, 0.0, 10.0, 0.0, 100.0) == pytest.approx(50.0)
    assert map_to_score(-5.0, 0.0, 10.0, 0.0, 100.0) == pytest.approx(0.0)
    assert map_to_score(15.0, 0.0, 10.0, 0.0, 100.0) == pytest.approx(100.0)


def test_map_to_score_handles_descending_and_degenerate_ranges() -> None:
    assert map_to_score(9.0, 10.0, 0.0, 0.0, 10.0) == pytest.approx(1.0)
    assert map_to_score(42.0, 10.0, 0.0, 0.0, 10.0) == pytest.approx(0.0)
    assert map_to_score(3.0, 5.0, 5.0, 7.0, 100.0) == pytest.approx(7.0)
    assert map_to_score(float("nan"), 0.0, 10.0, 2.0, 100.0) == pytest.approx(2.0)
    assert map_to_score(float("-inf"), 0.0, 10.0, 0.0, 100.0) == pytest.approx(0.0)


def test_ideal_record_reaches_every_dimension_maximum(ideal_record, pop) -> None:
    dimensions = score_dimensions(ideal_record, pop)

    assert dimensions.compliance == pytest.approx(MAX_COMPLIANCE)
    assert dimensions.dynamics == pytest.approx(MAX_DYNAMICS)
    assert dimensions.spectrum == pytest.approx(MAX_SPECTRUM)
    assert dimensions.authenticity == pytest.approx(MAX_AUTHENTICITY)
    assert dimensions.integrity == pytest.approx(MAX_INTEGRITY)
    assert dimensions.total == pytest.approx(100.0)


def test_compliance_is_judged_against_the_profile(ideal_record, broadcast) -> None:
    assert score_compliance(ideal_record, broadcast) == pytest.approx(7.5)


def test_compliance_drops_with_loudness_deviation(make_record, pop) -> None:
    assert score_compliance(make_record(integrated_lufs=-15.0), pop) == pytest.approx(35.0)
    assert score_compliance(make_record(integrated_lufs=-18.5), pop) == pytest.approx(25.0)
    assert score_compliance(make_record(integrated_lufs=-30.0), pop) == pytest.approx(15.0)


@pytest.mark.parametrize(
    ("lra", "expected"),
    [(0.0, 0.0), (1.5, 3.0), (3.0, 6.0), (6.0, 14.0), (7.0, 17.0), (8.0, 20.0), (30.0, 20.0)],
)
def test_dynamics_anchor_points(make_record, pop, lra, expected) -> None:
    assert score_dynamics(make_record(lra=lra), pop) == pytest.approx(expected)


def test_dynamics_is_non_decreasing_up_to_the_excellent_band(make_record, pop) -> None:
    scores = [score_dynamics(make_record(lra=step / 2), pop) for step in range(0, 41)]

    assert scores == sorted(scores)


def test_spectrum_rewards_high_frequency_energy(make_record, pop) -> None:
    assert score_spectrum(make_record(rms_above_16k_db=-60.0), pop) == pytest.approx(30 / 35 * 15 + 10)
    assert score_spectrum(make_record(rms_above_16k_db=None, rms_above_18k_db=None), pop) == 0.0


def test_authenticity_only_questions_lossless_claims(make_record, pop) -> None:
    lossy = make_record(file_path="a.mp3", codec_name="mp3", container_format="mp3", rms_above_18k_db=-90.0)

    assert score_authenticity(lossy, pop) == MAX_AUTHENTICITY
    assert score_authenticity(make_record(rms_above_18k_db=None), pop) == pytest.approx(5.0)
    assert score_authenticity(make_record(rms_above_16k_db=-60.0, rms_above_18k_db=-90.0), pop) == 0.0


def test_integrity_counts_missing_fields_and_errors(make_record, pop) -> None:
    assert score_integrity(make_record(rms_above_20k_db=None), pop) == pytest.approx(9.0)
    assert score_integrity(make_record(lra=None), pop) == pytest.approx(7.0)
    assert score_integrity(make_record(error_codes=frozenset({"E_TIMEOUT", "E_PARSE_LRA"})), pop) == pytest.approx(7.0)
    assert score_integrity(MeasurementRecord(), pop) == 0.0


def test_dimensions_stay_in_bounds_for_extreme_values(pop) -> None:
    record = MeasurementRecord(
        file_path="x.wav",
        integrated_lufs=10.0,
        true_peak_dbtp=12.0,
        lra=-4.0,
        rms_above_16k_db=20.0,
        rms_above_18k_db=-200.0,
    )
    dimensions = score_dimensions(record, pop)

    assert 0.0 <= dimensions.compliance <= MAX_COMPLIANCE
    assert 0.0 <= dimensions.dynamics <= MAX_DYNAMICS
    assert 0.0 <= dimensions.spectrum <= MAX_SPECTRUM
    assert 0.0 <= dimensions.authenticity <= MAX_AUTHENTICITY
    assert 0.0 <= dimensions.integrity <= MAX_INTEGRITY


def test_authenticity_skips_cutoff_when_drop_is_undefined(make_record, pop) -> None:
    record = make_record(rms_above_16k_db=float("-inf"), rms_above_18k_db=float("-inf"))

    assert score_authenticity(record, pop) == 0.0
