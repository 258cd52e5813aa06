import json
from pathlib import Path

from audio_qc.interfaces import cli_handlers
from audio_qc.utils.config import PROFILE_ENV_VAR, AnalysisConfig

ROWS = [
    {
        "filePath": "lib/best.flac",
        "integratedLufs": -14.0,
        "truePeakDbtp": -2.0,
        "lra": 9.0,
        "peakAmplitudeDb": -1.5,
        "overallRmsDb": -16.0,
        "rmsDbAbove16k": -55.0,
        "rmsDbAbove18k": -60.0,
        "rmsDbAbove20k": -75.0,
        "sampleRateHz": 44100,
        "bitrateKbps": 900,
        "channels": 2,
        "codecName": "flac",
    },
    {"filePath": "lib/fake.flac", "lra": 9.0, "peakAmplitudeDb": -1.0, "rmsDbAbove18k": -92.0},
    {"filePath": "lib/empty.wav"},
]


def _write_rows(tmp_path: Path) -> Path:
    path = tmp_path / "measurements.json"
    path.write_text(json.dumps(ROWS), encoding="utf-8")
    return path


def test_resolve_run_config_prefers_cli_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
    config_path = tmp_path / "qc.json"
    config_path.write_text(json.dumps({"profile": "archive", "top_n": 3}), encoding="utf-8")

    config = cli_handlers.resolve_run_config(config_path, profile="broadcast", top_n=None)

    assert config.profile == "broadcast"
    assert config.top_n == 3


def test_analyze_from_path_ranks_and_writes_report(tmp_path: Path) -> None:
    report_path = tmp_path / "reports" / "qc.json"

    run = cli_handlers.analyze_from_path(
        _write_rows(tmp_path),
        AnalysisConfig(profile="pop"),
        correlation_id="corr-cli",
        report_json=report_path,
    )

    assert run.outcome.correlation_id == "corr-cli"
    assert [analysis.file_path for analysis in run.reported] == ["lib/best.flac", "lib/fake.flac", "lib/empty.wav"]
    assert [analysis.status.value for analysis in run.reported] == ["Good", "Suspicious", "Incomplete"]
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    assert [item["score"] for item in payload] == [analysis.score for analysis in run.reported]
    assert run.summary.total_files == 3


def test_min_score_filters_reported_analyses(tmp_path: Path) -> None:
    run = cli_handlers.analyze_from_path(_write_rows(tmp_path), AnalysisConfig(min_score=50))

    assert [analysis.file_path for analysis in run.reported] == ["lib/best.flac"]
    assert len(run.outcome.analyses) == 3
