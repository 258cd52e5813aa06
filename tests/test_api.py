import json

from fastapi.testclient import TestClient

from audio_qc.api import app

client = TestClient(app)

IDEAL_PAYLOAD = {
    "filePath": "a.flac",
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
    "containerFormat": "flac",
}


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_profiles_lists_catalog() -> None:
    response = client.get("/profiles")

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["pop", "broadcast", "archive"]


def test_analyze_returns_status_and_echoes_correlation_id() -> None:
    response = client.post("/analyze", json=IDEAL_PAYLOAD, headers={"X-Correlation-Id": "corr-api"})

    assert response.status_code == 200
    assert response.headers["x-correlation-id"] == "corr-api"
    body = response.json()
    assert body["status"] == "Good"
    assert body["score"] == 99
    assert body["profile"] == "pop"


def test_analyze_uses_requested_profile() -> None:
    response = client.post("/analyze?profile=Broadcast", json=IDEAL_PAYLOAD)

    assert response.status_code == 200
    assert response.json()["status"] == "TruePeakRisk"
    assert response.headers["x-correlation-id"]


def test_analyze_rejects_unknown_profile() -> None:
    response = client.post("/analyze?profile=club", json=IDEAL_PAYLOAD)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "unknown_profile"
    assert detail["parameter"] == "profile"
    assert detail["allowed_values"] == ["archive", "broadcast", "pop"]


def test_analyze_validates_payload() -> None:
    response = client.post("/analyze", json={**IDEAL_PAYLOAD, "sampleRateHz": 0})

    assert response.status_code == 422


def test_batch_reports_rejected_entries() -> None:
    response = client.post(
        "/analyze/batch?profile=archive",
        json=[IDEAL_PAYLOAD, {"filePath": "bad.wav", "channels": "two"}],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["profile"] == "archive"
    assert body["summary"] == {"total": 2, "analyzed": 1, "rejected": 1}
    assert body["rejected"][0]["index"] == 2
    assert body["rejected"][0]["file_path"] == "bad.wav"


def test_empty_batch_is_rejected() -> None:
    response = client.post("/analyze/batch", json=[])

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "empty_batch"


def test_analyze_accepts_silent_high_band() -> None:
    payload = {**IDEAL_PAYLOAD, "rmsDbAbove16k": float("-inf"), "rmsDbAbove18k": float("-inf")}

    response = client.post(
        "/analyze",
        content=json.dumps(payload),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Suspicious"
    assert 0 <= body["score"] <= 25
    assert body["measurements"]["rms_above_18k_db"] is None
