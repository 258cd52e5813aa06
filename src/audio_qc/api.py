"""FastAPI interface for audio_qc."""

from typing import Any
from uuid import uuid4

from fastapi import Body, FastAPI, Header, HTTPException, Query
from fastapi.responses import JSONResponse

from .interfaces.api_handlers import analyze_payload, analyze_rows, profiles_to_dict
from .payloads import MeasurementPayload
from .profiles import DEFAULT_PROFILE_NAME, UnknownProfileError

app = FastAPI(title="audio_qc API", version="0.1.0")


def _unknown_profile(error: UnknownProfileError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={
            "code": "unknown_profile",
            "message": str(error),
            "parameter": "profile",
            "allowed_values": list(error.allowed),
        },
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""

    return {"status": "ok"}


@app.get("/profiles")
def profiles() -> list[dict[str, Any]]:
    """List the quality profile catalog."""

    return profiles_to_dict()


@app.post("/analyze")
def analyze(
    payload: MeasurementPayload,
    profile: str = Query(
        DEFAULT_PROFILE_NAME, description="Quality profile: pop, broadcast or archive."
    ),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> JSONResponse:
    """Classify and score one measurement record."""

    correlation_id = x_correlation_id or str(uuid4())
    try:
        result = analyze_payload(payload, profile=profile, correlation_id=correlation_id)
    except UnknownProfileError as error:
        raise _unknown_profile(error) from error

    response = JSONResponse(content=result)
    response.headers["X-Correlation-Id"] = correlation_id
    return response


@app.post("/analyze/batch")
def analyze_batch(
    rows: list[dict[str, Any]] = Body(..., description="Measurement records."),
    profile: str = Query(
        DEFAULT_PROFILE_NAME, description="Quality profile: pop, broadcast or archive."
    ),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> JSONResponse:
    """Classify and score a batch; invalid entries are reported, not fatal."""

    if not rows:
        raise HTTPException(
            status_code=400,
            detail={"code": "empty_batch", "message": "Batch does not contain any records."},
        )

    correlation_id = x_correlation_id or str(uuid4())
    try:
        result = analyze_rows(rows, profile=profile, correlation_id=correlation_id)
    except UnknownProfileError as error:
        raise _unknown_profile(error) from error

    response = JSONResponse(content=result)
    response.headers["X-Correlation-Id"] = correlation_id
    return response
