"""Validated wire representation of measurement records.

Accepts the camelCase keys written by the extraction layer (``filePath``,
``rmsDbAbove18k``...) as well as the snake_case attribute names.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .measurements import MeasurementRecord, OriginFormat

_ERROR_CODE_SPLIT = re.compile(r"[;,|\s]+")


class MeasurementPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    file_path: str = Field("", alias="filePath")
    integrated_lufs: float | None = Field(None, alias="integratedLufs")
    true_peak_dbtp: float | None = Field(None, alias="truePeakDbtp")
    lra: float | None = Field(None, alias="lra")
    peak_db: float | None = Field(None, alias="peakAmplitudeDb")
    overall_rms_db: float | None = Field(None, alias="overallRmsDb")
    rms_above_16k_db: float | None = Field(None, alias="rmsDbAbove16k")
    rms_above_18k_db: float | None = Field(None, alias="rmsDbAbove18k")
    rms_above_20k_db: float | None = Field(None, alias="rmsDbAbove20k")
    sample_rate_hz: int | None = Field(None, alias="sampleRateHz", gt=0)
    bitrate_kbps: int | None = Field(None, alias="bitrateKbps", ge=0)
    channels: int | None = Field(None, alias="channels", ge=0)
    codec_name: str | None = Field(None, alias="codecName")
    container_format: str | None = Field(None, alias="containerFormat")
    duration_seconds: float | None = Field(None, alias="durationSeconds", ge=0.0)
    file_size_bytes: int | None = Field(None, alias="fileSizeBytes", ge=0)
    error_codes: list[str] = Field(default_factory=list, alias="errorCodes")
    origin: OriginFormat | None = Field(None, alias="origin")

    @field_validator(
        "integrated_lufs",
        "true_peak_dbtp",
        "lra",
        "peak_db",
        "overall_rms_db",
        "rms_above_16k_db",
        "rms_above_18k_db",
        "rms_above_20k_db",
        "sample_rate_hz",
        "bitrate_kbps",
        "channels",
        "codec_name",
        "container_format",
        "duration_seconds",
        "file_size_bytes",
        "origin",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("error_codes", mode="before")
    @classmethod
    def _split_error_codes(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [token for token in _ERROR_CODE_SPLIT.split(value) if token]
        return value

    def to_record(self) -> MeasurementRecord:
        return MeasurementRecord(
            file_path=self.file_path,
            integrated_lufs=self.integrated_lufs,
            true_peak_dbtp=self.true_peak_dbtp,
            lra=self.lra,
            peak_db=self.peak_db,
            overall_rms_db=self.overall_rms_db,
            rms_above_16k_db=self.rms_above_16k_db,
            rms_above_18k_db=self.rms_above_18k_db,
            rms_above_20k_db=self.rms_above_20k_db,
            sample_rate_hz=self.sample_rate_hz,
            bitrate_kbps=self.bitrate_kbps,
            channels=self.channels,
            codec_name=self.codec_name,
            container_format=self.container_format,
            duration_seconds=self.duration_seconds,
            file_size_bytes=self.file_size_bytes,
            error_codes=frozenset(self.error_codes),
            origin=self.origin,
        )
