"""Load measurement records written by the extraction layer."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from audio_qc.measurements import MeasurementRecord
from audio_qc.payloads import MeasurementPayload

LOGGER = logging.getLogger(__name__)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".json", ".csv")


@dataclass(frozen=True, slots=True)
class MeasurementLoadError(ValueError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True, slots=True)
class RejectedEntry:
    index: int
    file_path: str
    message: str


@dataclass(slots=True)
class MeasurementBatch:
    source: Path
    records: list[MeasurementRecord] = field(default_factory=list)
    rejected: list[RejectedEntry] = field(default_factory=list)


def _read_rows(path: Path) -> list[Any]:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise MeasurementLoadError(
            "unsupported_format",
            f"Measurements file must end in {' or '.join(SUPPORTED_SUFFIXES)}: {path}",
        )

    try:
        if suffix == ".csv":
            with path.open("r", newline="", encoding="utf-8") as csv_handle:
                return [dict(row) for row in csv.DictReader(csv_handle)]
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise MeasurementLoadError("file_unreadable", f"Measurements file is unreadable: {path}") from exc
    except UnicodeDecodeError as exc:
        raise MeasurementLoadError("invalid_encoding", f"Measurements file is not valid UTF-8: {path}") from exc
    except csv.Error as exc:
        raise MeasurementLoadError("invalid_csv", f"Measurements file is not valid CSV: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MeasurementLoadError("invalid_json", f"Measurements file is not valid JSON: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("files", payload.get("records"))
    if not isinstance(payload, list):
        raise MeasurementLoadError("invalid_layout", "JSON measurements must be an array of objects.")
    return payload


def parse_measurement_rows(rows: list[Any], source: Path) -> MeasurementBatch:
    batch = MeasurementBatch(source=source)
    for index, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            batch.rejected.append(RejectedEntry(index, "", "Entry is not an object."))
            continue
        try:
            batch.records.append(MeasurementPayload.model_validate(row).to_record())
        except ValidationError as exc:
            file_path = str(row.get("filePath") or row.get("file_path") or "")
            LOGGER.warning("measurement_rejected", extra={"index": index, "file_path": file_path})
            batch.rejected.append(RejectedEntry(index, file_path, _summarize_validation_error(exc)))
    return batch


def _summarize_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(item) for item in detail.get("loc", ()))
        parts.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "; ".join(parts)


def load_measurements(path: Path) -> MeasurementBatch:
    """Read a JSON array or CSV of measurement entries.

    Entries that fail validation are collected in ``rejected``; the rest load.
    """

    if not path.exists() or not path.is_file():
        raise MeasurementLoadError("file_not_found", f"Measurements file not found: {path}")

    rows = _read_rows(path)
    if not rows:
        raise MeasurementLoadError("empty_file", "Measurements file does not contain any entries.")
    return parse_measurement_rows(rows, source=path)
