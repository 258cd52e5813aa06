from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

PROFILE_ENV_VAR = "AUDIO_QC_PROFILE"

ProfileName = Literal["pop", "broadcast", "archive"]


class ConfigLoadError(ValueError):
    """Raised when a config file cannot be read or parsed."""


class AnalysisConfig(BaseModel):
    profile: ProfileName = "pop"
    max_workers: int | None = Field(None, ge=1, le=64)
    top_n: int = Field(10, ge=1, le=100)
    min_score: int | None = Field(None, ge=0, le=99)

    @field_validator("profile", mode="before")
    @classmethod
    def _normalize_profile(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_analysis_config(path: Path | None = None) -> AnalysisConfig:
    """Build the config from an optional file; ``AUDIO_QC_PROFILE`` overrides its profile."""

    data = _load_config_data(path) if path is not None else {}
    env_profile = os.getenv(PROFILE_ENV_VAR)
    if env_profile:
        data["profile"] = env_profile
    return AnalysisConfig.model_validate(data)


def _load_config_data(path: Path) -> dict[str, Any]:
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise ImportError("PyYAML is required to load YAML configs.") from exc

        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except OSError as exc:
            raise ConfigLoadError(f"Config file is unreadable: {path}") from exc
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"Config file is not valid YAML: {path}") from exc
    else:
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            raise ConfigLoadError(f"Config file is unreadable: {path}") from exc
        except ValueError as exc:
            raise ConfigLoadError(f"Config file is not valid JSON: {path}") from exc

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config file must contain a mapping: {path}")
    return data
