"""Generator settings and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from caseforge.combinatorial.orchestrator import GenerationMode
from caseforge.errors import ConfigLoadError


class GeneratorSettings(BaseSettings):
    """Settings for case generation and the command line."""

    model_config = SettingsConfigDict(
        env_prefix="CASEFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mode: GenerationMode = GenerationMode.EXHAUSTIVE
    random_seed: int | None = None
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(config_path: str | Path | None = None) -> GeneratorSettings:
    """Load settings from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            try:
                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigLoadError(
                    f"Failed to parse settings file: {e}",
                    path=str(config_path),
                    cause=e,
                ) from e
            if not isinstance(config_data, dict):
                raise ConfigLoadError(
                    f"Settings must be a YAML object, got {type(config_data).__name__}",
                    path=str(config_path),
                )

    config_data.update(_get_env_overrides())

    try:
        return GeneratorSettings(**config_data)
    except ValidationError as e:
        raise ConfigLoadError(
            f"Invalid settings: {e.error_count()} error(s)",
            path=str(config_path) if config_path else None,
            cause=e,
        ) from e


def _get_env_overrides() -> dict[str, Any]:
    """Get settings overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "CASEFORGE_MODE": "mode",
        "CASEFORGE_RANDOM_SEED": "random_seed",
        "CASEFORGE_LOG_LEVEL": "log_level",
        "CASEFORGE_LOG_FORMAT": "log_format",
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            overrides[config_key] = value

    return overrides
