"""Render settings shared by the select helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .io_utils import read_data_file
from .tag_builder import DEFAULT_ID_REPLACEMENT


class RenderSettings(BaseModel):
    """Settings threaded through every render call."""

    id_replacement: str = Field(
        DEFAULT_ID_REPLACEMENT,
        alias="idReplacement",
        description="Replacement for characters that are not valid in an HTML id.",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("id_replacement", mode="before")
    @classmethod
    def _default_when_empty(cls, value: Optional[str]) -> str:
        return value or DEFAULT_ID_REPLACEMENT


DEFAULT_SETTINGS = RenderSettings()


def load_settings(path: Optional[Path]) -> RenderSettings:
    """Load settings from a YAML or JSON mapping, falling back to defaults."""

    if path is None or not path.exists():
        return DEFAULT_SETTINGS
    try:
        data = read_data_file(path) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SystemExit(f"Invalid settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a mapping of settings.")
    try:
        return RenderSettings.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid settings file {path}: {exc}") from exc


__all__ = ["DEFAULT_SETTINGS", "RenderSettings", "load_settings"]
