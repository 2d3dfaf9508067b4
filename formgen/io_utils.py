"""Utility helpers for data file IO and CLI warnings."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def read_data_file(path: Path) -> Any:
    """Load a JSON or YAML document; YAML is assumed for any other suffix."""

    if path.suffix.lower() == ".json":
        return read_json(path)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def write_text(path: Path, content: str, *, encoding: str = "utf-8") -> Path:
    """Write text content to a file, creating parent directories as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=encoding)
    return path


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)


__all__ = ["read_data_file", "read_json", "warn", "write_text"]
