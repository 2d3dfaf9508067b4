"""Jinja integration for the select helpers."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .config import DEFAULT_SETTINGS, RenderSettings
from .select_helpers import dropdown, list_box
from .tag_builder import sanitize_id


def register_helpers(env: Environment, settings: Optional[RenderSettings] = None) -> Environment:
    """Expose ``dropdown``, ``list_box`` and ``sanitize_id`` as template globals."""

    settings = settings or DEFAULT_SETTINGS
    env.globals["dropdown"] = partial(dropdown, settings=settings)
    env.globals["list_box"] = partial(list_box, settings=settings)
    env.globals["sanitize_id"] = partial(sanitize_id, replacement=settings.id_replacement)
    return env


def create_environment(
    template_dirs: Iterable[Path], settings: Optional[RenderSettings] = None
) -> Environment:
    """Create an autoescaping environment with the helpers registered."""

    env = Environment(
        loader=FileSystemLoader([Path(path) for path in template_dirs]),
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    return register_helpers(env, settings)


__all__ = ["create_environment", "register_helpers"]
