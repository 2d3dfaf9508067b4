"""Select element assembly for dropdowns and list boxes."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from markupsafe import Markup

from .config import DEFAULT_SETTINGS, RenderSettings
from .errors import InvalidArgumentError
from .models import DropdownRequest, ListBoxRequest, SelectOption
from .selection import reconcile_multiple, reconcile_single
from .tag_builder import TagBuilder, TagRenderMode, html_encode, stringify_attribute

logger = logging.getLogger(__name__)


def _option_to_html(option: SelectOption) -> str:
    builder = TagBuilder("option")
    builder.inner_html = html_encode(option.text)
    if option.value is not None:
        builder.attributes["value"] = option.value
    if option.selected:
        builder.attributes["selected"] = "selected"
    return builder.render(TagRenderMode.NORMAL)


def build_list_options(
    options: Optional[Iterable[SelectOption]], default_option: Optional[str] = None
) -> str:
    """Render the option lines placed inside a ``<select>``.

    The placeholder option, when given, always comes first with an empty
    value. Each option sits on its own line.
    """

    lines = [""]
    if default_option is not None:
        lines.append(_option_to_html(SelectOption(text=default_option, value="")))
    for option in options or ():
        lines.append(_option_to_html(option))
    return "\n".join(lines) + "\n"


def _require_name(name: Optional[str]) -> str:
    if not name:
        raise InvalidArgumentError("name")
    return name


def build_list_box(
    request: ListBoxRequest, settings: RenderSettings = DEFAULT_SETTINGS
) -> Markup:
    """Render a list box ``<select>`` for ``request``."""

    name = _require_name(request.name)

    options = request.options
    if request.selected_values is not None:
        options = reconcile_multiple(options, request.selected_values, request.allow_multiple)

    builder = TagBuilder("select")
    builder.inner_html = build_list_options(options, request.default_option)
    builder.merge_attributes(request.attributes)
    builder.generate_id(name, settings.id_replacement)
    builder.merge_attribute("name", name, replace_existing=True)
    if request.size is not None:
        builder.merge_attribute("size", stringify_attribute(request.size), replace_existing=True)
    if request.allow_multiple:
        builder.merge_attribute("multiple", "multiple", replace_existing=True)
    else:
        builder.attributes.pop("multiple", None)

    logger.debug("rendered list box %r with %d options", name, len(options))
    return builder.to_markup(TagRenderMode.NORMAL)


def build_dropdown(
    request: DropdownRequest, settings: RenderSettings = DEFAULT_SETTINGS
) -> Markup:
    """Render a single selection ``<select>`` for ``request``."""

    name = _require_name(request.name)

    options = request.options
    selected_value = stringify_attribute(request.selected_value)
    if selected_value:
        options = reconcile_single(options, selected_value)

    builder = TagBuilder("select")
    builder.inner_html = build_list_options(options, request.default_option)
    builder.merge_attributes(request.attributes)
    builder.merge_attribute("name", name, replace_existing=True)
    builder.generate_id(name, settings.id_replacement)

    logger.debug("rendered dropdown %r with %d options", name, len(options))
    return builder.to_markup(TagRenderMode.NORMAL)


def list_box(
    name: Optional[str],
    options: Optional[Iterable[Any]] = None,
    *,
    settings: RenderSettings = DEFAULT_SETTINGS,
    **fields: Any,
) -> Markup:
    """Keyword-style entry point for :func:`build_list_box`."""

    _require_name(name)
    request = ListBoxRequest(name=name, options=list(options or []), **fields)
    return build_list_box(request, settings)


def dropdown(
    name: Optional[str],
    options: Optional[Iterable[Any]] = None,
    *,
    settings: RenderSettings = DEFAULT_SETTINGS,
    **fields: Any,
) -> Markup:
    """Keyword-style entry point for :func:`build_dropdown`."""

    _require_name(name)
    request = DropdownRequest(name=name, options=list(options or []), **fields)
    return build_dropdown(request, settings)


__all__ = [
    "build_dropdown",
    "build_list_box",
    "build_list_options",
    "dropdown",
    "list_box",
]
