"""Tag builder used to serialize form elements."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional

from markupsafe import Markup, escape

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_ID_REPLACEMENT = "_"

# Valid ids follow http://www.w3.org/TR/html401/types.html#type-id
_ID_SPECIAL_CHARS = frozenset("-_:")


class TagRenderMode(Enum):
    NORMAL = "normal"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING = "self_closing"


def html_encode(value: Any) -> str:
    """Encode text for use in element content or attribute values."""

    return str(escape(stringify_attribute(value)))


def stringify_attribute(value: Any) -> str:
    """Convert an attribute value to the string written into markup."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_letter(char: str) -> bool:
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


def _is_valid_id_char(char: str) -> bool:
    # "." is not allowed on purpose
    return _is_letter(char) or ("0" <= char <= "9") or char in _ID_SPECIAL_CHARS


def sanitize_id(
    original: Optional[str], replacement: Optional[str] = DEFAULT_ID_REPLACEMENT
) -> Optional[str]:
    """Turn ``original`` into an HTML 4.01 compatible id.

    Returns ``None`` when ``original`` is empty or does not start with an
    ASCII letter. Every other illegal character is swapped for
    ``replacement``.
    """

    if not original:
        return None
    if replacement is None:
        raise InvalidArgumentError("replacement")
    if not _is_letter(original[0]):
        return None

    parts = [original[0]]
    for char in original[1:]:
        parts.append(char if _is_valid_id_char(char) else replacement)
    return "".join(parts)


class AttributeMap(MutableMapping):
    """String mapping that always iterates in ordinal key order."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"AttributeMap({dict(self.items())!r})"


class TagBuilder:
    """Accumulates attributes and inner markup for a single element."""

    def __init__(self, tag_name: str) -> None:
        if not tag_name:
            raise InvalidArgumentError("tag_name")
        self._tag_name = tag_name
        self._inner_html: Optional[str] = None
        self.attributes = AttributeMap()

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @property
    def inner_html(self) -> str:
        return self._inner_html or ""

    @inner_html.setter
    def inner_html(self, value: Optional[str]) -> None:
        self._inner_html = value

    def set_inner_text(self, text: Optional[str]) -> None:
        self._inner_html = html_encode(text)

    def add_css_class(self, value: str) -> None:
        current = self.attributes.get("class")
        if current is not None:
            self.attributes["class"] = f"{value} {current}"
        else:
            self.attributes["class"] = value

    def generate_id(self, name: Optional[str], replacement: str = DEFAULT_ID_REPLACEMENT) -> None:
        """Derive the ``id`` attribute from ``name`` unless one is already set."""

        if "id" in self.attributes:
            return
        sanitized = sanitize_id(name, replacement)
        if not sanitized:
            logger.debug("no id generated for %r", name)
            return
        self.attributes["id"] = sanitized

    def merge_attribute(self, key: str, value: str, replace_existing: bool = False) -> None:
        if not key:
            raise InvalidArgumentError("key")
        if replace_existing or key not in self.attributes:
            self.attributes[key] = value

    def merge_attributes(
        self, attributes: Optional[Mapping[Any, Any]], replace_existing: bool = False
    ) -> None:
        if attributes is None:
            return
        for key, value in attributes.items():
            self.merge_attribute(
                stringify_attribute(key), stringify_attribute(value), replace_existing
            )

    def _render_attrs(self) -> str:
        parts = []
        for key, value in self.attributes.items():
            if key == "id" and not value:
                continue
            parts.append(f'{key}="{html_encode(value)}"')
        if not parts:
            return ""
        return " " + " ".join(parts)

    def render(self, mode: TagRenderMode = TagRenderMode.NORMAL) -> str:
        if mode is TagRenderMode.START_TAG:
            return f"<{self._tag_name}{self._render_attrs()}>"
        if mode is TagRenderMode.END_TAG:
            return f"</{self._tag_name}>"
        if mode is TagRenderMode.SELF_CLOSING:
            return f"<{self._tag_name}{self._render_attrs()} />"
        return f"<{self._tag_name}{self._render_attrs()}>{self.inner_html}</{self._tag_name}>"

    def to_markup(self, mode: TagRenderMode = TagRenderMode.NORMAL) -> Markup:
        # Raw inner HTML is trusted, so the result is safe for templates.
        return Markup(self.render(mode))

    def __str__(self) -> str:
        return self.render(TagRenderMode.NORMAL)


__all__ = [
    "AttributeMap",
    "DEFAULT_ID_REPLACEMENT",
    "TagBuilder",
    "TagRenderMode",
    "html_encode",
    "sanitize_id",
    "stringify_attribute",
]
