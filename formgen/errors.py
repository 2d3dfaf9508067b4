"""Error types raised by the form helpers."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a required identifier is empty or missing."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"Argument '{argument}' cannot be null or empty")


__all__ = ["InvalidArgumentError"]
