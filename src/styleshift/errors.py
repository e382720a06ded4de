"""Error hierarchy for the style transition engine."""
from __future__ import annotations

from typing import Any


class StyleshiftError(Exception):
    """Base error for all styleshift errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Engine contract violations
# ---------------------------------------------------------------------------


class TypeMismatchError(StyleshiftError):
    """A property was read with a type other than the one it was written with."""

    def __init__(self, key: Any, expected: Any, found: Any) -> None:
        super().__init__(
            f"type conflict, expected {expected} but found {found} for property {key}"
        )
        self.key = key
        self.expected = expected
        self.found = found


class ChainInvariantError(StyleshiftError):
    """A rule chain operation would break the chain's structure."""


class DuplicateDependencyError(StyleshiftError):
    """A dependency was registered under a key that is already in use."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key '{key}' is already assigned to another property")
        self.key = key


# ---------------------------------------------------------------------------
# Configuration and input errors
# ---------------------------------------------------------------------------


class UnknownTypeError(StyleshiftError):
    """No property type is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown property type: {name!r}")
        self.name = name


class UnknownStrategyError(StyleshiftError):
    """No strategy factory is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown transition strategy: {name!r}")
        self.name = name


class SheetParseError(StyleshiftError):
    """Raised when rule sheet source cannot be parsed."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.line = line
        self.column = column
