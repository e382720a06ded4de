"""Event types emitted by rules, property containers and chain links."""

from dataclasses import dataclass
from typing import Any


# --- rule content -------------------------------------------------------------


@dataclass(frozen=True)
class PropertyChanged:
    """The value of one property of ``source`` may have changed."""

    source: Any
    key: Any


@dataclass(frozen=True)
class PropertiesChanged:
    """Any property of ``source`` may have changed."""

    source: Any


# --- property containers ------------------------------------------------------


@dataclass(frozen=True)
class PropertyAdded:
    source: Any
    key: str
    property: Any


@dataclass(frozen=True)
class PropertyRemoved:
    source: Any
    key: str
    property: Any


@dataclass(frozen=True)
class ValueChanged:
    source: Any
    value: Any


# --- chain links --------------------------------------------------------------


@dataclass(frozen=True)
class PreviousChanged:
    link: Any
    previous: Any


@dataclass(frozen=True)
class NextChanged:
    link: Any
    next: Any


@dataclass(frozen=True)
class LinkRemoved:
    link: Any
