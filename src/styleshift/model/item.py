"""Styled items: the things whose properties rules are applied to."""

from __future__ import annotations

from typing import Protocol

from styleshift.events import EventBus
from styleshift.model.property import PropertyContainer, StyleProperty
from styleshift.model.types import PropertyType


class StyledItem(Protocol):
    """Introspection interface of an item that receives style values."""

    events: EventBus

    def property_keys(self) -> list[str]: ...

    def get_property(self, key: str) -> StyleProperty | None: ...


class SimpleItem(PropertyContainer):
    """An item holding a flat set of typed properties."""

    def __init__(self, name: str = "", properties: dict[str, PropertyType] | None = None) -> None:
        super().__init__()
        self.name = name
        for key, prop_type in (properties or {}).items():
            self.add_property(key, StyleProperty(prop_type))

    def add_property(self, key: str, prop: StyleProperty) -> None:
        if key in self._properties:
            raise ValueError(f"property '{key}' already exists on item {self.name!r}")
        self._add(key, prop)

    def remove_property(self, key: str) -> None:
        self._remove(key)

    def values(self) -> dict[str, object]:
        """Return a snapshot of the current property values."""
        return {key: prop.value for key, prop in self._properties.items()}

    def __repr__(self) -> str:
        return f"SimpleItem(name={self.name!r}, properties={self.property_keys()})"
