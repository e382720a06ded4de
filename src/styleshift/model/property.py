"""Typed property holders and containers of named properties."""

from __future__ import annotations

from typing import Any

from styleshift.events import EventBus, PropertyAdded, PropertyRemoved, ValueChanged
from styleshift.model.types import PropertyType


class PropertyContainer:
    """A set of named properties that announces additions and removals."""

    def __init__(self) -> None:
        self.events = EventBus()
        self._properties: dict[str, StyleProperty] = {}

    def property_keys(self) -> list[str]:
        return list(self._properties)

    def get_property(self, key: str) -> StyleProperty | None:
        return self._properties.get(key)

    def _add(self, key: str, prop: StyleProperty) -> None:
        self._properties[key] = prop
        self.events.emit(PropertyAdded(source=self, key=key, property=prop))

    def _remove(self, key: str) -> StyleProperty | None:
        prop = self._properties.pop(key, None)
        if prop is not None:
            self.events.emit(PropertyRemoved(source=self, key=key, property=prop))
        return prop


class StyleProperty(PropertyContainer):
    """A typed value that style rules write into.

    A property may own sub-properties, which are addressed below the
    property's own key (``border`` owns ``border.color``).
    """

    def __init__(self, type: PropertyType, value: Any = None) -> None:
        super().__init__()
        self.type = type
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        """Store *value*, notifying listeners when it differs."""
        if value == self._value:
            return
        self._value = value
        self.events.emit(ValueChanged(source=self, value=value))

    def add_sub_property(self, key: str, prop: StyleProperty) -> None:
        if key in self._properties:
            raise ValueError(f"sub-property '{key}' already exists")
        self._add(key, prop)

    def remove_sub_property(self, key: str) -> None:
        self._remove(key)

    def __repr__(self) -> str:
        return f"StyleProperty(type={self.type}, value={self._value!r})"
