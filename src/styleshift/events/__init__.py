"""Event system: bus and event types for rules, properties and chain links."""

from styleshift.events.bus import EventBus
from styleshift.events.types import (
    LinkRemoved,
    NextChanged,
    PreviousChanged,
    PropertiesChanged,
    PropertyAdded,
    PropertyChanged,
    PropertyRemoved,
    ValueChanged,
)

__all__ = [
    "EventBus",
    "LinkRemoved",
    "NextChanged",
    "PreviousChanged",
    "PropertiesChanged",
    "PropertyAdded",
    "PropertyChanged",
    "PropertyRemoved",
    "ValueChanged",
]
