"""Rule content: read-only, typed, observable sources of property values."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from styleshift.events import EventBus, PropertiesChanged, PropertyChanged
from styleshift.model.key import PropertyKey, as_key
from styleshift.model.types import PropertyType


class RuleContent(Protocol):
    """Anything properties can be read from.

    ``events`` carries :class:`PropertyChanged` and :class:`PropertiesChanged`
    for rules whose values can change while they are in use.
    """

    events: EventBus

    def get_property(self, type: PropertyType, key: PropertyKey) -> Any | None: ...


class ObservableRule:
    """Base class for rules that announce changes on an event bus."""

    def __init__(self) -> None:
        self.events = EventBus()

    def fire_changed(self, key: PropertyKey) -> None:
        self.events.emit(PropertyChanged(source=self, key=key))

    def fire_all_changed(self) -> None:
        self.events.emit(PropertiesChanged(source=self))


class StaticRule(ObservableRule):
    """A rule backed by a dictionary of raw values.

    Values are stored as given and converted by the type they are read with,
    so a rule sheet can keep everything as strings.
    """

    def __init__(self, name: str = "", values: Mapping[str | PropertyKey, Any] | None = None) -> None:
        super().__init__()
        self.name = name
        self._values: dict[PropertyKey, Any] = {}
        for key, value in (values or {}).items():
            self._values[as_key(key)] = value

    def get_property(self, type: PropertyType, key: PropertyKey) -> Any | None:
        raw = self._values.get(key)
        if raw is None:
            return None
        return type.coerce(raw)

    def set(self, key: str | PropertyKey, value: Any) -> None:
        """Store a value and notify listeners."""
        key = as_key(key)
        self._values[key] = value
        self.fire_changed(key)

    def remove(self, key: str | PropertyKey) -> None:
        key = as_key(key)
        if self._values.pop(key, None) is not None:
            self.fire_changed(key)

    def keys(self) -> list[PropertyKey]:
        return list(self._values)

    def raw(self, key: str | PropertyKey) -> Any | None:
        return self._values.get(as_key(key))

    def __repr__(self) -> str:
        return f"StaticRule(name={self.name!r}, keys={[str(k) for k in self._values]})"


class WrappedRule(ObservableRule):
    """A switchable view onto another rule.

    Reads are delegated to the wrapped rule and its events are re-emitted
    with this view as source. Switching the wrapped rule announces
    :class:`PropertiesChanged`. An empty view answers ``None`` for every key.
    """

    def __init__(self, rule: RuleContent | None = None) -> None:
        super().__init__()
        self._rule: RuleContent | None = None
        self.set_rule(rule)

    @property
    def rule(self) -> RuleContent | None:
        return self._rule

    def set_rule(self, rule: RuleContent | None) -> None:
        if rule is self._rule:
            return
        if self._rule is not None:
            self._rule.events.unsubscribe(PropertyChanged, self._on_changed)
            self._rule.events.unsubscribe(PropertiesChanged, self._on_all_changed)
        self._rule = rule
        if rule is not None:
            rule.events.subscribe(PropertyChanged, self._on_changed)
            rule.events.subscribe(PropertiesChanged, self._on_all_changed)
        self.fire_all_changed()

    def get_property(self, type: PropertyType, key: PropertyKey) -> Any | None:
        if self._rule is None:
            return None
        return self._rule.get_property(type, key)

    def _on_changed(self, event: PropertyChanged) -> None:
        self.fire_changed(event.key)

    def _on_all_changed(self, event: PropertiesChanged) -> None:
        self.fire_all_changed()

    def __repr__(self) -> str:
        return f"WrappedRule({self._rule!r})"
