"""Strategy and callback protocols, plus the shared strategy base class.

A strategy decides how one property travels from its source value to its
target value. It talks to the engine only through the callback it receives
in :meth:`Strategy.init`: it pushes values with ``set``, asks for future
``step`` calls and finally reports ``destroyed``.
"""

from __future__ import annotations

from typing import Any, Protocol

from styleshift.events import PropertiesChanged, PropertyChanged
from styleshift.model.key import PropertyKey
from styleshift.model.property import StyleProperty
from styleshift.model.rule import RuleContent
from styleshift.model.types import PropertyType

# Delay passed to Strategy.step for an evaluation outside the normal cadence.
FORCED_STEP = -1


class TransitionCallback(Protocol):
    """What a running transition offers to its strategy."""

    key: PropertyKey

    def set(self, value: Any) -> None: ...

    def set_property(self, type: PropertyType, key: PropertyKey, value: Any) -> None: ...

    def get_property(self, type: PropertyType, key: PropertyKey) -> Any | None: ...

    def step(self, delay: int | None = None) -> None: ...

    def add_source_dependency(self, key: str, prop: StyleProperty) -> None: ...

    def remove_source_dependency(self, key: str) -> None: ...

    def add_target_dependency(self, key: str, prop: StyleProperty) -> None: ...

    def remove_target_dependency(self, key: str) -> None: ...

    def destroyed(self) -> None: ...


class Strategy(Protocol):
    """Pluggable interpolation behaviour of one property."""

    type: PropertyType

    def init(self, source: RuleContent, callback: TransitionCallback) -> None: ...

    def transition(self, target: RuleContent) -> None: ...

    def step(self, delay: int) -> None: ...

    def is_input(self, key: PropertyKey) -> bool: ...

    def dispose(self) -> None: ...


class BaseStrategy:
    """Common bookkeeping: source, target, callback and rule listeners."""

    def __init__(self, type: PropertyType) -> None:
        self.type = type
        self.source: RuleContent | None = None
        self.target: RuleContent | None = None
        self.callback: TransitionCallback | None = None
        self._observed: list[RuleContent] = []
        self._disposed = False

    @property
    def key(self) -> PropertyKey | None:
        if self.callback is None:
            return None
        return self.callback.key

    @property
    def disposed(self) -> bool:
        return self._disposed

    def init(self, source: RuleContent, callback: TransitionCallback) -> None:
        self.source = source
        self.callback = callback

    def transition(self, target: RuleContent) -> None:
        self.target = target

    def step(self, delay: int) -> None:
        raise NotImplementedError

    def is_input(self, key: PropertyKey) -> bool:
        return False

    def source_value(self) -> Any | None:
        if self.source is None or self.key is None:
            return None
        return self.source.get_property(self.type, self.key)

    def target_value(self) -> Any | None:
        if self.target is None or self.key is None:
            return None
        return self.target.get_property(self.type, self.key)

    def refresh(self) -> None:
        """Re-evaluate outside the normal step cadence."""
        if not self._disposed:
            self.step(FORCED_STEP)

    def dispose(self) -> None:
        """Stop listening to rules; later calls into the strategy do nothing."""
        self._disposed = True
        for rule in self._observed:
            rule.events.unsubscribe(PropertyChanged, self._on_property_changed)
            rule.events.unsubscribe(PropertiesChanged, self._on_properties_changed)
        self._observed.clear()

    def _listen(self, rule: RuleContent) -> None:
        rule.events.subscribe(PropertyChanged, self._on_property_changed)
        rule.events.subscribe(PropertiesChanged, self._on_properties_changed)
        self._observed.append(rule)

    def _on_property_changed(self, event: PropertyChanged) -> None:
        if event.key == self.key:
            self.refresh()

    def _on_properties_changed(self, event: PropertiesChanged) -> None:
        self.refresh()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type}, key={self.key})"
