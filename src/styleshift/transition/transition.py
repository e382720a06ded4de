"""One running transition: a property key bound to a strategy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from styleshift.model.key import PropertyKey
from styleshift.model.property import StyleProperty
from styleshift.model.rule import RuleContent
from styleshift.model.types import PropertyType
from styleshift.scheduler import Scheduler
from styleshift.strategy.base import Strategy
from styleshift.transition.dependency import DependencyBridge

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from styleshift.transition.overlay import OverlayRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverriddenValue:
    """A value a transition currently shows instead of the rule's value."""

    type: PropertyType
    value: Any


class Transition:
    """Binds one property key to one strategy for one rule switch.

    The transition owns the values its strategy pushes, the two dependency
    bridges (source side and target side) and the link to the scheduler.
    Once the strategy reports ``destroyed`` (or the chain is destroyed) the
    transition is dead and every later call into it is ignored.
    """

    def __init__(self, overlay: OverlayRule, key: PropertyKey, strategy: Strategy) -> None:
        self.overlay = overlay
        self.key = key
        self.strategy = strategy
        self.overridden: dict[PropertyKey, OverriddenValue] = {}
        self.source_dependencies = DependencyBridge(overlay, key)
        self.target_dependencies = DependencyBridge(overlay.target_view, key)
        self.callback = StrategyCallback(self)
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def init(self, source: RuleContent) -> None:
        self.strategy.init(source, self.callback)

    def step(self, scheduler: Scheduler, delay: int) -> None:
        """Scheduler entry point, forwards to the strategy."""
        if not self._alive:
            logger.debug("Ignoring stale step of %s", self)
            return
        self.strategy.step(delay)

    def transition(self, target: RuleContent) -> None:
        if self._alive:
            self.strategy.transition(target)

    def is_input(self, key: PropertyKey) -> bool:
        return self._alive and self.strategy.is_input(key)

    def overrides(self, key: PropertyKey) -> bool:
        return key in self.overridden

    # --- strategy side ----------------------------------------------------------

    def set_property(self, type: PropertyType, key: PropertyKey, value: Any) -> None:
        if not self._alive:
            logger.debug("Ignoring value pushed by stale %s", self)
            return
        current = self.overridden.get(key)
        if current is not None and current.type == type and current.value == value:
            return
        self.overridden[key] = OverriddenValue(type, value)
        self.overlay.fire_changed(key)

    def request_step(self, delay: int | None) -> None:
        if not self._alive:
            return
        scheduler = self.overlay.scheduler
        if scheduler is None:
            logger.debug("No scheduler for %s, step request dropped", self)
            return
        scheduler.step(self, delay)

    def destroyed(self) -> None:
        """The strategy is done: drop out of the overlay."""
        if not self._alive:
            return
        self._teardown()
        logger.debug("Transition on %s finished", self.key)
        self.overlay.transition_destroyed(self)

    def cancel(self) -> None:
        """Tear down without notifying anyone, used when the chain dies."""
        if not self._alive:
            return
        self._teardown()
        self.overridden.clear()

    def _teardown(self) -> None:
        self._alive = False
        self.source_dependencies.destroy()
        self.target_dependencies.destroy()
        self.strategy.dispose()
        scheduler = self.overlay.scheduler
        if scheduler is not None:
            scheduler.cancel(self)

    def __repr__(self) -> str:
        return f"Transition(key={self.key}, strategy={type(self.strategy).__name__})"


class StrategyCallback:
    """The view of a transition its strategy works with."""

    def __init__(self, transition: Transition) -> None:
        self._transition = transition

    @property
    def key(self) -> PropertyKey:
        return self._transition.key

    def set(self, value: Any) -> None:
        """Show *value* for the transition's own key."""
        t = self._transition
        t.set_property(t.strategy.type, t.key, value)

    def set_property(self, type: PropertyType, key: PropertyKey, value: Any) -> None:
        self._transition.set_property(type, key, value)

    def get_property(self, type: PropertyType, key: PropertyKey) -> Any | None:
        return self._transition.overlay.get_property(type, key)

    def step(self, delay: int | None = None) -> None:
        """Ask to be stepped after *delay* ms, or at the next opportunity."""
        self._transition.request_step(delay)

    def add_source_dependency(self, key: str, prop: StyleProperty) -> None:
        self._transition.source_dependencies.add(key, prop)

    def remove_source_dependency(self, key: str) -> None:
        self._transition.source_dependencies.remove(key)

    def add_target_dependency(self, key: str, prop: StyleProperty) -> None:
        self._transition.target_dependencies.add(key, prop)

    def remove_target_dependency(self, key: str) -> None:
        self._transition.target_dependencies.remove(key)

    def destroyed(self) -> None:
        self._transition.destroyed()
