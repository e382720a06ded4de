"""Forwarding rule values into property containers.

A :class:`PropertyForwarder` keeps every property of a container (and,
recursively, every sub-property) filled with the value a rule holds under
the property's combined key, and keeps it current while the rule changes.

A :class:`DependencyBridge` is the container a strategy registers its
dependencies in. Dependencies live below the transition's own key: a
dependency ``duration`` of a transition on ``color`` reads ``color.duration``.
"""

from __future__ import annotations

import logging
from typing import Callable

from styleshift.errors import DuplicateDependencyError
from styleshift.events import (
    PropertiesChanged,
    PropertyAdded,
    PropertyChanged,
    PropertyRemoved,
)
from styleshift.model.key import PropertyKey
from styleshift.model.property import PropertyContainer, StyleProperty
from styleshift.model.rule import RuleContent

logger = logging.getLogger(__name__)

KeyCombiner = Callable[[PropertyKey | None, str], PropertyKey]


def combine_keys(parent: PropertyKey | None, name: str) -> PropertyKey:
    if parent is None:
        return PropertyKey((name,))
    return parent.append(name)


class PropertyForwarder:
    """Pushes values of *rule* into the properties of *container*."""

    def __init__(
        self,
        rule: RuleContent | None,
        container: PropertyContainer,
        combine: KeyCombiner = combine_keys,
        *,
        reset_on_unbind: bool = False,
    ) -> None:
        self._rule: RuleContent | None = None
        self._container = container
        self._combine = combine
        self._reset_on_unbind = reset_on_unbind
        self._bound: dict[PropertyKey, StyleProperty] = {}
        self._watched: dict[PropertyContainer, PropertyKey | None] = {}
        self._destroyed = False
        self.set_rule(rule)
        self._watch(container, None)

    @property
    def bound_keys(self) -> list[PropertyKey]:
        return list(self._bound)

    def set_rule(self, rule: RuleContent | None) -> None:
        """Read from *rule* from now on and refresh every bound property."""
        if self._destroyed or rule is self._rule:
            return
        if self._rule is not None:
            self._rule.events.unsubscribe(PropertyChanged, self._on_rule_changed)
            self._rule.events.unsubscribe(PropertiesChanged, self._on_rule_all_changed)
        self._rule = rule
        if rule is not None:
            rule.events.subscribe(PropertyChanged, self._on_rule_changed)
            rule.events.subscribe(PropertiesChanged, self._on_rule_all_changed)
        for key, prop in list(self._bound.items()):
            self._update(key, prop)

    def destroy(self) -> None:
        """Unregister every listener. Calling this twice does nothing."""
        if self._destroyed:
            return
        self._destroyed = True
        for container in list(self._watched):
            self._unwatch(container)
        if self._rule is not None:
            self._rule.events.unsubscribe(PropertyChanged, self._on_rule_changed)
            self._rule.events.unsubscribe(PropertiesChanged, self._on_rule_all_changed)
            self._rule = None
        if self._reset_on_unbind:
            for prop in self._bound.values():
                prop.set(None)
        self._bound.clear()

    # --- containers -----------------------------------------------------------

    def _watch(self, container: PropertyContainer, key: PropertyKey | None) -> None:
        self._watched[container] = key
        container.events.subscribe(PropertyAdded, self._on_property_added)
        container.events.subscribe(PropertyRemoved, self._on_property_removed)
        for name in container.property_keys():
            prop = container.get_property(name)
            if prop is not None:
                self._bind(self._combine(key, name), prop)

    def _unwatch(self, container: PropertyContainer) -> None:
        container.events.unsubscribe(PropertyAdded, self._on_property_added)
        container.events.unsubscribe(PropertyRemoved, self._on_property_removed)
        self._watched.pop(container, None)

    def _bind(self, key: PropertyKey, prop: StyleProperty) -> None:
        if key in self._bound:
            raise DuplicateDependencyError(str(key))
        self._update(key, prop)
        self._bound[key] = prop
        self._watch(prop, key)

    def _unbind(self, key: PropertyKey, prop: StyleProperty) -> None:
        self._unwatch(prop)
        for name in prop.property_keys():
            sub = prop.get_property(name)
            if sub is not None:
                self._unbind(key.append(name), sub)
        self._bound.pop(key, None)
        if self._reset_on_unbind:
            prop.set(None)

    def _update(self, key: PropertyKey, prop: StyleProperty) -> None:
        if self._rule is None:
            prop.set(None)
        else:
            prop.set(self._rule.get_property(prop.type, key))

    def _on_property_added(self, event: PropertyAdded) -> None:
        if event.source in self._watched:
            key = self._combine(self._watched[event.source], event.key)
            self._bind(key, event.property)

    def _on_property_removed(self, event: PropertyRemoved) -> None:
        if event.source in self._watched:
            key = self._combine(self._watched[event.source], event.key)
            self._unbind(key, event.property)

    # --- rule -----------------------------------------------------------------

    def _on_rule_changed(self, event: PropertyChanged) -> None:
        prop = self._bound.get(event.key)
        if prop is not None:
            self._update(event.key, prop)

    def _on_rule_all_changed(self, event: PropertiesChanged) -> None:
        for key, prop in list(self._bound.items()):
            self._update(key, prop)


class DependencyBridge(PropertyContainer):
    """Dependencies of one transition, forwarded from one rule.

    Each dependency is registered under a local sub-key and receives the
    rule's value at ``<transition key>.<sub-key>``.
    """

    def __init__(self, rule: RuleContent | None, transition_key: PropertyKey) -> None:
        super().__init__()
        self.transition_key = transition_key
        self._forwarder = PropertyForwarder(rule, self, self.combined_key)

    def combined_key(self, parent: PropertyKey | None, name: str) -> PropertyKey:
        if parent is None:
            return self.transition_key.append(name)
        return parent.append(name)

    def add(self, key: str, prop: StyleProperty) -> None:
        if key in self._properties:
            raise DuplicateDependencyError(key)
        self.combined_key(None, key)
        try:
            self._add(key, prop)
        except ValueError:
            # The rule holds a value the property cannot take.
            self._properties.pop(key, None)
            raise

    def remove(self, key: str) -> None:
        self._remove(key)

    def destroy(self) -> None:
        self._forwarder.destroy()
        logger.debug("Dependency bridge of %s destroyed", self.transition_key)
