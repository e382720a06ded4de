"""Overlay rules: a rule plus the transitions animating away from it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from styleshift.errors import ChainInvariantError, TypeMismatchError
from styleshift.events import LinkRemoved, PreviousChanged, PropertiesChanged, PropertyChanged
from styleshift.model.key import PropertyKey
from styleshift.model.rule import ObservableRule, RuleContent, WrappedRule
from styleshift.model.types import PropertyType
from styleshift.scheduler import Scheduler
from styleshift.strategy.base import Strategy
from styleshift.transition.transition import Transition

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from styleshift.transition.chain import Link, RuleChain

logger = logging.getLogger(__name__)


class OverlayRule(ObservableRule):
    """Wraps a root rule and intercepts the keys its transitions animate.

    ``root`` is the rule this overlay stands for. ``previous`` is the
    overlay that was active before it, possibly still animating. Reads of
    keys no transition overrides fall through to ``previous`` (when it
    animates the key) and otherwise to ``root``.

    An overlay is created by :meth:`RuleChain.transition` and lives as long
    as its link stays in the chain.
    """

    def __init__(self, root: RuleContent) -> None:
        super().__init__()
        self.root = root
        self._previous: OverlayRule | None = None
        self._link: Link | None = None
        self._transitions: list[Transition] = []
        self._transitioning = False
        self._detached = False
        self._source = WrappedRule(root)
        self._target = WrappedRule(None)
        root.events.subscribe(PropertyChanged, self._on_changed)
        root.events.subscribe(PropertiesChanged, self._on_all_changed)

    # --- structure --------------------------------------------------------------

    @property
    def previous(self) -> OverlayRule | None:
        return self._previous

    @property
    def link(self) -> Link | None:
        return self._link

    @property
    def chain(self) -> RuleChain | None:
        if self._link is None:
            return None
        return self._link.chain

    @property
    def scheduler(self) -> Scheduler | None:
        chain = self.chain
        if chain is None:
            return None
        return chain.scheduler

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return tuple(self._transitions)

    @property
    def transitioning(self) -> bool:
        return self._transitioning

    @property
    def target(self) -> RuleContent | None:
        return self._target.rule

    @property
    def source_view(self) -> WrappedRule:
        """Read view of whatever was authoritative before this overlay."""
        return self._source

    @property
    def target_view(self) -> WrappedRule:
        """Read view of the rule this overlay is transitioning to."""
        return self._target

    def attach(self, link: Link) -> None:
        """Called once by the link that holds this overlay."""
        if self._link is not None:
            raise ChainInvariantError("overlay is already part of a chain")
        self._link = link
        link.events.subscribe(PreviousChanged, self._on_previous_changed)
        link.events.subscribe(LinkRemoved, self._on_link_removed)

    def set_previous(self, previous: OverlayRule | None) -> None:
        if previous is self._previous:
            return
        if self._previous is not None:
            self._previous.events.unsubscribe(PropertyChanged, self._on_changed)
            self._previous.events.unsubscribe(PropertiesChanged, self._on_all_changed)
        self._previous = previous
        if previous is not None:
            previous.events.subscribe(PropertyChanged, self._on_changed)
            previous.events.subscribe(PropertiesChanged, self._on_all_changed)
        if not self._detached:
            self._source.set_rule(previous if previous is not None else self.root)
        self.fire_all_changed()

    # --- reading ----------------------------------------------------------------

    def get_property(self, type: PropertyType, key: PropertyKey) -> Any | None:
        for transition in self._transitions:
            overridden = transition.overridden.get(key)
            if overridden is not None:
                if overridden.type != type:
                    raise TypeMismatchError(key, type, overridden.type)
                return overridden.value

        previous = self._previous
        if previous is None or not previous.is_animated(key):
            return self.root.get_property(type, key)
        return previous.get_property(type, key)

    def is_animated(self, key: PropertyKey) -> bool:
        for transition in self._transitions:
            if transition.overrides(key):
                return True
        if self._previous is None:
            return False
        return self._previous.is_animated(key)

    def is_input(self, key: PropertyKey) -> bool:
        return any(transition.is_input(key) for transition in self._transitions)

    # --- animation --------------------------------------------------------------

    def animate(self, key: PropertyKey, strategy: Strategy) -> Transition:
        """Start animating *key* with *strategy*."""
        if self._detached:
            raise ChainInvariantError("cannot animate an overlay that left its chain")
        transition = Transition(self, key, strategy)
        self._transitions.append(transition)
        transition.init(self._source)
        if self._transitioning and transition.alive:
            transition.transition(self._target)
        return transition

    def transition(self, next_root: RuleContent) -> None:
        """Begin moving from this overlay's values to *next_root*."""
        self._target.set_rule(next_root)
        self._transitioning = True
        if not self._transitions:
            self._remove_link()
            return
        for transition in list(self._transitions):
            transition.transition(self._target)

    def transition_destroyed(self, transition: Transition) -> None:
        """Called by a transition whose strategy is done."""
        if transition not in self._transitions:
            return
        self._transitions.remove(transition)
        for key in transition.overridden:
            self.fire_changed(key)
        if self._transitioning and not self._transitions:
            self._remove_link()

    def cancel_transitions(self) -> None:
        """Kill every transition without running any animation logic."""
        for transition in list(self._transitions):
            transition.cancel()
        self._transitions.clear()

    def destroy(self) -> None:
        """Cancel all transitions and stop listening to every rule."""
        self.cancel_transitions()
        self._detach()

    def _remove_link(self) -> None:
        link = self._link
        if link is not None and not link.removed:
            link.remove()

    def _detach(self) -> None:
        if self._detached:
            return
        self._detached = True
        self.root.events.unsubscribe(PropertyChanged, self._on_changed)
        self.root.events.unsubscribe(PropertiesChanged, self._on_all_changed)
        if self._previous is not None:
            self._previous.events.unsubscribe(PropertyChanged, self._on_changed)
            self._previous.events.unsubscribe(PropertiesChanged, self._on_all_changed)
            self._previous = None
        self._source.set_rule(None)
        self._target.set_rule(None)

    # --- listeners --------------------------------------------------------------

    def _on_changed(self, event: PropertyChanged) -> None:
        for transition in self._transitions:
            if transition.overrides(event.key):
                return
        self.fire_changed(event.key)

    def _on_all_changed(self, event: PropertiesChanged) -> None:
        self.fire_all_changed()

    def _on_previous_changed(self, event: PreviousChanged) -> None:
        self.set_previous(event.previous.rule if event.previous is not None else None)

    def _on_link_removed(self, event: LinkRemoved) -> None:
        logger.debug("Overlay for %r left its chain", self.root)
        self.cancel_transitions()
        self._detach()

    def __repr__(self) -> str:
        return f"OverlayRule(root={self.root!r}, transitions={len(self._transitions)})"
