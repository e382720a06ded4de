"""Binding a styled item to a rule chain."""

from __future__ import annotations

import logging

from styleshift.model.item import StyledItem
from styleshift.model.key import PropertyKey
from styleshift.model.rule import RuleContent
from styleshift.scheduler import Scheduler
from styleshift.strategy.registry import StrategyRegistry
from styleshift.transition.chain import RuleChain
from styleshift.transition.dependency import PropertyForwarder
from styleshift.transition.overlay import OverlayRule

logger = logging.getLogger(__name__)


class ItemBinding:
    """Keeps the properties of one item in sync with its active rule.

    Every time the item's rule changes, each of the item's properties is
    wrapped in the strategy the registry picks for it (instant unless
    configured otherwise) before the chain switches to the new rule. The
    resolved values of the chain's tail are forwarded into the item's
    properties as they change.
    """

    def __init__(
        self,
        item: StyledItem,
        scheduler: Scheduler,
        registry: StrategyRegistry | None = None,
    ) -> None:
        self.item = item
        self.registry = registry or StrategyRegistry()
        self.chain: RuleChain | None = None
        self._scheduler = scheduler
        self._forwarder: PropertyForwarder | None = None

    @property
    def rule(self) -> OverlayRule | None:
        """The overlay the item currently reads from."""
        if self.chain is None:
            return None
        return self.chain.rule

    @property
    def root(self) -> RuleContent | None:
        """The rule the item is currently moving towards."""
        if self.chain is None:
            return None
        return self.chain.rule.root

    def set_rule(self, rule: RuleContent) -> OverlayRule:
        """Make *rule* the item's active rule."""
        if self.chain is None:
            self.chain = RuleChain(self._scheduler, rule, item=self.item)
            self._forwarder = PropertyForwarder(self.chain.rule, self.item, reset_on_unbind=True)
            return self.chain.rule

        if rule is self.chain.rule.root:
            return self.chain.rule

        for name in self.item.property_keys():
            prop = self.item.get_property(name)
            if prop is None:
                continue
            key = PropertyKey((name,))
            self.chain.animate(key, self.registry.create(key, prop.type))
        overlay = self.chain.transition(rule)
        assert self._forwarder is not None
        self._forwarder.set_rule(overlay)
        logger.debug("Item %r now follows %r", self.item, rule)
        return overlay

    def destroy(self) -> None:
        """Unbind the item; its properties are reset to ``None``."""
        if self._forwarder is not None:
            self._forwarder.destroy()
            self._forwarder = None
        if self.chain is not None:
            self.chain.destroy()
            self.chain = None
