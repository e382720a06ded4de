"""Rule chains: the ordered overlays currently active for one styled item."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from styleshift.errors import ChainInvariantError
from styleshift.events import EventBus, LinkRemoved, NextChanged, PreviousChanged
from styleshift.model.key import PropertyKey, as_key
from styleshift.model.rule import RuleContent, StaticRule
from styleshift.scheduler import Scheduler
from styleshift.strategy.base import Strategy
from styleshift.transition.overlay import OverlayRule

logger = logging.getLogger(__name__)


class Link:
    """One node of a rule chain, holding one overlay.

    Neighbour changes and the removal are announced on ``events`` as
    :class:`PreviousChanged`, :class:`NextChanged` and :class:`LinkRemoved`.
    A removed link never returns into a chain.
    """

    def __init__(self, chain: RuleChain, rule: OverlayRule) -> None:
        self.chain: RuleChain | None = chain
        self.rule = rule
        self.previous: Link | None = None
        self.next: Link | None = None
        self.events = EventBus()
        self._removed = False
        rule.attach(self)

    @property
    def removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        """Take this link out of its chain.

        Raises:
            ChainInvariantError: if this is the only link of the chain.
        """
        if self._removed or self.chain is None:
            logger.debug("Link of %r already removed", self.rule)
            return
        if len(self.chain) < 2:
            raise ChainInvariantError("cannot remove the only link of a rule chain")
        self.chain._unlink(self)

    def __repr__(self) -> str:
        return f"Link(rule={self.rule!r}, removed={self._removed})"


class RuleChain:
    """Ordered, doubly linked overlays of one styled item.

    The chain always holds at least one link. The tail overlay is the
    authoritative view of the item's properties; links in front of it
    belong to rules that are still animating away.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        root: RuleContent | None = None,
        *,
        item: Any = None,
    ) -> None:
        self.scheduler = scheduler
        self.item = item
        self._head: Link | None = None
        self._tail: Link | None = None
        self._size = 0
        self._destroyed = False
        self._append(OverlayRule(root if root is not None else StaticRule("empty")))

    def __len__(self) -> int:
        return self._size

    def links(self) -> Iterator[Link]:
        """Iterate the links from head to tail."""
        link = self._head
        while link is not None:
            following = link.next
            yield link
            link = following

    @property
    def head(self) -> Link:
        assert self._head is not None
        return self._head

    @property
    def tail(self) -> Link:
        assert self._tail is not None
        return self._tail

    @property
    def rule(self) -> OverlayRule:
        """The overlay readers should use."""
        return self.tail.rule

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def animate(self, key: str | PropertyKey, strategy: Strategy) -> OverlayRule:
        """Animate *key* with *strategy* on the current tail overlay."""
        self._check_alive()
        self.tail.rule.animate(as_key(key), strategy)
        return self.tail.rule

    def transition(self, next_rule: RuleContent) -> OverlayRule:
        """Switch to *next_rule*, letting the current tail animate away."""
        self._check_alive()
        old = self.tail.rule
        self._append(OverlayRule(next_rule))
        logger.debug("Transition to %r, chain length %d", next_rule, self._size)
        old.transition(next_rule)
        return self.tail.rule

    def destroy(self) -> None:
        """Tear the chain down at once, ignoring running animations.

        Every transition is cancelled, every link but the terminal one is
        removed and the terminal overlay stops listening to its root. The
        chain cannot be used for new transitions afterwards.
        """
        if self._destroyed:
            return
        self._destroyed = True
        for link in list(self.links()):
            link.rule.cancel_transitions()
        terminal = self.tail
        for link in list(self.links()):
            if link is not terminal:
                self._unlink(link)
        terminal.rule.destroy()
        logger.debug("Rule chain destroyed")
        terminal.rule.fire_all_changed()

    def _check_alive(self) -> None:
        if self._destroyed:
            raise ChainInvariantError("rule chain has been destroyed")

    def _append(self, overlay: OverlayRule) -> None:
        link = Link(self, overlay)
        previous = self._tail
        link.previous = previous
        if previous is None:
            self._head = link
        else:
            previous.next = link
        self._tail = link
        self._size += 1
        if previous is not None:
            previous.events.emit(NextChanged(link=previous, next=link))
        link.events.emit(PreviousChanged(link=link, previous=previous))

    def _unlink(self, link: Link) -> None:
        previous, following = link.previous, link.next
        if previous is None:
            self._head = following
        else:
            previous.next = following
        if following is None:
            self._tail = previous
        else:
            following.previous = previous
        link.previous = None
        link.next = None
        link.chain = None
        link._removed = True
        self._size -= 1

        logger.debug("Removed link of %r, chain length %d", link.rule.root, self._size)
        if previous is not None:
            previous.events.emit(NextChanged(link=previous, next=following))
        if following is not None:
            following.events.emit(PreviousChanged(link=following, previous=previous))
        link.events.emit(LinkRemoved(link=link))
