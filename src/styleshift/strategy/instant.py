"""Instant strategy: no interpolation at all."""

from __future__ import annotations

from styleshift.model.rule import RuleContent
from styleshift.strategy.base import FORCED_STEP, BaseStrategy, TransitionCallback


class InstantStrategy(BaseStrategy):
    """Mirrors the source value and ends at the first step after a switch.

    This is the default for every property, so that properties can be
    wrapped uniformly whether or not they are animated.
    """

    def init(self, source: RuleContent, callback: TransitionCallback) -> None:
        super().init(source, callback)
        self._listen(source)
        callback.set(self.source_value())

    def transition(self, target: RuleContent) -> None:
        super().transition(target)
        if self.callback is not None and not self.disposed:
            self.callback.step()

    def step(self, delay: int) -> None:
        if self.disposed or self.callback is None:
            return
        if self.target is None or delay == FORCED_STEP:
            self.callback.set(self.source_value())
            return
        callback = self.callback
        self.dispose()
        callback.destroyed()
