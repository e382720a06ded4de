"""Timed strategies: progress driven by accumulated step delays."""

from __future__ import annotations

import logging
from typing import Any

from styleshift.model.key import PropertyKey
from styleshift.model.property import StyleProperty
from styleshift.model.rule import RuleContent
from styleshift.model.types import INTEGER, PropertyType
from styleshift.strategy.base import FORCED_STEP, BaseStrategy, TransitionCallback

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 500
DEFAULT_THRESHOLD = 0.5

# Sub-key a rule can set to choose the duration of transitions into it.
DURATION_KEY = "duration"


def threshold_blend(source: Any, target: Any, progress: float, threshold: float = DEFAULT_THRESHOLD) -> Any:
    """Return *source* before *threshold* and *target* from it on."""
    if progress < threshold:
        return source
    return target


class TimedStrategy(BaseStrategy):
    """Base for strategies that run for a fixed duration.

    Each step adds its delay to the elapsed time, ``progress`` is the
    elapsed time over the duration clamped to ``[0, 1]``. Subclasses only
    decide how a value looks at a given progress. Once progress reaches 1
    the strategy reports ``destroyed``.

    The duration can be overridden by the rule that is transitioned to:
    a value at ``<key>.duration`` in the target rule wins over the
    configured one.
    """

    def __init__(self, type: PropertyType, duration: int = DEFAULT_DURATION_MS) -> None:
        super().__init__(type)
        if duration < 0:
            raise ValueError("duration must not be negative")
        self.duration = duration
        self.elapsed = 0
        self.target_duration = StyleProperty(INTEGER)

    @property
    def effective_duration(self) -> int:
        override = self.target_duration.value
        if override is not None and override >= 0:
            return override
        return self.duration

    @property
    def progress(self) -> float:
        duration = self.effective_duration
        if duration <= 0:
            return 1.0
        return min(max(self.elapsed / duration, 0.0), 1.0)

    def init(self, source: RuleContent, callback: TransitionCallback) -> None:
        super().init(source, callback)
        self._listen(source)
        callback.add_target_dependency(DURATION_KEY, self.target_duration)
        callback.set(self.source_value())

    def transition(self, target: RuleContent) -> None:
        super().transition(target)
        if self.disposed or self.callback is None:
            return
        self._listen(target)
        logger.debug("Starting %s over %d ms", self, self.effective_duration)
        self.step(FORCED_STEP)
        if not self.disposed:
            self.callback.step()

    def step(self, delay: int) -> None:
        if self.disposed or self.callback is None:
            return
        if self.target is None:
            self.callback.set(self.source_value())
            return
        if delay != FORCED_STEP:
            self.elapsed += delay
        progress = self.progress
        self.callback.set(self.interpolate(self.source_value(), self.target_value(), progress))
        if progress >= 1.0:
            callback = self.callback
            self.dispose()
            callback.destroyed()
        elif delay != FORCED_STEP:
            self.callback.step()

    def is_input(self, key: PropertyKey) -> bool:
        own = self.key
        if own is None:
            return False
        return key == own or key == own.append(DURATION_KEY)

    def interpolate(self, source: Any, target: Any, progress: float) -> Any:
        raise NotImplementedError


class ThresholdStrategy(TimedStrategy):
    """Jumps from source to target halfway through the duration."""

    def __init__(
        self,
        type: PropertyType,
        duration: int = DEFAULT_DURATION_MS,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        super().__init__(type, duration)
        self.threshold = threshold

    def interpolate(self, source: Any, target: Any, progress: float) -> Any:
        return threshold_blend(source, target, progress, self.threshold)


class LinearStrategy(TimedStrategy):
    """Blends linearly using the property type's blend.

    Values the type cannot blend jump like :class:`ThresholdStrategy`.
    """

    def interpolate(self, source: Any, target: Any, progress: float) -> Any:
        if progress <= 0.0:
            return source
        if progress >= 1.0:
            return target
        blended = self.type.blend(source, target, progress)
        if blended is None:
            return threshold_blend(source, target, progress)
        return blended
