"""Interpolation strategies and the registry choosing them per property."""

from styleshift.strategy.base import FORCED_STEP, BaseStrategy, Strategy, TransitionCallback
from styleshift.strategy.instant import InstantStrategy
from styleshift.strategy.registry import (
    StrategyFactory,
    StrategyRegistry,
    create_default_registry,
    strategy_factory,
)
from styleshift.strategy.timed import (
    DEFAULT_DURATION_MS,
    DURATION_KEY,
    LinearStrategy,
    ThresholdStrategy,
    TimedStrategy,
    threshold_blend,
)

__all__ = [
    "DEFAULT_DURATION_MS",
    "DURATION_KEY",
    "FORCED_STEP",
    "BaseStrategy",
    "InstantStrategy",
    "LinearStrategy",
    "Strategy",
    "StrategyFactory",
    "StrategyRegistry",
    "ThresholdStrategy",
    "TimedStrategy",
    "TransitionCallback",
    "create_default_registry",
    "strategy_factory",
    "threshold_blend",
]
