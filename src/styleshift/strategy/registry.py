"""Strategy registry: picks the strategy of each property."""

from __future__ import annotations

import logging
from typing import Callable

from styleshift.config import EngineConfig
from styleshift.errors import UnknownStrategyError
from styleshift.model.key import PropertyKey
from styleshift.model.types import PropertyType, is_type_name
from styleshift.strategy.base import Strategy
from styleshift.strategy.instant import InstantStrategy
from styleshift.strategy.timed import LinearStrategy, ThresholdStrategy

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[PropertyKey, PropertyType], Strategy]


class StrategyRegistry:
    """Maps property keys and property types to strategy factories."""

    def __init__(self) -> None:
        self._by_key: dict[PropertyKey, StrategyFactory] = {}
        self._by_type: dict[str, StrategyFactory] = {}
        self._default: StrategyFactory = lambda key, type: InstantStrategy(type)

    def register(self, type_name: str, factory: StrategyFactory) -> None:
        """Register a factory for every property of a named type."""
        self._by_type[type_name] = factory

    def register_key(self, key: PropertyKey, factory: StrategyFactory) -> None:
        """Register a factory for one property key."""
        self._by_key[key] = factory

    def set_default(self, factory: StrategyFactory) -> None:
        """Set the fallback factory used when no specific match is found."""
        self._default = factory

    def create(self, key: PropertyKey, type: PropertyType) -> Strategy:
        """Create a new strategy for the given property.

        Resolution order:
        1. Factory registered for the key
        2. Factory registered for the type name
        3. Default factory (instant)
        """
        if key in self._by_key:
            return self._by_key[key](key, type)
        if type.name in self._by_type:
            return self._by_type[type.name](key, type)
        return self._default(key, type)


def strategy_factory(name: str, duration: int, threshold: float = 0.5) -> StrategyFactory:
    """Build a factory for a strategy known by *name*."""
    if name == "instant":
        return lambda key, type: InstantStrategy(type)
    if name == "threshold":
        return lambda key, type: ThresholdStrategy(type, duration, threshold)
    if name == "linear":
        return lambda key, type: LinearStrategy(type, duration)
    raise UnknownStrategyError(name)


def create_default_registry(config: EngineConfig | None = None) -> StrategyRegistry:
    """Create a StrategyRegistry configured from *config*.

    Each entry of ``config.strategies`` names either a property type or a
    property key; entries naming a known type are registered per type,
    everything else per key.

    Args:
        config: Engine configuration. Defaults are used if None.

    Returns:
        A fully configured StrategyRegistry.
    """
    config = config or EngineConfig()
    registry = StrategyRegistry()

    for target, name in config.strategies.items():
        duration = config.durations.get(target, config.default_duration_ms)
        try:
            factory = strategy_factory(name, duration, config.threshold)
        except UnknownStrategyError:
            logger.warning("Unknown strategy %r for %r, using instant", name, target)
            factory = strategy_factory("instant", duration)
        if is_type_name(target):
            registry.register(target, factory)
        else:
            registry.register_key(PropertyKey.parse(target), factory)

    return registry
