"""styleshift - animated transitions between style rules."""

from styleshift.binding import ItemBinding
from styleshift.config import EngineConfig
from styleshift.errors import (
    ChainInvariantError,
    DuplicateDependencyError,
    SheetParseError,
    StyleshiftError,
    TypeMismatchError,
    UnknownStrategyError,
    UnknownTypeError,
)
from styleshift.scheduler import ManualScheduler, MonotonicScheduler
from styleshift.transition import OverlayRule, RuleChain

__version__ = "0.1.0"

__all__ = [
    "ChainInvariantError",
    "DuplicateDependencyError",
    "EngineConfig",
    "ItemBinding",
    "ManualScheduler",
    "MonotonicScheduler",
    "OverlayRule",
    "RuleChain",
    "SheetParseError",
    "StyleshiftError",
    "TypeMismatchError",
    "UnknownStrategyError",
    "UnknownTypeError",
    "__version__",
]
