"""Rule sheet model: declared property types, transitions and rules."""

from __future__ import annotations

from dataclasses import dataclass, field

from styleshift.config import EngineConfig
from styleshift.model.item import SimpleItem
from styleshift.model.rule import StaticRule
from styleshift.model.types import get_type


@dataclass(frozen=True)
class TransitionSpec:
    """How properties of one key or type animate."""

    strategy: str  # "instant", "threshold", "linear"
    duration: int | None = None  # ms, None = engine default


@dataclass
class RuleSheet:
    """Everything declared in one rule sheet."""

    properties: dict[str, str] = field(default_factory=dict)  # key -> type name
    transitions: dict[str, TransitionSpec] = field(default_factory=dict)
    rules: dict[str, StaticRule] = field(default_factory=dict)

    def rule(self, name: str) -> StaticRule:
        try:
            return self.rules[name]
        except KeyError:
            raise KeyError(f"no rule named {name!r}") from None

    def config(self, base: EngineConfig | None = None) -> EngineConfig:
        """Engine configuration with this sheet's transitions applied."""
        base = base or EngineConfig()
        declared = EngineConfig(
            strategies={target: spec.strategy for target, spec in self.transitions.items()},
            durations={
                target: spec.duration
                for target, spec in self.transitions.items()
                if spec.duration is not None
            },
        )
        return base.merged(declared)

    def item(self, name: str = "item") -> SimpleItem:
        """A fresh item carrying every declared property."""
        return SimpleItem(name, {key: get_type(type_name) for key, type_name in self.properties.items()})
