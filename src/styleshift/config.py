"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class EngineConfig:
    """Defaults used when strategies are created for item properties."""

    default_duration_ms: int = 500
    frame_interval_ms: int = 16
    threshold: float = 0.5
    # Property key or type name -> strategy name ("instant", "threshold", "linear").
    strategies: dict[str, str] = field(default_factory=dict)
    # Property key or type name -> duration in ms, overrides default_duration_ms.
    durations: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.default_duration_ms < 0:
            raise ValueError("default_duration_ms must not be negative")
        if self.frame_interval_ms < 0:
            raise ValueError("frame_interval_ms must not be negative")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError("threshold must be between 0 and 1")

    def merged(self, other: EngineConfig) -> EngineConfig:
        """Return a copy whose per-property entries are extended by *other*."""
        return replace(
            self,
            strategies={**self.strategies, **other.strategies},
            durations={**self.durations, **other.durations},
        )
