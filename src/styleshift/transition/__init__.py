"""Transition engine: rule chains, overlays, transitions and dependencies."""

from styleshift.transition.chain import Link, RuleChain
from styleshift.transition.dependency import DependencyBridge, PropertyForwarder, combine_keys
from styleshift.transition.overlay import OverlayRule
from styleshift.transition.transition import OverriddenValue, StrategyCallback, Transition

__all__ = [
    "DependencyBridge",
    "Link",
    "OverlayRule",
    "OverriddenValue",
    "PropertyForwarder",
    "RuleChain",
    "StrategyCallback",
    "Transition",
    "combine_keys",
]
