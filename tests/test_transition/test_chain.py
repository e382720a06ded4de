"""Tests for rule chains, overlays and transitions."""

from __future__ import annotations

from typing import Any

import pytest

from styleshift.errors import ChainInvariantError, DuplicateDependencyError, TypeMismatchError
from styleshift.events import PropertyChanged
from styleshift.model import COLOR, INTEGER, STRING, Color, PropertyKey, StaticRule, StyleProperty
from styleshift.scheduler import ManualScheduler
from styleshift.strategy import BaseStrategy, InstantStrategy, LinearStrategy
from styleshift.transition import RuleChain

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)
COLOR_KEY = PropertyKey.parse("color")
WIDTH_KEY = PropertyKey.parse("width")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _FixedStrategy(BaseStrategy):
    """Shows one fixed value and never finishes on its own."""

    def __init__(self, type, value: Any) -> None:
        super().__init__(type)
        self.value = value

    def init(self, source, callback) -> None:
        super().init(source, callback)
        callback.set(self.value)

    def step(self, delay: int) -> None:
        pass


class _DependentStrategy(_FixedStrategy):
    """Reads an offset below its own key from the source side."""

    def __init__(self, type, value: Any) -> None:
        super().__init__(type, value)
        self.offset = StyleProperty(INTEGER)

    def init(self, source, callback) -> None:
        super().init(source, callback)
        callback.add_source_dependency("offset", self.offset)


def _rules() -> tuple[StaticRule, StaticRule]:
    return StaticRule("idle", {"color": "#ff0000"}), StaticRule("hover", {"color": "#0000ff"})


def _color(chain: RuleChain) -> Color | None:
    return chain.rule.get_property(COLOR, COLOR_KEY)


# ---------------------------------------------------------------------------
# Chain structure
# ---------------------------------------------------------------------------


class TestChainStructure:
    def test_new_chain_has_one_link(self) -> None:
        chain = RuleChain(ManualScheduler(), StaticRule("idle"))
        assert len(chain) == 1
        assert chain.head is chain.tail
        assert chain.head.previous is None
        assert chain.head.next is None

    def test_chain_without_root_reads_nothing(self) -> None:
        chain = RuleChain(ManualScheduler())
        assert _color(chain) is None

    def test_reads_fall_through_to_root(self) -> None:
        idle, _ = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        assert _color(chain) == RED

    def test_root_changes_are_forwarded(self) -> None:
        idle, _ = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        seen: list[PropertyChanged] = []
        chain.rule.events.subscribe(PropertyChanged, seen.append)
        idle.set("color", "lime")
        assert [e.key for e in seen] == [COLOR_KEY]
        assert _color(chain) == Color(0, 255, 0)

    def test_switch_without_animation_collapses_at_once(self) -> None:
        idle, hover = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        chain.transition(hover)
        assert len(chain) == 1
        assert chain.rule.root is hover
        assert _color(chain) == BLUE

    def test_links_are_doubly_linked(self) -> None:
        idle, hover = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        first, second = list(chain.links())
        assert first.next is second
        assert second.previous is first
        assert chain.rule.previous is first.rule

    def test_removing_sole_link_fails(self) -> None:
        chain = RuleChain(ManualScheduler(), StaticRule("idle"))
        with pytest.raises(ChainInvariantError):
            chain.head.remove()
        assert len(chain) == 1


# ---------------------------------------------------------------------------
# Animated transitions
# ---------------------------------------------------------------------------


class TestLinearTransition:
    def test_red_to_blue(self) -> None:
        idle, hover = _rules()
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)

        assert len(chain) == 2
        assert _color(chain) == RED

        scheduler.advance(50)
        assert _color(chain) == Color(128, 0, 128)
        assert len(chain) == 2

        scheduler.advance(60)
        assert _color(chain) == BLUE
        assert len(chain) == 1
        assert chain.rule.root is hover
        assert scheduler.pending == 0

    def test_tail_announces_progress(self) -> None:
        idle, hover = _rules()
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        tail = chain.transition(hover)
        seen: list[PropertyChanged] = []
        tail.events.subscribe(PropertyChanged, seen.append)
        scheduler.advance(50)
        assert COLOR_KEY in [e.key for e in seen]

    def test_removed_link_is_marked_and_inert(self) -> None:
        idle, hover = _rules()
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        old = chain.head
        scheduler.advance(100)
        assert old.removed
        assert old.chain is None
        old.remove()
        assert len(chain) == 1

    def test_duration_override_from_target_rule(self) -> None:
        idle, hover = _rules()
        hover.set("color.duration", "200")
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        scheduler.advance(100)
        assert _color(chain) == Color(128, 0, 128)
        assert len(chain) == 2
        scheduler.advance(100)
        assert _color(chain) == BLUE
        assert len(chain) == 1

    def test_unanimated_keys_jump(self) -> None:
        idle = StaticRule("idle", {"color": "#ff0000", "label": "Idle"})
        hover = StaticRule("hover", {"color": "#0000ff", "label": "Hover"})
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        assert chain.rule.get_property(STRING, PropertyKey.parse("label")) == "Hover"

    def test_second_switch_without_animation(self) -> None:
        idle = StaticRule("idle", {"color": "#ff0000", "width": "1"})
        hover = StaticRule("hover", {"color": "#0000ff", "width": "2"})
        focus = StaticRule("focus", {"color": "lime", "width": "3"})
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        middle = chain.tail
        chain.transition(focus)

        assert middle.removed
        assert len(chain) == 2
        assert chain.head.next is chain.tail
        assert chain.rule.previous is chain.head.rule
        assert chain.rule.get_property(INTEGER, WIDTH_KEY) == 3

        scheduler.advance(200)
        assert len(chain) == 1
        assert chain.rule.root is focus
        assert _color(chain) == Color(0, 255, 0)
        assert chain.rule.get_property(INTEGER, WIDTH_KEY) == 3

    def test_animate_while_transitioning(self) -> None:
        idle = StaticRule("idle", {"color": "#ff0000", "width": "0"})
        hover = StaticRule("hover", {"color": "#0000ff", "width": "100"})
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)

        late = chain.head.rule.animate(WIDTH_KEY, LinearStrategy(INTEGER, 100))
        assert late.alive
        assert chain.rule.get_property(INTEGER, WIDTH_KEY) == 0

        scheduler.advance(50)
        assert chain.rule.get_property(INTEGER, WIDTH_KEY) == 50
        assert len(chain) == 2

        scheduler.advance(60)
        assert not late.alive
        assert len(chain) == 1
        assert chain.rule.get_property(INTEGER, WIDTH_KEY) == 100

    def test_rapid_switches_collapse(self) -> None:
        idle, hover = _rules()
        focus = StaticRule("focus", {"color": "lime"})
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(focus)
        assert len(chain) == 3

        scheduler.advance(200)
        assert len(chain) == 1
        assert chain.rule.root is focus
        assert _color(chain) == Color(0, 255, 0)


class TestInstantTransition:
    def test_switches_after_one_step(self) -> None:
        idle, hover = _rules()
        scheduler = ManualScheduler(frame_interval_ms=16)
        chain = RuleChain(scheduler, idle)
        chain.animate("color", InstantStrategy(COLOR))
        chain.transition(hover)
        assert _color(chain) == RED
        assert len(chain) == 2

        scheduler.advance(16)
        assert _color(chain) == BLUE
        assert len(chain) == 1


# ---------------------------------------------------------------------------
# Overlay reads
# ---------------------------------------------------------------------------


class TestOverlayReads:
    def test_type_conflict(self) -> None:
        idle, _ = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        chain.animate("color", InstantStrategy(COLOR))
        with pytest.raises(TypeMismatchError):
            chain.rule.get_property(STRING, COLOR_KEY)

    def test_first_registered_transition_wins(self) -> None:
        chain = RuleChain(ManualScheduler(), StaticRule("idle"))
        chain.animate("label", _FixedStrategy(STRING, "first"))
        chain.animate("label", _FixedStrategy(STRING, "second"))
        assert chain.rule.get_property(STRING, PropertyKey.parse("label")) == "first"

    def test_is_animated(self) -> None:
        idle, hover = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        tail = chain.transition(hover)
        assert tail.is_animated(COLOR_KEY)
        assert not tail.is_animated(PropertyKey.parse("width"))

    def test_is_input(self) -> None:
        idle, _ = _rules()
        chain = RuleChain(ManualScheduler(), idle)
        overlay = chain.animate("color", LinearStrategy(COLOR, 100))
        assert overlay.is_input(COLOR_KEY)
        assert overlay.is_input(PropertyKey.parse("color.duration"))
        assert not overlay.is_input(PropertyKey.parse("width"))


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


class TestTransitionDependencies:
    def test_source_dependency_follows_root(self) -> None:
        idle = StaticRule("idle", {"label": "Idle", "label.offset": "3"})
        chain = RuleChain(ManualScheduler(), idle)
        strategy = _DependentStrategy(STRING, "x")
        chain.animate("label", strategy)
        assert strategy.offset.value == 3
        idle.set("label.offset", "4")
        assert strategy.offset.value == 4

    def test_duplicate_dependency_key(self) -> None:
        chain = RuleChain(ManualScheduler(), StaticRule("idle"))
        overlay = chain.animate("label", _DependentStrategy(STRING, "x"))
        callback = overlay.transitions[0].callback
        with pytest.raises(DuplicateDependencyError):
            callback.add_source_dependency("offset", StyleProperty(INTEGER))

    def test_finished_transition_releases_dependencies(self) -> None:
        idle, hover = _rules()
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        strategy = LinearStrategy(COLOR, 100)
        chain.animate("color", strategy)
        chain.transition(hover)
        scheduler.advance(100)
        hover.set("color.duration", "10")
        assert strategy.target_duration.value is None


# ---------------------------------------------------------------------------
# Destroy
# ---------------------------------------------------------------------------


class TestChainDestroy:
    def _animating_chain(self) -> tuple[ManualScheduler, RuleChain, StaticRule]:
        idle, hover = _rules()
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        scheduler.advance(50)
        return scheduler, chain, hover

    def test_destroy_mid_animation(self) -> None:
        scheduler, chain, hover = self._animating_chain()
        chain.destroy()
        assert chain.destroyed
        assert len(chain) == 1
        assert chain.rule.root is hover
        assert _color(chain) == BLUE
        assert scheduler.pending == 0

    def test_late_step_is_ignored(self) -> None:
        scheduler, chain, _ = self._animating_chain()
        transition = chain.head.rule.transitions[0]
        chain.destroy()
        transition.step(scheduler, 10)
        scheduler.advance(100)
        assert not transition.alive
        assert _color(chain) == BLUE

    def test_destroyed_chain_rejects_new_work(self) -> None:
        _, chain, _ = self._animating_chain()
        chain.destroy()
        with pytest.raises(ChainInvariantError):
            chain.transition(StaticRule("focus"))
        with pytest.raises(ChainInvariantError):
            chain.animate("color", InstantStrategy(COLOR))

    def test_destroy_twice_is_noop(self) -> None:
        _, chain, _ = self._animating_chain()
        chain.destroy()
        chain.destroy()
        assert len(chain) == 1

    def test_destroyed_chain_stops_listening_to_root(self) -> None:
        _, chain, hover = self._animating_chain()
        chain.destroy()
        seen: list[PropertyChanged] = []
        chain.rule.events.subscribe(PropertyChanged, seen.append)
        hover.set("color", "lime")
        assert seen == []

    def test_destroy_releases_every_listener(self) -> None:
        idle = StaticRule("idle", {"label": "Idle", "label.offset": "1"})
        hover = StaticRule("hover", {"label": "Hover", "label.offset": "2"})
        scheduler = ManualScheduler()
        chain = RuleChain(scheduler, idle)
        chain.animate("label", _DependentStrategy(STRING, "x"))
        chain.animate("color", LinearStrategy(COLOR, 100))
        chain.transition(hover)
        assert idle.events.has_listeners()
        assert hover.events.has_listeners()

        chain.destroy()
        assert not idle.events.has_listeners()
        assert not hover.events.has_listeners()
