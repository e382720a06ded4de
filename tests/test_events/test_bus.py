"""Tests for the synchronous event bus."""

from styleshift.events import EventBus, PropertiesChanged, PropertyChanged
from styleshift.model import PropertyKey


class TestEventBus:
    def test_subscribe_receives_matching_events(self) -> None:
        bus = EventBus()
        seen: list[object] = []
        bus.subscribe(PropertiesChanged, seen.append)
        bus.emit(PropertiesChanged(source=None))
        bus.emit(PropertyChanged(source=None, key=PropertyKey(("a",))))
        assert seen == [PropertiesChanged(source=None)]

    def test_on_all_receives_everything(self) -> None:
        bus = EventBus()
        seen: list[object] = []
        bus.on_all(seen.append)
        bus.emit(PropertiesChanged(source=None))
        bus.emit(PropertyChanged(source=None, key=PropertyKey(("a",))))
        assert len(seen) == 2

    def test_unsubscribe_is_idempotent(self) -> None:
        bus = EventBus()
        seen: list[object] = []
        bus.subscribe(PropertiesChanged, seen.append)
        bus.unsubscribe(PropertiesChanged, seen.append)
        bus.unsubscribe(PropertiesChanged, seen.append)
        bus.emit(PropertiesChanged(source=None))
        assert seen == []
        assert not bus.has_listeners()

    def test_off_all(self) -> None:
        bus = EventBus()
        seen: list[object] = []
        bus.on_all(seen.append)
        bus.off_all(seen.append)
        bus.off_all(seen.append)
        bus.emit(PropertiesChanged(source=None))
        assert seen == []

    def test_listener_added_during_emit_waits_for_next_event(self) -> None:
        bus = EventBus()
        late: list[object] = []

        def first(event: object) -> None:
            bus.subscribe(PropertiesChanged, late.append)

        bus.subscribe(PropertiesChanged, first)
        bus.emit(PropertiesChanged(source=None))
        assert late == []
        bus.emit(PropertiesChanged(source=None))
        assert len(late) == 1

    def test_listener_removed_during_emit_still_called_once(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        def second(event: object) -> None:
            calls.append("second")

        def first(event: object) -> None:
            calls.append("first")
            bus.unsubscribe(PropertiesChanged, second)

        bus.subscribe(PropertiesChanged, first)
        bus.subscribe(PropertiesChanged, second)
        bus.emit(PropertiesChanged(source=None))
        bus.emit(PropertiesChanged(source=None))
        assert calls == ["first", "second", "first"]
