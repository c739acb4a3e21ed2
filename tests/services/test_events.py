"""
Tests for the event manager.
"""

from unittest.mock import Mock

from yass.services.events import EventManager, Events


class TestEventManager:
    """Tests for EventManager."""

    def test_subscribe_and_emit(self):
        """Test that subscribers receive emitted keyword arguments."""
        event_manager = EventManager()
        received = []

        def on_saved(sender, **kwargs):
            received.append((sender, kwargs))

        assert event_manager.subscribe(Events.SAVE_WRITTEN, on_saved) is True
        assert event_manager.emit(Events.SAVE_WRITTEN, path="a.json") == 1

        assert received == [(event_manager, {"path": "a.json"})]

    def test_emit_without_subscribers(self):
        """Test emitting an event nobody listens to."""
        assert EventManager().emit(Events.SAVE_DELETED, path="a.json") == 0

    def test_unsubscribe(self):
        """Test that unsubscribed callbacks are not called."""
        event_manager = EventManager()
        callback = Mock()
        event_manager.subscribe(Events.SAVE_LOADED, callback, weak=False)

        assert event_manager.unsubscribe(Events.SAVE_LOADED, callback) is True
        event_manager.emit(Events.SAVE_LOADED)

        callback.assert_not_called()

    def test_failing_subscriber(self):
        """Test that a failing subscriber does not raise to the emitter."""
        event_manager = EventManager()
        callback = Mock(side_effect=RuntimeError("boom"))
        event_manager.subscribe(Events.CATALOG_REFRESHED, callback, weak=False)

        assert event_manager.emit(Events.CATALOG_REFRESHED) == 0

    def test_managers_are_independent(self):
        """Test that two managers do not share signals."""
        first = EventManager()
        second = EventManager()
        callback = Mock()
        first.subscribe(Events.SAVE_WRITTEN, callback, weak=False)

        second.emit(Events.SAVE_WRITTEN)

        callback.assert_not_called()
