"""
EventBus - Unit Tests

Tests for the synchronous event bus covering:
- Subscription/unsubscription and subscription handles
- Publishing order
- Re-entrant publishing
- Error handling
"""
import pytest
from unittest.mock import MagicMock
from blindquote.core.events.bus import EventBus, Subscription


@pytest.fixture
def event_bus():
    """Create a test EventBus instance."""
    return EventBus(MagicMock(), MagicMock())


class TestEventBusLifecycle:

    def test_event_bus_initialization(self, event_bus):
        """Test EventBus initializes with empty subscribers."""
        assert isinstance(event_bus._handlers, dict)
        assert len(event_bus._handlers) == 0

    @pytest.mark.asyncio
    async def test_initialize_and_shutdown(self, event_bus):
        """Test EventBus lifecycle methods."""
        await event_bus.initialize()
        assert event_bus.is_ready is True

        event_bus.subscribe("test.event", lambda data: None)
        await event_bus.shutdown()
        assert len(event_bus._handlers) == 0
        assert event_bus.is_ready is False


class TestEventBusSubscription:
    """Test event subscription functionality."""

    def test_subscribe_returns_handle(self, event_bus):
        def handler(data):
            pass

        sub = event_bus.subscribe("test.event", handler)

        assert isinstance(sub, Subscription)
        assert sub.event == "test.event"
        assert handler in event_bus._handlers["test.event"]

    def test_subscribe_duplicate_handler(self, event_bus):
        """Test subscribing same handler twice doesn't duplicate."""
        def handler(data):
            pass

        event_bus.subscribe("test.event", handler)
        event_bus.subscribe("test.event", handler)

        assert len(event_bus._handlers["test.event"]) == 1

    def test_cancel_subscription(self, event_bus):
        handler = MagicMock()
        sub = event_bus.subscribe("test.event", handler)

        sub.cancel()
        event_bus.publish("test.event", 1)

        handler.assert_not_called()
        assert not event_bus.has_subscribers("test.event")

    def test_unsubscribe_nonexistent_event(self, event_bus):
        """Test unsubscribing from non-existent event doesn't error."""
        event_bus.unsubscribe("nonexistent.event", lambda data: None)


class TestEventBusPublishing:
    """Test event publishing functionality."""

    def test_publish_passes_payload(self, event_bus):
        received = []
        event_bus.subscribe("test.event", received.append)

        event_bus.publish("test.event", {"value": 42})

        assert received == [{"value": 42}]

    def test_publish_without_data(self, event_bus):
        received = []
        event_bus.subscribe("test.event", received.append)

        event_bus.publish("test.event")

        assert received == [None]

    def test_handlers_run_in_subscription_order(self, event_bus):
        call_order = []
        event_bus.subscribe("test.event", lambda d: call_order.append(1))
        event_bus.subscribe("test.event", lambda d: call_order.append(2))
        event_bus.subscribe("test.event", lambda d: call_order.append(3))

        event_bus.publish("test.event")

        assert call_order == [1, 2, 3]

    def test_publish_to_nonexistent_event(self, event_bus):
        """Test publishing to event with no subscribers."""
        event_bus.publish("nonexistent.event", {"data": "test"})


class TestEventBusReentrancy:

    def test_nested_publish_completes_before_outer_continues(self, event_bus):
        log = []

        def outer_first(data):
            log.append("outer-1")
            event_bus.publish("inner", None)

        event_bus.subscribe("outer", outer_first)
        event_bus.subscribe("outer", lambda d: log.append("outer-2"))
        event_bus.subscribe("inner", lambda d: log.append("inner"))

        event_bus.publish("outer")

        assert log == ["outer-1", "inner", "outer-2"]

    def test_nested_handler_sees_current_state(self, event_bus):
        state = {"count": 0}
        seen = []

        def mutate_then_publish(data):
            state["count"] += 1
            event_bus.publish("changed")

        event_bus.subscribe("mutate", mutate_then_publish)
        event_bus.subscribe("changed", lambda d: seen.append(state["count"]))

        event_bus.publish("mutate")
        event_bus.publish("mutate")

        assert seen == [1, 2]

    def test_subscribe_during_dispatch_applies_to_next_publish(self, event_bus):
        late = MagicMock()

        def subscriber(data):
            event_bus.subscribe("test.event", late)

        event_bus.subscribe("test.event", subscriber)

        event_bus.publish("test.event", "first")
        late.assert_not_called()

        event_bus.publish("test.event", "second")
        late.assert_called_once_with("second")


class TestEventBusErrorHandling:
    """Test error handling in event bus."""

    def test_handler_exception_doesnt_stop_publishing(self, event_bus):
        """Test that exception in one handler doesn't stop others."""
        call_log = []

        def failing_handler(data):
            raise ValueError("Test error")

        event_bus.subscribe("test.event", failing_handler)
        event_bus.subscribe("test.event", lambda d: call_log.append("called"))

        # Should not raise exception
        event_bus.publish("test.event", None)

        assert call_log == ["called"]
