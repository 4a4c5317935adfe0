"""
Event System - Pub/Sub Messaging.

Provides:
- Signal: Simple observer pattern for sync notifications (e.g., config changes)
- EventBus: Synchronous pub/sub between views and coordinators
- Events: Standard event type constants for type-safe subscriptions

Usage:
    from blindquote.core.events import EventBus, Events

    event_bus.subscribe(Events.STATE_CHANGED, on_state_changed)
    event_bus.publish(Events.STATE_CHANGED, snapshot)
"""
from .observer import Signal
from .bus import EventBus, Subscription
from .constants import Events


__all__ = ["Signal", "EventBus", "Subscription", "Events"]
