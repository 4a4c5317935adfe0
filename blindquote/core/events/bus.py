"""
EventBus - Synchronous Quote Event Hub

Carries view intents (cell clicks, counter clicks, mode toggles) to the
coordinators and carries notifications, dialogs and the render trigger
back to the view.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from loguru import logger

from blindquote.core.base_system import BaseSystem


@dataclass(frozen=True)
class Subscription:
    """Handle returned by EventBus.subscribe()."""
    bus: "EventBus"
    event: str
    handler: Callable

    def cancel(self) -> None:
        self.bus.unsubscribe(self.event, self.handler)


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__qualname__", repr(handler))


class EventBus(BaseSystem):
    """
    Topic-based pub/sub for one quote session.

    publish() is synchronous and returns after every handler ran. A handler
    may publish again; the nested fan-out finishes before the outer one
    continues, so later handlers always see the newest state.

    Usage:
        sub = event_bus.subscribe(Events.TABLE_CELL_CLICKED, on_cell_clicked)
        event_bus.publish(Events.TABLE_CELL_CLICKED, {"rowIndex": 0, "column": "winder"})
        sub.cancel()
    """

    def __init__(self, locator, config):
        super().__init__(locator, config)
        self._handlers: Dict[str, List[Callable]] = {}

    async def initialize(self):
        await super().initialize()
        logger.info("EventBus ready")

    async def shutdown(self):
        self._handlers.clear()
        await super().shutdown()
        logger.info("EventBus stopped")

    def subscribe(self, event: str, handler: Callable) -> Subscription:
        """
        Register `handler(payload)` for `event`.

        Subscribing the same handler twice has no effect; handlers run in
        the order they were first subscribed.
        """
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"{event} <- {_handler_name(handler)}")
        return Subscription(self, event, handler)

    def unsubscribe(self, event: str, handler: Callable) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)
            logger.debug(f"{event} -/- {_handler_name(handler)}")

    def has_subscribers(self, event: str) -> bool:
        return bool(self._handlers.get(event))

    def publish(self, event: str, data: Any = None) -> None:
        """
        Deliver `data` to every handler of `event`.

        A failing handler is logged and skipped; the remaining handlers
        still run and nothing is raised to the publisher.
        """
        # Copy: handlers may (un)subscribe while we iterate
        for handler in tuple(self._handlers.get(event, ())):
            try:
                handler(data)
            except Exception:
                logger.exception(f"Handler {_handler_name(handler)} failed on {event}")
