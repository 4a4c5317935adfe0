"""
Decorators for systems and event handlers.

@system declares start-order dependencies for ServiceLocator;
@subscribe_event marks methods that auto_subscribe() wires to an EventBus.
"""
import inspect
from typing import Any, List, Optional, Type, TypeVar

from loguru import logger

T = TypeVar('T')

_EVENTS_ATTR = "_subscribed_events"


def system(depends_on: Optional[List[Type]] = None):
    """
    Declare the systems that must be initialized before this one.

        @system(depends_on=[EventBus])
        class AuditLog(BaseSystem):
            ...
    """
    def decorator(cls: Type[T]) -> Type[T]:
        cls.depends_on = list(depends_on or [])
        return cls
    return decorator


def subscribe_event(*event_types: str):
    """
    Mark a method as the handler of one or more bus events.

        @subscribe_event(Events.TABLE_CELL_CLICKED)
        def on_table_cell_clicked(self, data):
            ...

    Stacked decorators accumulate their events.
    """
    def decorator(func):
        setattr(func, _EVENTS_ATTR, [*getattr(func, _EVENTS_ATTR, []), *event_types])
        return func
    return decorator


def auto_subscribe(target: Any, bus) -> list:
    """
    Subscribe every @subscribe_event method of `target` to `bus`.

    Returns:
        List of Subscription handles, one per (event, method) pair
    """
    subscriptions = []
    for name, method in inspect.getmembers(target, predicate=inspect.ismethod):
        for event in getattr(method, _EVENTS_ATTR, ()):
            subscriptions.append(bus.subscribe(event, method))
            logger.debug(f"{type(target).__name__}.{name} auto-subscribed to {event}")
    return subscriptions
