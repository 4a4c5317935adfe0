from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from loguru import logger

from .decorators import auto_subscribe

if TYPE_CHECKING:
    from .config import ConfigManager
    from .events.bus import Subscription
    from .locator import ServiceLocator


class BaseSystem(ABC):
    """
    Lifecycle base for the session systems (EventBus, QuoteStore, UIState).

    Subclasses get the locator and config of their session. Methods marked
    with @subscribe_event are subscribed to the session's EventBus when the
    system initializes and unsubscribed again on shutdown:

        class AuditLog(BaseSystem):
            @subscribe_event(Events.STATE_CHANGED)
            def on_state_changed(self, snapshot):
                ...
    """

    def __init__(self, locator: 'ServiceLocator', config: 'ConfigManager'):
        self.locator = locator
        self.config = config
        self._is_ready = False
        self._event_subscriptions: List['Subscription'] = []

    @abstractmethod
    async def initialize(self):
        """Called by ServiceLocator.start_all(); subclasses must call super()."""
        self._event_subscriptions = self._subscribe_handlers()
        self._is_ready = True

    @abstractmethod
    async def shutdown(self):
        """Called by ServiceLocator.stop_all(); subclasses must call super()."""
        for sub in self._event_subscriptions:
            sub.cancel()
        self._event_subscriptions = []
        self._is_ready = False

    def _subscribe_handlers(self) -> List['Subscription']:
        from .events import EventBus

        if isinstance(self, EventBus):
            return []
        try:
            bus = self.locator.get_system(EventBus)
        except KeyError:
            logger.warning(f"{type(self).__name__}: no EventBus registered, handlers not subscribed")
            return []
        return auto_subscribe(self, bus)

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    async def __aenter__(self):
        if not self._is_ready:
            await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._is_ready:
            await self.shutdown()
