"""
Shared plumbing for the quote coordinators.

A coordinator receives its collaborators explicitly (bus, stores, pricing),
turns view intents into store mutations and publishes the render trigger.
"""
from typing import Any, Callable, List

from loguru import logger

from blindquote.core.decorators import auto_subscribe
from blindquote.core.events import EventBus, Events, Subscription
from .errors import QuoteError
from .models import QuoteSnapshot
from .pricing import PricingEngine
from .selection import compute_button_states
from .store import QuoteStore
from .ui_state import UIState


class QuoteCoordinator:
    def __init__(self, event_bus: EventBus, quote_store: QuoteStore,
                 ui_state: UIState, pricing: PricingEngine):
        self.event_bus = event_bus
        self.quote_store = quote_store
        self.ui_state = ui_state
        self.pricing = pricing
        self._subscriptions: List[Subscription] = []

    def attach(self) -> None:
        """Subscribe the @subscribe_event handlers to the bus."""
        if not self._subscriptions:
            self._subscriptions = auto_subscribe(self, self.event_bus)

    def detach(self) -> None:
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions = []

    @property
    def is_attached(self) -> bool:
        return bool(self._subscriptions)

    def snapshot(self) -> QuoteSnapshot:
        items = self.quote_store.get_items()
        ui = self.ui_state.get_state()
        return QuoteSnapshot(
            product_type=self.quote_store.get_current_product_type(),
            items=items,
            ui=ui,
            accessory_summary=self.quote_store.get_accessory_summary(),
            remote_cost_sum=self.quote_store.get_remote_cost_sum(),
            buttons=compute_button_states(items, ui.selection),
        )

    def publish_state_change(self) -> None:
        """Render trigger: the view redraws from this snapshot."""
        self.event_bus.publish(Events.STATE_CHANGED, self.snapshot())

    def notify(self, message: str, type: str = "info") -> None:
        payload = {"message": message}
        if type != "info":
            payload["type"] = type
        self.event_bus.publish(Events.SHOW_NOTIFICATION, payload)

    def _dispatch(self, handler: Callable, *args) -> Any:
        """Run an intent that arrived over the bus; domain errors become notifications."""
        try:
            return handler(*args)
        except QuoteError as e:
            logger.warning(f"{handler.__name__} rejected: {e}")
            self.notify(str(e), type="error")
            return None

    def _guarded(self, action: Callable[[], Any]) -> Callable[[], Any]:
        """Wrap a deferred (dialog) action the same way as bus intents."""
        def run():
            return self._dispatch(action)
        run.__name__ = getattr(action, "__name__", "action")
        return run
