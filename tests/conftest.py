import pytest
from unittest.mock import MagicMock

from blindquote.core.events import EventBus, Events
from blindquote.quote.catalog import Catalog
from blindquote.quote.coordinator import AccessoryCoordinator
from blindquote.quote.models import LineItem, Motor, Winder
from blindquote.quote.pricing import PricingEngine
from blindquote.quote.right_panel import RightPanelCoordinator
from blindquote.quote.store import QuoteStore
from blindquote.quote.ui_state import UIState

TEST_CATALOG = {
    "version": "test",
    "products": {
        "rollerBlind": {
            "accessories": {
                "winder": {"price": 30},
                "motor": {"price": 250},
                "remote": {"price": 100, "costs": {"K1": 40, "K2": 60}},
                "charger": {"price": 50},
                "cord": {"price": 25},
            },
            "services": {
                "wifi": {"price": 200},
                "delivery": {"price": 50},
                "install": {"price": 20},
                "removal": {"price": 15},
            },
        },
    },
}


class EventRecorder:
    """Collects payloads published on the outbound topics."""

    def __init__(self, bus: EventBus):
        self.notifications = []
        self.dialogs = []
        self.renders = []
        bus.subscribe(Events.SHOW_NOTIFICATION, self.notifications.append)
        bus.subscribe(Events.SHOW_CONFIRMATION_DIALOG, self.dialogs.append)
        bus.subscribe(Events.STATE_CHANGED, self.renders.append)

    def click(self, dialog_index: int, label: str):
        """Simulate the dialog renderer invoking one button callback."""
        for button in self.dialogs[dialog_index]["buttons"]:
            if button["text"] == label:
                return button["callback"]()
        raise AssertionError(f"No button {label!r}")


@pytest.fixture
def catalog():
    return Catalog(TEST_CATALOG)


@pytest.fixture
def pricing(catalog):
    return PricingEngine(catalog)


@pytest.fixture
def bus():
    return EventBus(MagicMock(), MagicMock())


@pytest.fixture
def quote_store():
    return QuoteStore(MagicMock(), None)


@pytest.fixture
def ui_state():
    return UIState(MagicMock(), None)


@pytest.fixture
def events(bus):
    return EventRecorder(bus)


@pytest.fixture
def coordinator(bus, quote_store, ui_state, pricing):
    coord = AccessoryCoordinator(bus, quote_store, ui_state, pricing)
    coord.attach()
    yield coord
    coord.detach()


@pytest.fixture
def right_panel(bus, quote_store, ui_state, pricing):
    panel = RightPanelCoordinator(bus, quote_store, ui_state, pricing)
    panel.attach()
    yield panel
    panel.detach()


def _build_items(*hardware):
    """
    Build line items from (winder, motor) pairs; the last row is left blank.

        _build_items(("", "Motor"), ("HD", ""))
    """
    items = [
        LineItem(sequence=i + 1, width=1000, height=1200, fabric_type="BLOCKOUT",
                 winder=Winder(w), motor=Motor(m))
        for i, (w, m) in enumerate(hardware)
    ]
    items.append(LineItem(sequence=len(items) + 1))
    return items


@pytest.fixture
def make_items():
    return _build_items
