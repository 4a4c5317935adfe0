"""
RightPanelCoordinator - F2 summary tab.

Keeps the service quantity inputs (wifi hub, delivery, install, removal)
and their fee lines current, and validates the cost discount entered in
the welcome dialog.
"""
from typing import Any, Optional

from loguru import logger

from blindquote.core.decorators import subscribe_event
from blindquote.core.events import Events
from .base import QuoteCoordinator
from .errors import InvalidArgument

# service -> (quantity field, fee field) on F2State
SERVICE_FIELDS = {
    "wifi": ("wifi_qty", "wifi_sum"),
    "delivery": ("delivery_qty", "delivery_fee"),
    "install": ("install_qty", "install_fee"),
    "removal": ("removal_qty", "removal_fee"),
}

# F2 price line -> AccessorySummary line
SUMMARY_PRICE_FIELDS = {
    "summary_winder_price": "winder",
    "summary_motor_price": "motor",
    "summary_remote_price": "remote",
    "summary_charger_price": "charger",
    "summary_cord_price": "cord3m",
}

# Input element ids sent by the panel
QTY_INPUT_IDS = {
    "f2-b10-wifi-qty": "wifi",
    "f2-b13-delivery-qty": "delivery",
    "f2-b14-install-qty": "install",
    "f2-b15-removal-qty": "removal",
}


def parse_quantity(raw: Any) -> Optional[int]:
    """Blank input clears the quantity; anything else must be a whole number >= 0."""
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise InvalidArgument(f"Quantity must be a whole number, got {raw!r}") from None
    if value < 0:
        raise InvalidArgument(f"Quantity must be non-negative, got {value}")
    return value


def parse_cost_discount(raw: Any) -> int:
    """Cost discount percentage: an integer from 0 to 100."""
    try:
        percentage = int(str(raw).strip())
    except ValueError:
        raise InvalidArgument("Invalid input. Enter a whole number from 0 to 100.") from None
    if not 0 <= percentage <= 100:
        raise InvalidArgument("Invalid input. Enter a whole number from 0 to 100.")
    return percentage


class RightPanelCoordinator(QuoteCoordinator):
    """Orchestrator for the F2 summary tab."""

    def handle_qty_changed(self, service: str, raw_value: Any) -> Optional[float]:
        """
        Store a service quantity and its fee.

        Args:
            service: "wifi", "delivery", "install", "removal" or the
                panel input id for one of them
            raw_value: Text from the input

        Returns:
            The new fee (None when the quantity was cleared)
        """
        service = QTY_INPUT_IDS.get(service, service)
        if service not in SERVICE_FIELDS:
            raise InvalidArgument(f"Unknown F2 quantity: {service!r}")

        qty = parse_quantity(raw_value)
        fee = self.pricing.service_fee(self.quote_store.get_current_product_type(), service, qty)

        qty_field, fee_field = SERVICE_FIELDS[service]
        self.ui_state.set_f2_value(qty_field, qty)
        self.ui_state.set_f2_value(fee_field, fee)
        self.publish_state_change()
        return fee

    def handle_tab_activated(self) -> None:
        """Refresh the accessory price lines and every fee line."""
        product_type = self.quote_store.get_current_product_type()
        f2 = self.ui_state.get_state().f2
        values = {
            fee_field: self.pricing.service_fee(product_type, service, getattr(f2, qty_field))
            for service, (qty_field, fee_field) in SERVICE_FIELDS.items()
        }

        summary = self.quote_store.get_accessory_summary()
        for f2_field, line in SUMMARY_PRICE_FIELDS.items():
            values[f2_field] = getattr(summary, line).price if summary is not None else None

        for key, value in values.items():
            self.ui_state.set_f2_value(key, value)
        self.publish_state_change()

    def handle_cost_discount_entered(self, raw_value: Any) -> bool:
        """
        Validate the welcome dialog's cost discount.

        Returns:
            True when accepted (the dialog may close); False after an error
            notification, leaving the dialog open
        """
        try:
            percentage = parse_cost_discount(raw_value)
        except InvalidArgument as e:
            logger.warning(f"Cost discount rejected: {raw_value!r}")
            self.notify(str(e), type="error")
            return False

        self.ui_state.set_cost_discount(percentage)
        self.event_bus.publish(Events.COST_DISCOUNT_ENTERED, {"percentage": percentage})
        self.publish_state_change()
        return True

    # --- Bus handlers ---

    @subscribe_event(Events.F2_QTY_CHANGED)
    def on_qty_changed(self, data: Any) -> None:
        data = data or {}
        self._dispatch(self.handle_qty_changed, data.get("id"), data.get("value"))

    @subscribe_event(Events.F2_TAB_ACTIVATED)
    def on_tab_activated(self, data: Any) -> None:
        self._dispatch(self.handle_tab_activated)
