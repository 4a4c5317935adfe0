"""
AccessoryCoordinator - Drive/Accessories tab orchestration.

Handles the three drive-accessory intents coming from the view:
- mode toggle (winder, motor, remote, charger, cord)
- table cell clicks in the winder/motor columns
- +/- counter clicks for remote, charger and cord

and keeps the accessory totals, the order summary and the remote cost basis
in step with the line items. Every mutation is priced before it is committed,
then the totals are written and the render trigger fires.
"""
import dataclasses
from typing import Any, Mapping, Optional, Sequence, Union

from loguru import logger

from blindquote.core.decorators import subscribe_event
from blindquote.core.events import Events
from .base import QuoteCoordinator
from .errors import InvalidArgument
from .models import (
    COUNTER_ACCESSORIES,
    AccessoryLine,
    AccessorySummary,
    DriveAccessory,
    DriveAccessoryMode,
    HardwareField,
    LineItem,
    RemoteLine,
    any_motorized,
)
from .gates import ConfirmationGate, PendingGate
from .pricing import count_motors, count_winders

VISIBLE_COLUMNS = ("sequence", "fabric_type_display", "location", "winder", "motor")

HINT_MESSAGES = {
    DriveAccessoryMode.WINDER: "Click a cell in the Winder column to set HD.",
    DriveAccessoryMode.MOTOR: "Click a cell in the Motor column to set Motor.",
    DriveAccessoryMode.REMOTE: "Use + or - to change the number of remotes.",
    DriveAccessoryMode.CHARGER: "Use + or - to change the number of chargers.",
    DriveAccessoryMode.CORD: "Use + or - to change the number of extension cords.",
}
DEFAULT_HINT = "Please make your selection."

# Table column that each hardware mode edits
_MODE_COLUMNS = {
    DriveAccessoryMode.WINDER: HardwareField.WINDER,
    DriveAccessoryMode.MOTOR: HardwareField.MOTOR,
}

_CONFLICT_MESSAGES = {
    HardwareField.WINDER: "This blind is already set to Motor. Change it to HD?",
    HardwareField.MOTOR: "This blind is already set to HD. Change it to Motor?",
}

# Counters that are expected whenever a motor is present
_MOTOR_EXPECTED = {
    DriveAccessory.REMOTE: "remote",
    DriveAccessory.CHARGER: "charger",
}

ADD = "add"
SUBTRACT = "subtract"


class AccessoryCoordinator(QuoteCoordinator):
    """
    Orchestrator for the drive accessory workflow.

    Usage:
        coordinator = AccessoryCoordinator(bus, quote_store, ui_state, pricing)
        coordinator.attach()          # listen for view intents on the bus
        coordinator.activate()        # tab shown

        coordinator.handle_mode_change("winder")
        coordinator.handle_table_cell_click(0, "winder")
        coordinator.handle_mode_change("winder")   # exit -> recompute
    """

    def __init__(self, event_bus, quote_store, ui_state, pricing):
        super().__init__(event_bus, quote_store, ui_state, pricing)
        self.gate = ConfirmationGate(event_bus)
        logger.info("AccessoryCoordinator initialized")

    def activate(self) -> None:
        self.ui_state.set_visible_columns(VISIBLE_COLUMNS)

    # --- Mode toggle ---

    def handle_mode_change(self, mode: Union[DriveAccessoryMode, str, None]) -> DriveAccessoryMode:
        """
        Toggle a drive accessory mode; requesting the active mode turns it off.

        Everything the change needs is priced before any state is written;
        on a catalog failure the previous mode and figures stay in place.

        Returns:
            The mode now in effect
        """
        requested = DriveAccessoryMode.parse(mode)
        current = self.ui_state.get_state().drive_accessory_mode
        new_mode = DriveAccessoryMode.NONE if current is requested else requested

        leaving_remote = current is DriveAccessoryMode.REMOTE
        remote_cost = self._remote_cost_basis() if leaving_remote else None
        exit_summary = self._price_summary() if current.is_active else None

        # Chargers default to one when motors exist; remotes wait for a cost tier
        seed_summary = None
        if new_mode is DriveAccessoryMode.CHARGER \
                and any_motorized(self.quote_store.get_items()) \
                and self.ui_state.get_state().drive_charger_count == 0:
            seed_summary = self._price_summary(counts={DriveAccessory.CHARGER: 1})

        if leaving_remote:
            self.quote_store.update_remote_cost_sum(remote_cost)
        if exit_summary is not None:
            self._commit_summary(exit_summary)

        self.ui_state.set_drive_accessory_mode(new_mode)
        logger.debug(f"Drive accessory mode {current.value} -> {new_mode.value}")

        if new_mode.is_active:
            self.notify(HINT_MESSAGES.get(new_mode, DEFAULT_HINT))
        if seed_summary is not None:
            self.ui_state.set_drive_accessory_count(DriveAccessory.CHARGER, 1)
            self._commit_summary(seed_summary)

        self.publish_state_change()
        return new_mode

    def _remote_cost_basis(self) -> Optional[float]:
        """Cost of the selected remotes at their cost tier (None without a tier or quantity)."""
        state = self.ui_state.get_state()
        cost_key = state.drive_selected_remote_cost_key
        count = state.drive_remote_count
        if not cost_key or count <= 0:
            return None
        return self.pricing.price_for(
            self.quote_store.get_current_product_type(),
            DriveAccessory.REMOTE,
            count=count,
            cost_key=cost_key,
        )

    # --- Table cell clicks ---

    def handle_table_cell_click(self, row_index: int, column: str) -> Optional[PendingGate]:
        """
        Toggle the winder/motor attribute of a row while the matching mode is on.

        Returns:
            The pending gate when the click conflicts with the row's other
            attribute, otherwise None
        """
        mode = self.ui_state.get_state().drive_accessory_mode
        hw_field = _MODE_COLUMNS.get(mode)
        if hw_field is None or column != hw_field.value:
            return None

        item = self.quote_store.get_item(row_index)
        if not item.hardware(hw_field).is_set and item.hardware(hw_field.other).is_set:
            return self.gate.open(
                _CONFLICT_MESSAGES[hw_field],
                on_confirm=self._guarded(lambda: self._toggle_hardware(row_index, hw_field)),
            )

        self._toggle_hardware(row_index, hw_field)
        return None

    def _toggle_hardware(self, row_index: int, hw_field: HardwareField) -> None:
        item = self.quote_store.get_item(row_index)
        changes = {}
        if item.hardware(hw_field).is_set:
            changes[hw_field] = hw_field.empty_value
        else:
            changes[hw_field] = hw_field.active_value
            if item.hardware(hw_field.other).is_set:
                changes[hw_field.other] = hw_field.other.empty_value

        items = list(self.quote_store.get_items())
        items[row_index] = dataclasses.replace(item, **{f.value: v for f, v in changes.items()})
        summary = self._price_summary(items=items)

        for field, value in changes.items():
            self.quote_store.update_hardware_attribute(row_index, field, value)
        self._commit_summary(summary)
        self.publish_state_change()

    # --- Counters ---

    def handle_counter_change(self, accessory: Union[DriveAccessory, str], direction: str) -> Optional[PendingGate]:
        """
        Step an accessory counter up or down (never below zero).

        Dropping a remote or charger to zero while any blind is motorised
        asks for confirmation first. Cords are never gated.

        Returns:
            The pending gate when confirmation is required, otherwise None
        """
        kind = DriveAccessory.parse(accessory)
        if kind not in COUNTER_ACCESSORIES:
            raise InvalidArgument(f"{kind.value} has no counter")
        if direction not in (ADD, SUBTRACT):
            raise InvalidArgument(f"Unknown counter direction: {direction!r}")

        current = self.ui_state.get_state().count_for(kind)
        new_count = current + 1 if direction == ADD else max(0, current - 1)

        if new_count == 0 and kind in _MOTOR_EXPECTED \
                and any_motorized(self.quote_store.get_items()):
            return self.gate.open(
                f"Motorised blinds were found. Remove the {_MOTOR_EXPECTED[kind]} anyway?",
                on_confirm=self._guarded(lambda: self._commit_count(kind, 0)),
                confirm_text="Remove",
            )

        self._commit_count(kind, new_count)
        return None

    def _commit_count(self, kind: DriveAccessory, count: int) -> None:
        summary = self._price_summary(counts={kind: count})
        self.ui_state.set_drive_accessory_count(kind, count)
        self._commit_summary(summary)
        self.publish_state_change()

    def handle_remote_cost_key_selected(self, cost_key: Optional[str]) -> None:
        """Select the cost tier used for the remote cost basis (None clears it)."""
        if cost_key is not None:
            product_type = self.quote_store.get_current_product_type()
            # Raises UnknownCatalogEntry for an unknown tier
            self.pricing.catalog.rate(product_type, DriveAccessory.REMOTE.value, cost_key)
        self.ui_state.set_drive_selected_remote_cost_key(cost_key)
        self.publish_state_change()

    # --- Recompute cascade ---

    def recalculate_all_drive_accessory_prices(self) -> AccessorySummary:
        """
        Recompute every drive accessory price and commit the order summary.

        All prices are computed before anything is written, so a catalog
        failure leaves the previous totals and summary in place.
        """
        summary = self._price_summary()
        self._commit_summary(summary)
        return summary

    def _price_summary(self, items: Optional[Sequence[LineItem]] = None,
                       counts: Optional[Mapping[DriveAccessory, int]] = None) -> AccessorySummary:
        """
        Price the current rows and counters, or a proposed variant of them.

        Pure: raises UnknownCatalogEntry without touching any state.
        """
        if items is None:
            items = self.quote_store.get_items()
        state = self.ui_state.get_state()
        counts = {kind: state.count_for(kind) for kind in COUNTER_ACCESSORIES} | dict(counts or {})
        product_type = self.quote_store.get_current_product_type()
        price = self.pricing.price_for

        winder_price = price(product_type, DriveAccessory.WINDER, items=items)
        motor_price = price(product_type, DriveAccessory.MOTOR, items=items)
        # Sale price only; the cost basis is stored when remote mode is left
        remote_price = price(product_type, DriveAccessory.REMOTE, count=counts[DriveAccessory.REMOTE])
        charger_price = price(product_type, DriveAccessory.CHARGER, count=counts[DriveAccessory.CHARGER])
        cord_price = price(product_type, DriveAccessory.CORD, count=counts[DriveAccessory.CORD])

        return AccessorySummary(
            winder=AccessoryLine(count=count_winders(items), price=winder_price),
            motor=AccessoryLine(count=count_motors(items), price=motor_price),
            remote=RemoteLine(count=counts[DriveAccessory.REMOTE], price=remote_price),
            charger=AccessoryLine(count=counts[DriveAccessory.CHARGER], price=charger_price),
            cord3m=AccessoryLine(count=counts[DriveAccessory.CORD], price=cord_price),
            grand_total=round(winder_price + motor_price + remote_price + charger_price + cord_price, 2),
        )

    def _commit_summary(self, summary: AccessorySummary) -> None:
        self.ui_state.set_drive_accessory_total_price(DriveAccessory.WINDER, summary.winder.price)
        self.ui_state.set_drive_accessory_total_price(DriveAccessory.MOTOR, summary.motor.price)
        self.ui_state.set_drive_accessory_total_price(DriveAccessory.REMOTE, summary.remote.price)
        self.ui_state.set_drive_accessory_total_price(DriveAccessory.CHARGER, summary.charger.price)
        self.ui_state.set_drive_accessory_total_price(DriveAccessory.CORD, summary.cord3m.price)
        self.ui_state.set_drive_grand_total(summary.grand_total)
        self.quote_store.update_accessory_summary(summary)
        logger.debug(f"Drive accessories recalculated: total {summary.grand_total}")

    # --- Bus handlers ---

    @subscribe_event(Events.DRIVE_ACCESSORY_MODE_CHANGE_REQUESTED)
    def on_mode_change_requested(self, data: Any) -> None:
        self._dispatch(self.handle_mode_change, (data or {}).get("mode"))

    @subscribe_event(Events.TABLE_CELL_CLICKED)
    def on_table_cell_clicked(self, data: Any) -> None:
        data = data or {}
        self._dispatch(self.handle_table_cell_click, data.get("rowIndex"), data.get("column"))

    @subscribe_event(Events.ACCESSORY_COUNTER_CLICKED)
    def on_accessory_counter_clicked(self, data: Any) -> None:
        data = data or {}
        self._dispatch(self.handle_counter_change, data.get("accessory"), data.get("direction"))

    @subscribe_event(Events.REMOTE_COST_KEY_SELECTED)
    def on_remote_cost_key_selected(self, data: Any) -> None:
        self._dispatch(self.handle_remote_cost_key_selected, (data or {}).get("costKey"))

    @subscribe_event(Events.CONFIG_CHANGED)
    def on_config_changed(self, data: Any) -> None:
        data = data or {}
        if (data.get("section"), data.get("key")) == ("quote", "product_type"):
            self._dispatch(self._reprice)

    def _reprice(self) -> None:
        self.recalculate_all_drive_accessory_prices()
        self.publish_state_change()
