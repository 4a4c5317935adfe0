"""
QuoteStore - Line items and order-level accessory figures.

Owns the ordered roller-blind rows, their winder/motor attributes, the
accessory summary snapshot and the remote cost basis. It never prices
anything itself; coordinators compute and write results back.
"""
import dataclasses
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from loguru import logger
from pydantic import ValidationError

from blindquote.core.base_system import BaseSystem
from blindquote.core.decorators import subscribe_event
from blindquote.core.events import Events
from .errors import InvalidArgument, OutOfRange
from .models import AccessorySummary, HardwareField, LineItem, Motor, Winder

DEFAULT_PRODUCT_TYPE = "rollerBlind"

_EDITABLE_FIELDS = ("width", "height", "fabric_type", "location")


class QuoteStore(BaseSystem):
    """
    Quote data owner.

    Usage:
        store = locator.get_system(QuoteStore)
        store.update_item(0, width=1200, height=1500, fabric_type="BLOCKOUT")
        store.update_hardware_attribute(0, "motor", "Motor")
        items = store.get_items()
    """

    def __init__(self, locator, config):
        super().__init__(locator, config)
        if config is not None:
            self._product_type = config.data.quote.product_type
        else:
            self._product_type = DEFAULT_PRODUCT_TYPE
        self._items: List[LineItem] = [LineItem(sequence=1)]
        self._accessory_summary: Optional[AccessorySummary] = None
        self._remote_cost_sum: Optional[float] = None

    async def initialize(self):
        await super().initialize()
        logger.info(f"QuoteStore initialized (product: {self._product_type})")

    async def shutdown(self):
        await super().shutdown()

    # --- Read accessors ---

    def get_items(self) -> Tuple[LineItem, ...]:
        """Read-only view of the line items, in table order."""
        return tuple(self._items)

    def get_item(self, row_index: int) -> LineItem:
        self._check_index(row_index)
        return self._items[row_index]

    def get_current_product_type(self) -> str:
        return self._product_type

    def set_product_type(self, product_type: str) -> None:
        self._product_type = product_type

    @subscribe_event(Events.CONFIG_CHANGED)
    def on_config_changed(self, data: Any) -> None:
        data = data or {}
        if (data.get("section"), data.get("key")) == ("quote", "product_type"):
            logger.info(f"Product type {self._product_type} -> {data.get('value')}")
            self.set_product_type(data.get("value"))

    def get_accessory_summary(self) -> Optional[AccessorySummary]:
        return self._accessory_summary

    def get_remote_cost_sum(self) -> Optional[float]:
        return self._remote_cost_sum

    # --- Row mutators ---

    def set_items(self, items: Iterable[LineItem]) -> None:
        """Replace all rows; sequence numbers are reassigned from position."""
        self._items = list(items) or [LineItem(sequence=1)]
        self._resequence()

    def update_item(self, row_index: int, **fields: Any) -> LineItem:
        """Edit dimension/fabric/location cells of a row."""
        self._check_index(row_index)
        unknown = set(fields) - set(_EDITABLE_FIELDS)
        if unknown:
            raise InvalidArgument(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

        self._items[row_index] = dataclasses.replace(self._items[row_index], **fields)
        self._ensure_trailing_blank_row()
        return self._items[row_index]

    def insert_row(self, after_index: int) -> int:
        """Insert a blank row below `after_index`; returns the new row's index."""
        self._check_index(after_index)
        new_index = after_index + 1
        self._items.insert(new_index, LineItem(sequence=new_index + 1))
        self._resequence()
        logger.debug(f"Inserted row at {new_index}")
        return new_index

    def delete_row(self, row_index: int) -> None:
        self._check_index(row_index)
        del self._items[row_index]
        self._ensure_trailing_blank_row()
        self._resequence()
        logger.debug(f"Deleted row {row_index}")

    def update_hardware_attribute(self, row_index: int, field: Union[str, HardwareField], value) -> LineItem:
        """
        Set a row's winder or motor attribute.

        Args:
            row_index: 0-based row
            field: "winder" or "motor"
            value: "HD"/"" for winder, "Motor"/"" for motor (None clears)

        Raises:
            OutOfRange: row_index does not address a current row
            InvalidArgument: unknown field or value
        """
        self._check_index(row_index)
        hw_field = HardwareField.parse(field)
        enum_cls = Winder if hw_field is HardwareField.WINDER else Motor
        try:
            coerced = enum_cls("" if value is None else value)
        except ValueError:
            raise InvalidArgument(f"Invalid {hw_field.value} value: {value!r}") from None

        self._items[row_index] = dataclasses.replace(self._items[row_index], **{hw_field.value: coerced})
        logger.debug(f"Row {row_index} {hw_field.value} -> {coerced.value!r}")
        return self._items[row_index]

    # --- Order-level figures ---

    def update_accessory_summary(self, summary: Union[AccessorySummary, Mapping[str, Any]]) -> None:
        """
        Replace the accessory summary in one step.

        Raises:
            InvalidArgument: summary is incomplete or malformed; the
                previous summary is kept.
        """
        if not isinstance(summary, AccessorySummary):
            try:
                summary = AccessorySummary.model_validate(summary)
            except ValidationError as e:
                raise InvalidArgument(f"Rejected accessory summary: {e.error_count()} error(s)") from e
        self._accessory_summary = summary

    def update_remote_cost_sum(self, value: Optional[float]) -> None:
        """Cost basis of the selected remotes, tracked apart from the sale price."""
        self._remote_cost_sum = value

    # --- Helpers ---

    def _check_index(self, row_index: int) -> None:
        if not isinstance(row_index, int) or isinstance(row_index, bool) \
                or not 0 <= row_index < len(self._items):
            raise OutOfRange(row_index, len(self._items))

    def _resequence(self) -> None:
        self._items = [
            item if item.sequence == i + 1 else dataclasses.replace(item, sequence=i + 1)
            for i, item in enumerate(self._items)
        ]

    def _ensure_trailing_blank_row(self) -> None:
        if not self._items or not self._items[-1].is_empty:
            self._items.append(LineItem(sequence=len(self._items) + 1))
