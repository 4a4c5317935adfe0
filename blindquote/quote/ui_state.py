"""
UIState - Transient view state of a quote session.

Holds the drive accessory mode, accessory counters and totals, table
selection and right-panel values. Setters replace values; conflict rules
live in the coordinators.
"""
import dataclasses
from typing import Iterable, Optional, Union

from loguru import logger

from blindquote.core.base_system import BaseSystem
from .errors import InvalidArgument
from .models import (
    COUNTER_ACCESSORIES,
    DriveAccessory,
    DriveAccessoryMode,
    F2State,
    UIStateSnapshot,
)


class UIState(BaseSystem):
    """
    Transient UI state cell.

    Every read goes through get_state(), which returns a frozen snapshot;
    consumers never hold a reference to live state.
    """

    def __init__(self, locator, config):
        super().__init__(locator, config)
        self._state = UIStateSnapshot()

    async def initialize(self):
        await super().initialize()
        logger.info("UIState initialized")

    async def shutdown(self):
        self.reset()
        await super().shutdown()

    def get_state(self) -> UIStateSnapshot:
        return self._state

    def reset(self) -> None:
        self._state = UIStateSnapshot()

    def _replace(self, **changes) -> None:
        self._state = dataclasses.replace(self._state, **changes)

    # --- Drive accessories ---

    def set_drive_accessory_mode(self, mode: Union[DriveAccessoryMode, str, None]) -> None:
        self._replace(drive_accessory_mode=DriveAccessoryMode.parse(mode))

    def set_drive_accessory_count(self, accessory: Union[DriveAccessory, str], count: int) -> None:
        """
        Raises:
            InvalidArgument: negative/non-integer count, or an accessory
                without a counter
        """
        kind = DriveAccessory.parse(accessory)
        if kind not in COUNTER_ACCESSORIES:
            raise InvalidArgument(f"{kind.value} has no counter")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise InvalidArgument(f"{kind.value} count must be a non-negative integer, got {count!r}")
        self._replace(**{f"drive_{kind.value}_count": count})

    def set_drive_selected_remote_cost_key(self, cost_key: Optional[str]) -> None:
        self._replace(drive_selected_remote_cost_key=cost_key)

    def set_drive_accessory_total_price(self, accessory: Union[DriveAccessory, str], price: float) -> None:
        kind = DriveAccessory.parse(accessory)
        self._replace(**{f"drive_{kind.value}_total_price": price})

    def set_drive_grand_total(self, total: float) -> None:
        self._replace(drive_grand_total=total)

    def set_visible_columns(self, columns: Iterable[str]) -> None:
        self._replace(visible_columns=tuple(columns))

    # --- Selection ---

    def select_row(self, row_index: Optional[int]) -> None:
        self._replace(selection=dataclasses.replace(self._state.selection, selected_row_index=row_index))

    def toggle_multi_select_mode(self) -> None:
        """
        Enter or leave multi-select. Entering seeds the set with the current
        single selection; the single index itself is left untouched.
        """
        sel = self._state.selection
        if sel.is_multi_select_mode:
            new_sel = dataclasses.replace(sel, is_multi_select_mode=False,
                                          multi_select_selected_indexes=frozenset())
        else:
            seed = {sel.selected_row_index} if sel.selected_row_index is not None else set()
            new_sel = dataclasses.replace(sel, is_multi_select_mode=True,
                                          multi_select_selected_indexes=frozenset(seed))
        self._replace(selection=new_sel)

    def toggle_multi_select_index(self, row_index: int) -> None:
        sel = self._state.selection
        indexes = set(sel.multi_select_selected_indexes)
        indexes.symmetric_difference_update({row_index})
        self._replace(selection=dataclasses.replace(sel, multi_select_selected_indexes=frozenset(indexes)))

    def clear_multi_select(self) -> None:
        self._replace(selection=dataclasses.replace(self._state.selection,
                                                    multi_select_selected_indexes=frozenset()))

    # --- Right panel ---

    def set_cost_discount(self, percentage: Optional[int]) -> None:
        self._replace(cost_discount_percentage=percentage)

    def set_f2_value(self, key: str, value) -> None:
        if key not in F2State.__dataclass_fields__:
            raise InvalidArgument(f"Unknown F2 field: {key}")
        self._replace(f2=dataclasses.replace(self._state.f2, **{key: value}))
