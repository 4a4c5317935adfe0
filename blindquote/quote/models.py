"""
Quote Data Model.

Line items, drive accessory enums, the order-level accessory summary and the
immutable snapshots handed to the view layer.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidArgument


class DriveAccessory(str, Enum):
    """Drive accessory kinds priced by the catalog."""
    WINDER = "winder"
    MOTOR = "motor"
    REMOTE = "remote"
    CHARGER = "charger"
    CORD = "cord"

    @classmethod
    def parse(cls, value: Any) -> "DriveAccessory":
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgument(f"Unknown accessory: {value!r}") from None


# Accessories whose quantity is entered with +/- counters
COUNTER_ACCESSORIES: Tuple[DriveAccessory, ...] = (
    DriveAccessory.REMOTE,
    DriveAccessory.CHARGER,
    DriveAccessory.CORD,
)


class DriveAccessoryMode(str, Enum):
    """Which drive accessory the table/panel is currently editing."""
    NONE = "none"
    WINDER = "winder"
    MOTOR = "motor"
    REMOTE = "remote"
    CHARGER = "charger"
    CORD = "cord"

    @classmethod
    def parse(cls, value: Any) -> "DriveAccessoryMode":
        if value is None or value == "":
            return cls.NONE
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgument(f"Unknown drive accessory mode: {value!r}") from None

    @property
    def is_active(self) -> bool:
        return self is not DriveAccessoryMode.NONE


class Winder(str, Enum):
    NONE = ""
    HD = "HD"

    @property
    def is_set(self) -> bool:
        return self is not Winder.NONE


class Motor(str, Enum):
    NONE = ""
    MOTOR = "Motor"

    @property
    def is_set(self) -> bool:
        return self is not Motor.NONE


class HardwareField(str, Enum):
    """Per-row hardware attributes toggled from the table."""
    WINDER = "winder"
    MOTOR = "motor"

    @classmethod
    def parse(cls, value: Any) -> "HardwareField":
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgument(f"Unknown hardware field: {value!r}") from None

    @property
    def active_value(self):
        """Value written when the attribute is switched on."""
        return Winder.HD if self is HardwareField.WINDER else Motor.MOTOR

    @property
    def empty_value(self):
        return Winder.NONE if self is HardwareField.WINDER else Motor.NONE

    @property
    def other(self) -> "HardwareField":
        return HardwareField.MOTOR if self is HardwareField.WINDER else HardwareField.WINDER


@dataclass(frozen=True)
class LineItem:
    """
    One roller-blind row of the quote table.

    Attributes:
        sequence: 1-based position in the table
        width, height: Blind dimensions (None until entered)
        fabric_type: Fabric code
        location: Free-text room/location label
        winder: Winder.HD when a heavy-duty winder is fitted
        motor: Motor.MOTOR when motorised
    """
    sequence: int
    width: Optional[float] = None
    height: Optional[float] = None
    fabric_type: str = ""
    location: str = ""
    winder: Winder = Winder.NONE
    motor: Motor = Motor.NONE

    @property
    def is_empty(self) -> bool:
        """A row with no width, height or fabric is a blank placeholder."""
        return not self.width and not self.height and not self.fabric_type

    @property
    def has_winder(self) -> bool:
        return self.winder is Winder.HD

    @property
    def has_motor(self) -> bool:
        return self.motor.is_set

    def hardware(self, hw_field: HardwareField):
        return self.winder if hw_field is HardwareField.WINDER else self.motor


def any_motorized(items: Iterable[LineItem]) -> bool:
    return any(item.has_motor for item in items)


# --- Order-level accessory summary ---
class AccessoryLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    price: float


class RemoteLine(AccessoryLine):
    type: str = "standard"


class AccessorySummary(BaseModel):
    """
    Drive accessory totals for the whole order.

    Every accessory entry is required; a summary missing one is rejected.
    The extension cord is keyed `cord3m`.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    winder: AccessoryLine
    motor: AccessoryLine
    remote: RemoteLine
    charger: AccessoryLine
    cord3m: AccessoryLine
    grand_total: float


# --- Right panel (F2 tab) ---
@dataclass(frozen=True)
class F2State:
    """Quantities and fee lines of the right-panel summary tab."""
    wifi_qty: Optional[int] = None
    wifi_sum: Optional[float] = None
    delivery_qty: Optional[int] = None
    delivery_fee: Optional[float] = None
    install_qty: Optional[int] = None
    install_fee: Optional[float] = None
    removal_qty: Optional[int] = None
    removal_fee: Optional[float] = None
    # Accessory prices mirrored from the last committed summary
    summary_winder_price: Optional[float] = None
    summary_motor_price: Optional[float] = None
    summary_remote_price: Optional[float] = None
    summary_charger_price: Optional[float] = None
    summary_cord_price: Optional[float] = None
    # Profit chain; left unset until its formula is available
    mul_price: Optional[float] = None
    first_rb_price: Optional[float] = None
    discount: Optional[float] = None
    dis_rb_price: Optional[float] = None
    single_profit: Optional[float] = None
    rb_profit: Optional[float] = None
    sum_price: Optional[float] = None
    sum_profit: Optional[float] = None
    gst: Optional[float] = None
    net_profit: Optional[float] = None


@dataclass(frozen=True)
class SelectionState:
    """
    Table selection snapshot.

    The single index and the multi-select set are independent so leaving
    multi-select restores the previous single selection.
    """
    selected_row_index: Optional[int] = None
    is_multi_select_mode: bool = False
    multi_select_selected_indexes: FrozenSet[int] = frozenset()

    @property
    def is_single_row_selected(self) -> bool:
        return self.selected_row_index is not None


@dataclass(frozen=True)
class UIStateSnapshot:
    """Immutable view of UIState handed to consumers."""
    drive_accessory_mode: DriveAccessoryMode = DriveAccessoryMode.NONE
    drive_remote_count: int = 0
    drive_charger_count: int = 0
    drive_cord_count: int = 0
    drive_selected_remote_cost_key: Optional[str] = None
    drive_winder_total_price: Optional[float] = None
    drive_motor_total_price: Optional[float] = None
    drive_remote_total_price: Optional[float] = None
    drive_charger_total_price: Optional[float] = None
    drive_cord_total_price: Optional[float] = None
    drive_grand_total: Optional[float] = None
    selection: SelectionState = field(default_factory=SelectionState)
    visible_columns: Tuple[str, ...] = ()
    cost_discount_percentage: Optional[int] = None
    f2: F2State = field(default_factory=F2State)

    def count_for(self, accessory: DriveAccessory) -> int:
        return getattr(self, f"drive_{accessory.value}_count")

    def total_price_for(self, accessory: DriveAccessory) -> Optional[float]:
        return getattr(self, f"drive_{accessory.value}_total_price")


@dataclass(frozen=True)
class ButtonStates:
    """Enablement of the table-mutation keys."""
    insert_disabled: bool = True
    delete_disabled: bool = True
    multi_select_disabled: bool = True
    clear_disabled: bool = True
    multi_select_active: bool = False


@dataclass(frozen=True)
class QuoteSnapshot:
    """Payload of the render trigger."""
    product_type: str
    items: Tuple[LineItem, ...]
    ui: UIStateSnapshot
    accessory_summary: Optional[AccessorySummary]
    remote_cost_sum: Optional[float]
    buttons: ButtonStates
