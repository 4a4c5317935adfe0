"""
Quote - Roller-blind quote state and drive accessory pricing.

Provides:
- QuoteStore / UIState: the two state owners of a session
- Catalog / PricingEngine: rate table and pure price functions
- AccessoryCoordinator: drive accessory mode, toggles, counters, recompute
- RightPanelCoordinator: F2 summary tab quantities and fees
"""
from .errors import QuoteError, InvalidArgument, OutOfRange, UnknownCatalogEntry
from .models import (
    AccessoryLine,
    AccessorySummary,
    ButtonStates,
    DriveAccessory,
    DriveAccessoryMode,
    F2State,
    HardwareField,
    LineItem,
    Motor,
    QuoteSnapshot,
    RemoteLine,
    SelectionState,
    UIStateSnapshot,
    Winder,
)
from .catalog import Catalog, DEFAULT_CATALOG, load_catalog, reload_catalog
from .pricing import PricingEngine
from .store import QuoteStore
from .ui_state import UIState
from .gates import ConfirmationGate, GateChoice, GateCommand, GateOutcome, PendingGate
from .selection import compute_button_states
from .coordinator import AccessoryCoordinator
from .right_panel import RightPanelCoordinator

__all__ = [
    # Errors
    "QuoteError",
    "InvalidArgument",
    "OutOfRange",
    "UnknownCatalogEntry",

    # Model
    "AccessoryLine",
    "AccessorySummary",
    "ButtonStates",
    "DriveAccessory",
    "DriveAccessoryMode",
    "F2State",
    "HardwareField",
    "LineItem",
    "Motor",
    "QuoteSnapshot",
    "RemoteLine",
    "SelectionState",
    "UIStateSnapshot",
    "Winder",

    # Catalog & pricing
    "Catalog",
    "DEFAULT_CATALOG",
    "load_catalog",
    "reload_catalog",
    "PricingEngine",

    # Systems
    "QuoteStore",
    "UIState",

    # Gates
    "ConfirmationGate",
    "GateChoice",
    "GateCommand",
    "GateOutcome",
    "PendingGate",

    # Coordinators
    "compute_button_states",
    "AccessoryCoordinator",
    "RightPanelCoordinator",
]
