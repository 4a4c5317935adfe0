"""
Event Type Constants.

Topic names exchanged between the quote views and the coordinators.
The camelCase names are the contract with the view layer.

Usage:
    from blindquote.core.events import Events, EventBus

    event_bus.subscribe(Events.STATE_CHANGED, render)
    event_bus.publish(Events.TABLE_CELL_CLICKED, {"rowIndex": 0, "column": "winder"})
"""


class Events:
    """
    Standard event type constants for EventBus.

    Example:
        >>> from blindquote.core.events import Events, EventBus
        >>> event_bus.subscribe(Events.SHOW_NOTIFICATION, toast)
    """

    # Inbound - intents from the view layer
    DRIVE_ACCESSORY_MODE_CHANGE_REQUESTED = "driveAccessoryModeChangeRequested"
    TABLE_CELL_CLICKED = "tableCellClicked"
    ACCESSORY_COUNTER_CLICKED = "accessoryCounterClicked"
    REMOTE_COST_KEY_SELECTED = "remoteCostKeySelected"
    F2_QTY_CHANGED = "f2QtyChanged"
    F2_TAB_ACTIVATED = "f2TabActivated"

    # Outbound - notifications and dialogs
    SHOW_NOTIFICATION = "showNotification"
    SHOW_CONFIRMATION_DIALOG = "showConfirmationDialog"
    COST_DISCOUNT_ENTERED = "costDiscountEntered"

    # Render trigger
    STATE_CHANGED = "state.changed"

    # Config events
    CONFIG_CHANGED = "config.changed"
