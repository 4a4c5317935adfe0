"""
Confirmation Gates.

A gate publishes a confirmation dialog and defers the guarded action until
the user answers. Each button carries a tagged command (confirm or cancel);
the dialog renderer invokes exactly one button callback per gate.

Usage:
    gate = ConfirmationGate(event_bus)
    pending = gate.open(
        "This blind is motorised. Switch it to HD?",
        on_confirm=lambda: store.update_hardware_attribute(0, "winder", "HD"),
    )
    ...
    pending.outcome  # None until the user answers
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from blindquote.core.events import EventBus, Events


class GateChoice(Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"


class GateOutcome(Enum):
    """Terminal outcome of a gate. DECLINED is a normal result, not an error."""
    CONFIRMED = "confirmed"
    DECLINED = "declined"


@dataclass(frozen=True)
class GateCommand:
    """Tagged command bound to one dialog button."""
    kind: GateChoice
    action: Optional[Callable[[], Any]] = None

    def execute(self) -> GateOutcome:
        if self.kind is GateChoice.CONFIRM:
            if self.action is not None:
                self.action()
            return GateOutcome.CONFIRMED
        return GateOutcome.DECLINED


@dataclass
class PendingGate:
    """One open confirmation; resolves at most once."""
    message: str
    confirm: GateCommand
    cancel: GateCommand
    outcome: Optional[GateOutcome] = field(default=None)

    @property
    def is_resolved(self) -> bool:
        return self.outcome is not None

    def resolve(self, choice: GateChoice) -> Optional[GateOutcome]:
        if self.is_resolved:
            logger.warning(f"Gate already resolved ({self.outcome.value}); ignoring {choice.value}")
            return self.outcome
        command = self.confirm if choice is GateChoice.CONFIRM else self.cancel
        # Mark first so a re-entrant click during the action is ignored
        self.outcome = GateOutcome.CONFIRMED if choice is GateChoice.CONFIRM else GateOutcome.DECLINED
        logger.debug(f"Gate '{self.message}' -> {self.outcome.value}")
        command.execute()
        return self.outcome


@dataclass(frozen=True)
class DialogButton:
    text: str
    callback: Callable[[], Any]
    class_name: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        payload = {"text": self.text, "callback": self.callback}
        if self.class_name:
            payload["className"] = self.class_name
        return payload


class ConfirmationGate:
    """Opens confirmation dialogs through the EventBus."""

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus

    def open(self, message: str, on_confirm: Callable[[], Any], *,
             confirm_text: str = "Confirm", cancel_text: str = "Cancel") -> PendingGate:
        pending = PendingGate(
            message=message,
            confirm=GateCommand(GateChoice.CONFIRM, on_confirm),
            cancel=GateCommand(GateChoice.CANCEL),
        )
        buttons: List[DialogButton] = [
            DialogButton(confirm_text, lambda: pending.resolve(GateChoice.CONFIRM)),
            DialogButton(cancel_text, lambda: pending.resolve(GateChoice.CANCEL), class_name="secondary"),
        ]
        self.event_bus.publish(Events.SHOW_CONFIRMATION_DIALOG, {
            "message": message,
            "buttons": [b.as_payload() for b in buttons],
        })
        return pending
