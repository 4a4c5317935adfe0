from unittest.mock import MagicMock

import pytest

from blindquote.quote.gates import (
    ConfirmationGate,
    GateChoice,
    GateCommand,
    GateOutcome,
    PendingGate,
)


@pytest.fixture
def gate(bus):
    return ConfirmationGate(bus)


def test_open_publishes_dialog(gate, events):
    action = MagicMock()

    pending = gate.open("Switch to HD?", action, confirm_text="Yes", cancel_text="No")

    assert not pending.is_resolved
    assert events.dialogs[0]["message"] == "Switch to HD?"
    assert [b["text"] for b in events.dialogs[0]["buttons"]] == ["Yes", "No"]
    action.assert_not_called()


def test_confirm_runs_action_once(gate, events):
    action = MagicMock()
    pending = gate.open("Remove?", action)

    events.click(0, "Confirm")
    events.click(0, "Confirm")
    events.click(0, "Cancel")

    action.assert_called_once_with()
    assert pending.outcome is GateOutcome.CONFIRMED


def test_cancel_is_a_normal_outcome(gate, events):
    action = MagicMock()
    pending = gate.open("Remove?", action)

    events.click(0, "Cancel")
    events.click(0, "Confirm")

    action.assert_not_called()
    assert pending.outcome is GateOutcome.DECLINED


def test_outcome_set_before_action_runs():
    seen = []
    pending = PendingGate(
        message="m",
        confirm=GateCommand(GateChoice.CONFIRM, lambda: seen.append(pending.is_resolved)),
        cancel=GateCommand(GateChoice.CANCEL),
    )

    assert pending.resolve(GateChoice.CONFIRM) is GateOutcome.CONFIRMED
    assert seen == [True]


def test_action_errors_propagate_to_the_caller():
    pending = PendingGate(
        message="m",
        confirm=GateCommand(GateChoice.CONFIRM, MagicMock(side_effect=RuntimeError("boom"))),
        cancel=GateCommand(GateChoice.CANCEL),
    )

    with pytest.raises(RuntimeError):
        pending.resolve(GateChoice.CONFIRM)
    assert pending.outcome is GateOutcome.CONFIRMED
