"""
Button enablement for the table-mutation keys (insert, delete, m-sel, clear).

Derived purely from the selection snapshot and the current line items.
"""
from typing import Sequence

from .models import ButtonStates, LineItem, SelectionState


def compute_button_states(items: Sequence[LineItem], selection: SelectionState) -> ButtonStates:
    selected = selection.selected_row_index
    is_single = selection.is_single_row_selected
    # Ignore a stale index left behind by a delete
    if is_single and not 0 <= selected < len(items):
        is_single = False

    insert_disabled = True
    if is_single:
        is_last_row = selected == len(items) - 1
        if not is_last_row and not items[selected + 1].is_empty:
            insert_disabled = False

    delete_disabled = True
    if selection.is_multi_select_mode:
        if selection.multi_select_selected_indexes:
            delete_disabled = False
    elif is_single:
        is_last_row = selected == len(items) - 1
        if not (is_last_row and items[selected].is_empty):
            delete_disabled = False

    return ButtonStates(
        insert_disabled=insert_disabled,
        delete_disabled=delete_disabled,
        multi_select_disabled=not is_single and not selection.is_multi_select_mode,
        clear_disabled=not is_single,
        multi_select_active=selection.is_multi_select_mode,
    )
