import pytest

from blindquote.quote.models import SelectionState
from blindquote.quote.selection import compute_button_states


def _single(index):
    return SelectionState(selected_row_index=index)


class TestInsert:

    def test_enabled_when_next_row_has_data(self, make_items):
        items = make_items(("", ""), ("", ""), ("", ""))[:3]

        assert not compute_button_states(items, _single(1)).insert_disabled

    def test_disabled_when_next_row_is_blank(self, make_items):
        items = make_items(("", ""), ("", ""))

        assert len(items) == 3
        assert compute_button_states(items, _single(1)).insert_disabled

    def test_disabled_on_last_row(self, make_items):
        items = make_items(("", ""))

        assert compute_button_states(items, _single(1)).insert_disabled

    def test_disabled_without_selection(self, make_items):
        assert compute_button_states(make_items(("", "")), SelectionState()).insert_disabled


class TestDelete:

    def test_trailing_blank_row_cannot_be_deleted(self, make_items):
        items = make_items(("", ""))

        assert compute_button_states(items, _single(1)).delete_disabled
        assert not compute_button_states(items, _single(0)).delete_disabled

    def test_multi_select_needs_a_marked_row(self, make_items):
        items = make_items(("", ""), ("", ""))
        empty = SelectionState(is_multi_select_mode=True)
        marked = SelectionState(is_multi_select_mode=True, multi_select_selected_indexes=frozenset({2}))

        assert compute_button_states(items, empty).delete_disabled
        assert not compute_button_states(items, marked).delete_disabled


@pytest.mark.parametrize("selection, m_sel_disabled, clear_disabled, active", [
    (SelectionState(), True, True, False),
    (SelectionState(selected_row_index=0), False, False, False),
    (SelectionState(is_multi_select_mode=True), False, True, True),
])
def test_multi_select_and_clear(make_items, selection, m_sel_disabled, clear_disabled, active):
    buttons = compute_button_states(make_items(("", "")), selection)

    assert buttons.multi_select_disabled is m_sel_disabled
    assert buttons.clear_disabled is clear_disabled
    assert buttons.multi_select_active is active


def test_stale_index_is_treated_as_no_selection(make_items):
    buttons = compute_button_states(make_items(("", "")), _single(5))

    assert buttons.insert_disabled
    assert buttons.delete_disabled
    assert buttons.clear_disabled


def test_snapshot_carries_button_states(coordinator, quote_store, ui_state, make_items):
    quote_store.set_items(make_items(("", ""), ("HD", ""), ("", "")))
    ui_state.select_row(0)

    assert not coordinator.snapshot().buttons.insert_disabled
