"""Tests for the shared view state and its change notifications."""

from unittest.mock import MagicMock

import pytest

from vmt.models.state import BusyStatus, ViewState, create_initial_state


class TestBusyStatus:
    """Tests for BusyStatus."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "status,in_flight",
        [
            (BusyStatus.IDLE, False),
            (BusyStatus.INVALID, False),
            (BusyStatus.CREATING, True),
            (BusyStatus.SEARCHING, True),
            (BusyStatus.LOADING, True),
            (BusyStatus.UPDATING, True),
            (BusyStatus.DELETING, True),
        ],
    )
    def test_in_flight(self, status, in_flight):
        assert status.in_flight is in_flight


class TestViewState:
    """Tests for ViewState.apply and subscriptions."""

    @pytest.mark.unit
    def test_initial_state(self):
        state = create_initial_state()

        assert state.listing == []
        assert state.selected is None
        assert state.busy is BusyStatus.IDLE
        assert state.success_message is None
        assert state.error_message is None
        assert state.edit_mode is False

    @pytest.mark.unit
    def test_apply_notifies_with_changed_fields(self, orion):
        state = ViewState()
        listener = MagicMock()
        state.subscribe(listener)

        changed = state.apply(selected=orion, busy=BusyStatus.IDLE)

        assert changed == frozenset({"selected"})
        listener.assert_called_once_with(state, frozenset({"selected"}))

    @pytest.mark.unit
    def test_no_notification_without_change(self):
        state = ViewState()
        listener = MagicMock()
        state.subscribe(listener)

        state.apply(busy=BusyStatus.IDLE, listing=[])

        listener.assert_not_called()

    @pytest.mark.unit
    def test_field_filtered_subscription(self, orion):
        state = ViewState()
        listing_listener = MagicMock()
        message_listener = MagicMock()
        state.subscribe(listing_listener, fields={"listing"})
        state.subscribe(message_listener, fields={"success_message"})

        state.apply(listing=[orion])

        listing_listener.assert_called_once()
        message_listener.assert_not_called()

    @pytest.mark.unit
    def test_listener_sees_all_changes_at_once(self, orion):
        state = ViewState()
        seen = []
        state.subscribe(lambda s, changed: seen.append((s.selected, list(s.listing), changed)))

        state.apply(selected=None, listing=[orion], busy=BusyStatus.SEARCHING)

        assert seen == [(None, [orion], frozenset({"listing", "busy"}))]

    @pytest.mark.unit
    def test_unsubscribe(self):
        state = ViewState()
        listener = MagicMock()
        unsubscribe = state.subscribe(listener)

        unsubscribe()
        unsubscribe()
        state.apply(edit_mode=True)

        listener.assert_not_called()

    @pytest.mark.unit
    def test_listing_is_copied(self, orion):
        state = ViewState()
        results = [orion]

        state.apply(listing=results)
        results.clear()

        assert state.listing == [orion]

    @pytest.mark.unit
    def test_unknown_field(self):
        with pytest.raises(AttributeError, match="vessel"):
            ViewState().apply(vessel=None)
