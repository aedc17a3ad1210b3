"""Tests for the rich display surfaces."""

import io

import pytest
from rich.console import Console

from vmt.display import attach_views, render_listing, render_vessel
from vmt.models.state import BusyStatus, ViewState
from vmt.models.vessel import LastSeenPosition


@pytest.fixture
def terminal():
    return Console(file=io.StringIO(), width=120)


class TestRendering:
    @pytest.mark.unit
    def test_listing_has_one_row_per_vessel(self, sample_vessels):
        table = render_listing(sample_vessels)

        assert table.row_count == 3
        assert table.title == "Vessels (3)"

    @pytest.mark.unit
    def test_vessel_detail_shows_sighting(self, orion):
        vessel = orion.model_copy(
            update={"last_seen_position": LastSeenPosition(location=(1.5, 2), time=60000)}
        )

        table = render_vessel(vessel.for_editing(), edit_mode=True)

        assert table.title == "Editing Orion"
        assert table.row_count == 7


class TestViews:
    """Tests for views reacting to state changes."""

    @pytest.mark.unit
    def test_views_render_on_change(self, terminal, sample_vessels):
        state = ViewState()
        attach_views(state, terminal)

        state.apply(listing=sample_vessels, success_message="Congratulations!")

        output = terminal.file.getvalue()
        assert "Ocean Queen" in output
        assert "Congratulations!" in output

    @pytest.mark.unit
    def test_invalid_input_is_reported(self, terminal):
        state = ViewState()
        attach_views(state, terminal)

        state.apply(busy=BusyStatus.INVALID)

        assert "nothing was sent" in terminal.file.getvalue()

    @pytest.mark.unit
    def test_detached_views_stay_silent(self, terminal, orion):
        state = ViewState()
        for unsubscribe in attach_views(state, terminal):
            unsubscribe()

        state.apply(selected=orion)

        assert terminal.file.getvalue() == ""
