"""Terminal display surfaces observing the shared view state.

Each view subscribes to the fields it shows and re-renders when they change.
"""

from __future__ import annotations

from typing import Callable, FrozenSet, List, Optional

from rich.console import Console
from rich.table import Table

from .models.state import BusyStatus, ViewState
from .models.vessel import Vessel


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def render_listing(vessels: List[Vessel]) -> Table:
    """Table of vessels for the listing view."""
    table = Table(title=f"Vessels ({len(vessels)})")
    table.add_column("UUID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Width", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Draft", justify="right")

    for vessel in vessels:
        table.add_row(
            vessel.uuid or "-",
            vessel.name,
            _fmt(vessel.width),
            _fmt(vessel.length),
            _fmt(vessel.draft),
        )
    return table


def render_vessel(vessel: Vessel, edit_mode: bool = False) -> Table:
    """Key/value table for the detail view."""
    title = f"Editing {vessel.name}" if edit_mode else vessel.name
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="yellow")
    table.add_column("Value")

    table.add_row("UUID", vessel.uuid or "-")
    table.add_row("Name", vessel.name)
    table.add_row("Width", _fmt(vessel.width))
    table.add_row("Length", _fmt(vessel.length))
    table.add_row("Draft", _fmt(vessel.draft))

    position = vessel.last_seen_position
    if position is not None:
        lat, lon = position.location
        table.add_row("Last seen at", f"{lat:g}, {lon:g}")
        seen = position.date.isoformat() if position.date else str(position.time)
        table.add_row("Last seen", seen)
    return table


class ListingView:
    """Shows the search/browse results."""

    def __init__(self, state: ViewState, console: Console):
        self.console = console
        self.unsubscribe = state.subscribe(self.render, fields={"listing"})

    def render(self, state: ViewState, changed: FrozenSet[str]) -> None:
        if state.listing:
            self.console.print(render_listing(state.listing))


class SelectedVesselView:
    """Shows the selected vessel, in detail or edit mode."""

    def __init__(self, state: ViewState, console: Console):
        self.console = console
        self.unsubscribe = state.subscribe(self.render, fields={"selected", "edit_mode"})

    def render(self, state: ViewState, changed: FrozenSet[str]) -> None:
        if state.selected is not None:
            self.console.print(render_vessel(state.selected, edit_mode=state.edit_mode))


class MessageView:
    """Shows confirmations, errors and refused input."""

    def __init__(self, state: ViewState, console: Console):
        self.console = console
        self.unsubscribe = state.subscribe(
            self.render, fields={"success_message", "error_message", "busy"}
        )

    def render(self, state: ViewState, changed: FrozenSet[str]) -> None:
        if "success_message" in changed and state.success_message:
            self.console.print(f"[green]{state.success_message}[/green]")
        if "error_message" in changed and state.error_message:
            self.console.print(f"[red]{state.error_message}[/red]")
        if "busy" in changed and state.busy is BusyStatus.INVALID:
            self.console.print("[yellow]Search input is invalid, nothing was sent[/yellow]")


def attach_views(state: ViewState, console: Console) -> List[Callable[[], None]]:
    """Attach all display surfaces to a state.

    Returns:
        Unsubscribe functions, one per view.
    """
    views = [
        ListingView(state, console),
        SelectedVesselView(state, console),
        MessageView(state, console),
    ]
    return [view.unsubscribe for view in views]
