"""CLI entry point for VMT - vessel registry management console."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import get_settings
from .console import VesselConsole
from .display import attach_views
from .models.outcome import OperationOutcome
from .query.strategies import get_search_strategy
from .storage.vessels_client import VesselsClient
from .version import get_version_info

app = typer.Typer(
    name="vmt",
    help="VMT - create, search, edit and delete vessels in the registry",
)
vessels_app = typer.Typer(help="Vessel registry management")
app.add_typer(vessels_app, name="vessels")
console = Console()


def _configure_logging(level: str) -> None:
    """Route log records through rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    _configure_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def version():
    """Show version information."""
    info = get_version_info()
    console.print(f"vmt {info['version']} ({info['git_sha_short']})")


def _open_console(strategy: Optional[str] = None) -> VesselConsole:
    """Create a console wired to the registry with all views attached."""
    settings = get_settings()
    vessel_console = VesselConsole(
        VesselsClient(),
        strategy=get_search_strategy(strategy, settings),
        settings=settings,
    )
    attach_views(vessel_console.state, console)
    return vessel_console


def _exit_on_failure(outcome: Optional[OperationOutcome]) -> None:
    if outcome is not None and not outcome.ok:
        console.print(f"[red]{outcome.operation.value} failed: {outcome.error}[/red]")
        raise typer.Exit(1)


def _parse_location(value: str) -> Tuple[float, float]:
    """Parse "LAT,LON" into a coordinate pair."""
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError:
        raise typer.BadParameter(f"Expected LAT,LON but got {value!r}")
    return lat, lon


# ==================== Vessels Commands ====================


@vessels_app.command("search")
def vessels_search(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Vessel name or part of it"),
    width: Optional[float] = typer.Option(None, "--width", help="Approximate width"),
    length: Optional[float] = typer.Option(None, "--length", help="Approximate length"),
    draft: Optional[float] = typer.Option(None, "--draft", help="Approximate draft"),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="fuzzy_range_or or flat_equality (default: VMT_SEARCH_STRATEGY)",
    ),
):
    """Search the registry.

    Examples:
        vmt vessels search --name ori
        vmt vessels search --name orion --width 10
    """
    asyncio.run(_vessels_search(name, width, length, draft, strategy))


async def _vessels_search(
    name: Optional[str],
    width: Optional[float],
    length: Optional[float],
    draft: Optional[float],
    strategy: Optional[str],
):
    """Async implementation of vessels search command."""
    vessel_console = _open_console(strategy)

    try:
        fields = {"name": name, "width": width, "length": length, "draft": draft}
        vessel_console.form.update(**{k: v for k, v in fields.items() if v is not None})

        outcome = await vessel_console.search()
        _exit_on_failure(outcome)

        state = vessel_console.state
        if state.selected is None and not state.listing:
            console.print("[dim]No vessels found[/dim]")

    finally:
        await vessel_console.client.close()


@vessels_app.command("show")
def vessels_show(uuid: str = typer.Argument(..., help="Vessel identity")):
    """Show one vessel."""
    asyncio.run(_vessels_show(uuid))


async def _vessels_show(uuid: str):
    """Async implementation of vessels show command."""
    vessel_console = _open_console()

    try:
        _exit_on_failure(await vessel_console.load(uuid))
    finally:
        await vessel_console.client.close()


@vessels_app.command("create")
def vessels_create(
    name: str = typer.Option(..., "--name", "-n", help="Vessel name"),
    width: Optional[float] = typer.Option(None, "--width", help="Width (default: VMT_DEFAULT_WIDTH)"),
    length: Optional[float] = typer.Option(None, "--length", help="Length (default: VMT_DEFAULT_LENGTH)"),
    draft: Optional[float] = typer.Option(None, "--draft", help="Draft (default: VMT_DEFAULT_DRAFT)"),
):
    """Register a new vessel."""
    asyncio.run(_vessels_create(name, width, length, draft))


async def _vessels_create(
    name: str,
    width: Optional[float],
    length: Optional[float],
    draft: Optional[float],
):
    """Async implementation of vessels create command."""
    vessel_console = _open_console()

    try:
        fields = {"name": name, "width": width, "length": length, "draft": draft}
        vessel_console.form.update(**{k: v for k, v in fields.items() if v is not None})
        _exit_on_failure(await vessel_console.create())
    finally:
        await vessel_console.client.close()


@vessels_app.command("update")
def vessels_update(
    uuid: str = typer.Argument(..., help="Vessel identity"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    width: Optional[float] = typer.Option(None, "--width", help="New width"),
    length: Optional[float] = typer.Option(None, "--length", help="New length"),
    draft: Optional[float] = typer.Option(None, "--draft", help="New draft"),
    last_seen: Optional[str] = typer.Option(
        None,
        "--last-seen",
        help="Record a sighting now at LAT,LON",
    ),
):
    """Edit an existing vessel.

    Examples:
        vmt vessels update abc123 --width 12
        vmt vessels update abc123 --last-seen 51.9,4.1
    """
    location = _parse_location(last_seen) if last_seen else None
    asyncio.run(_vessels_update(uuid, name, width, length, draft, location))


async def _vessels_update(
    uuid: str,
    name: Optional[str],
    width: Optional[float],
    length: Optional[float],
    draft: Optional[float],
    location: Optional[Tuple[float, float]],
):
    """Async implementation of vessels update command."""
    vessel_console = _open_console()

    try:
        _exit_on_failure(await vessel_console.load(uuid))
        state = vessel_console.state
        if state.selected is None:
            raise typer.Exit(1)

        if location is not None:
            position = vessel_console.add_last_seen_position()
            vessel_console.show(
                state.selected.model_copy(
                    update={"last_seen_position": position.model_copy(update={"location": location})}
                )
            )

        fields = {"name": name, "width": width, "length": length, "draft": draft}
        edited = state.selected.model_copy(update={k: v for k, v in fields.items() if v is not None})
        _exit_on_failure(await vessel_console.update(edited))
    finally:
        await vessel_console.client.close()


@vessels_app.command("delete")
def vessels_delete(
    uuid: str = typer.Argument(..., help="Vessel identity"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Remove a vessel from the registry."""
    asyncio.run(_vessels_delete(uuid, yes))


async def _vessels_delete(uuid: str, yes: bool):
    """Async implementation of vessels delete command."""
    vessel_console = _open_console()

    try:
        _exit_on_failure(await vessel_console.load(uuid))
        vessel = vessel_console.state.selected
        if vessel is None:
            raise typer.Exit(1)

        outcome = await vessel_console.delete(
            vessel,
            confirm=lambda v: yes or typer.confirm(f"Are you sure you want to delete {v.name}?"),
        )
        if outcome is None:
            console.print("[dim]Deletion cancelled[/dim]")
            return
        _exit_on_failure(outcome)
    finally:
        await vessel_console.client.close()


if __name__ == "__main__":
    app()
