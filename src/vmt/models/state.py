"""Shared view state observed by the console's display surfaces.

One `ViewState` is created per session and passed to every component that
needs it. Changes go through `apply()`, which notifies subscribers
synchronously with the names of the fields that changed.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr

from .vessel import Vessel

Listener = Callable[["ViewState", FrozenSet[str]], None]


class BusyStatus(str, Enum):
    """Which operation is currently in flight."""

    IDLE = "idle"
    CREATING = "creating"
    SEARCHING = "searching"
    LOADING = "loading"
    UPDATING = "updating"
    DELETING = "deleting"
    INVALID = "invalid"

    @property
    def in_flight(self) -> bool:
        """Whether a request is outstanding."""
        return self not in (BusyStatus.IDLE, BusyStatus.INVALID)


class ViewState(BaseModel):
    """State shared by the listing, detail and message surfaces.

    `selected` and `listing` are alternative presentations: a single search
    hit is shown as `selected`, several hits as `listing`.
    """

    listing: List[Vessel] = Field(default_factory=list, description="Search/browse results")
    selected: Optional[Vessel] = Field(default=None, description="Vessel in detail or edit view")
    busy: BusyStatus = Field(default=BusyStatus.IDLE, description="Operation in flight")
    success_message: Optional[str] = Field(default=None, description="Confirmation for the user")
    error_message: Optional[str] = Field(default=None, description="Generic error for the user")
    edit_mode: bool = Field(default=False, description="Whether `selected` is being edited")

    _listeners: List[Tuple[Listener, Optional[FrozenSet[str]]]] = PrivateAttr(default_factory=list)

    def subscribe(self, listener: Listener, fields: Optional[Iterable[str]] = None) -> Callable[[], None]:
        """Register a listener for state changes.

        Args:
            listener: Called with the state and the changed field names.
            fields: Only notify when one of these fields changes (default: any).

        Returns:
            A function that removes the subscription.
        """
        entry = (listener, frozenset(fields) if fields is not None else None)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def apply(self, **changes) -> FrozenSet[str]:
        """Set several fields at once and notify subscribers.

        Returns:
            Names of the fields whose value actually changed.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise AttributeError(f"Unknown view state fields: {sorted(unknown)}")

        changed = set()
        for name, value in changes.items():
            if name == "listing":
                value = list(value)
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.add(name)

        if changed:
            self._notify(frozenset(changed))
        return frozenset(changed)

    def _notify(self, changed: FrozenSet[str]) -> None:
        for listener, fields in list(self._listeners):
            if fields is None or fields & changed:
                listener(self, changed)


def create_initial_state() -> ViewState:
    """Create a fresh initial state."""
    return ViewState()
