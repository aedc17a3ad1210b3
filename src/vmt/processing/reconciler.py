"""Apply completed registry operations to the shared view state.

The reconciler is the only component that mutates `ViewState`. Each method
applies exactly one outcome; applying the same successful update or delete
twice leaves the listing as after the first application.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from ..models.outcome import Operation, OperationOutcome, OutcomeKind
from ..models.state import BusyStatus, ViewState
from ..models.vessel import Vessel
from ..utils import identity_from_location

logger = logging.getLogger(__name__)


# ============================================
# USER-FACING MESSAGES
# ============================================


class ConsoleMessages:
    """User-facing confirmation and error texts."""

    GENERIC_ERROR = "The vessel registry could not be reached. Please try again."
    UNREADABLE_RESPONSE = "The vessel registry sent a response that could not be read."

    @staticmethod
    def registered(name: str) -> str:
        return f"Congratulations! Vessel {name} has been registered."

    @staticmethod
    def updated(name: str) -> str:
        return f"Congratulations! Vessel {name} has been updated."

    @staticmethod
    def removed(name: str) -> str:
        return f"Congratulations! Vessel {name} has been removed."


class ResultReconciler:
    """Applies operation outcomes to a `ViewState`."""

    def __init__(self, state: ViewState):
        """Initialize reconciler.

        Args:
            state: The session's shared view state.
        """
        self.state = state

    # ==================== Interaction ====================

    def begin(self, busy: BusyStatus, clear_results: bool = False) -> None:
        """Mark an operation as started, clearing pending messages.

        Args:
            busy: Status describing the operation in flight.
            clear_results: Also clear `selected` and `listing` (new search).
        """
        changes = {"busy": busy, "success_message": None, "error_message": None}
        if clear_results:
            changes.update(selected=None, listing=[])
        self.state.apply(**changes)

    def dismiss_message(self) -> None:
        """Any press inside the console dismisses the success message."""
        self.state.apply(success_message=None)

    def select(self, vessel: Optional[Vessel]) -> None:
        self.state.apply(selected=vessel)

    def leave_edit_mode(self) -> None:
        self.state.apply(edit_mode=False)

    def abort(self, operation: Operation) -> None:
        """Clear the busy indicator after an unexpected error in `operation`."""
        logger.error("%s aborted by an unexpected error", operation.value)
        self.state.apply(busy=BusyStatus.IDLE, error_message=ConsoleMessages.GENERIC_ERROR)

    def apply_invalid(self, outcome: OperationOutcome, clear_results: bool = False) -> None:
        """Input was refused locally; nothing went over the wire.

        A refused search still clears the previous results.
        """
        logger.info("%s refused: %s", outcome.operation.value, outcome.error)
        changes = {"busy": BusyStatus.INVALID}
        if clear_results:
            changes.update(selected=None, listing=[])
        self.state.apply(**changes)

    # ==================== Operation results ====================

    def apply_created(self, draft: Vessel, outcome: OperationOutcome) -> Optional[Vessel]:
        """Select and list a newly registered vessel.

        Returns:
            The vessel with its server-assigned identity, or None on failure.
        """
        if not outcome.ok:
            self._apply_failure(outcome)
            return None

        location = outcome.response.header("Location")
        if location is None:
            logger.warning("Created vessel %s without a Location header", draft.name)
        created = draft.model_copy(update={"uuid": identity_from_location(location)})

        self.state.apply(
            selected=created,
            listing=[*self.state.listing, created],
            success_message=ConsoleMessages.registered(created.name),
            busy=BusyStatus.IDLE,
        )
        return created

    def apply_search(self, outcome: OperationOutcome) -> List[Vessel]:
        """Show one hit as `selected`, several (or none) as `listing`.

        Returns:
            The vessels found (empty on failure).
        """
        if not outcome.ok:
            self._apply_failure(outcome)
            return []

        body = outcome.response.body
        if not isinstance(body, list):
            logger.warning("Search returned a non-list body, ignoring it")
            self.state.apply(busy=BusyStatus.IDLE)
            return []

        vessels = self._parse_vessels(body)
        if vessels is None:
            return []

        if len(vessels) == 1:
            self.state.apply(selected=vessels[0], listing=[], busy=BusyStatus.IDLE)
        else:
            self.state.apply(selected=None, listing=vessels, busy=BusyStatus.IDLE)
        logger.debug("Search found %d vessel(s)", len(vessels))
        return vessels

    def apply_loaded(self, outcome: OperationOutcome, edit: bool = False) -> Optional[Vessel]:
        """Select a freshly loaded vessel, with its last seen date derived.

        Args:
            outcome: Result of the load.
            edit: Enter edit mode once the vessel is loaded.
        """
        if not outcome.ok:
            self._apply_failure(outcome)
            return None

        vessels = self._parse_vessels([outcome.response.body])
        if vessels is None:
            return None

        vessel = vessels[0].for_editing()
        changes = {"selected": vessel, "busy": BusyStatus.IDLE}
        if edit:
            changes["edit_mode"] = True
        self.state.apply(**changes)
        return vessel

    def apply_updated(self, vessel: Vessel, outcome: OperationOutcome) -> None:
        """Replace the updated vessel wherever it appears in the listing.

        Args:
            vessel: The vessel as it was sent (persisted form).
            outcome: Result of the update.
        """
        if not outcome.ok:
            # A rejected save leaves edit mode; a lost connection keeps the edits open
            extra = {"edit_mode": False} if outcome.kind is OutcomeKind.REJECTED else {}
            self._apply_failure(outcome, **extra)
            return

        listing = [vessel if item.uuid == vessel.uuid else item for item in self.state.listing]
        self.state.apply(
            selected=vessel,
            listing=listing,
            success_message=ConsoleMessages.updated(vessel.name),
            busy=BusyStatus.IDLE,
            edit_mode=False,
        )

    def apply_deleted(self, vessel: Vessel, outcome: OperationOutcome) -> None:
        """Drop the deleted vessel from the listing and the detail view."""
        if not outcome.ok:
            self._apply_failure(outcome)
            return

        listing = [item for item in self.state.listing if item.uuid != vessel.uuid]
        self.state.apply(
            selected=None,
            listing=listing,
            success_message=ConsoleMessages.removed(vessel.name),
            busy=BusyStatus.IDLE,
        )

    # ==================== Helpers ====================

    def _apply_failure(self, outcome: OperationOutcome, **extra) -> None:
        """Clear the busy indicator without touching the results.

        Rejected statuses stay silent for the user; transport failures
        surface a generic error message.
        """
        if outcome.kind is OutcomeKind.TRANSPORT_ERROR:
            logger.error("%s failed: %s", outcome.operation.value, outcome.error)
            self.state.apply(
                busy=BusyStatus.IDLE, error_message=ConsoleMessages.GENERIC_ERROR, **extra
            )
        else:
            logger.warning("%s rejected: %s", outcome.operation.value, outcome.error)
            self.state.apply(busy=BusyStatus.IDLE, **extra)

    def _parse_vessels(self, items: list) -> Optional[List[Vessel]]:
        """Validate vessel records from a response body.

        Returns:
            Parsed vessels, or None if any record is malformed.
        """
        try:
            return [Vessel.model_validate(item) for item in items]
        except ValidationError as e:
            logger.error("Malformed vessel record from registry: %s", e)
            self.state.apply(
                busy=BusyStatus.IDLE, error_message=ConsoleMessages.UNREADABLE_RESPONSE
            )
            return None
