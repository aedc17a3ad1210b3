"""Console controller: form, operations and the delete confirmation gate.

`VesselConsole` ties the form, the search strategy, the vessels client and
the result reconciler together. Every async operation returns its
`OperationOutcome`.
"""

from __future__ import annotations

import inspect
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Union

import httpx

from .config import get_settings
from .models.form import VesselForm
from .models.outcome import ApiResponse, Operation, OperationOutcome
from .models.state import BusyStatus, ViewState
from .models.vessel import LastSeenPosition, Vessel
from .processing.reconciler import ResultReconciler
from .query.strategies import InvalidSearchError, SearchStrategy, get_search_strategy

if TYPE_CHECKING:
    from .config import Settings
    from .storage.vessels_client import VesselsClient

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[Vessel], Union[bool, Awaitable[bool]]]


class OperationInProgressError(RuntimeError):
    """Another operation is still waiting for the registry."""

    pass


class PendingDeletion:
    """First phase of a delete: nothing is sent until `confirm()`."""

    def __init__(self, console: VesselConsole, vessel: Vessel):
        self._console = console
        self.vessel = vessel
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    async def confirm(self) -> OperationOutcome:
        """Issue the DELETE request."""
        if self._settled:
            raise RuntimeError("Deletion already confirmed or cancelled")
        self._settled = True
        return await self._console._delete(self.vessel)

    def cancel(self) -> None:
        """Abandon the deletion without any request or state change."""
        self._settled = True
        logger.debug("Deletion of %s cancelled", self.vessel.uuid)


class VesselConsole:
    """Orchestrates registry operations for one console session."""

    def __init__(
        self,
        client: VesselsClient,
        strategy: Optional[SearchStrategy] = None,
        state: Optional[ViewState] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the console.

        Args:
            client: Vessels REST client.
            strategy: Search strategy (default: from settings).
            state: Shared view state (creates a fresh one if not provided).
            settings: Settings instance (default: cached settings).
        """
        settings = settings or get_settings()
        self.client = client
        self.strategy = strategy or get_search_strategy(settings=settings)
        self.state = state or ViewState()
        self.reconciler = ResultReconciler(self.state)
        self.form = VesselForm(defaults=settings.form_defaults)
        self.allow_concurrent = settings.allow_concurrent_operations

    # ==================== Search / create form ====================

    async def create(self) -> OperationOutcome:
        """Register the vessel described by the form."""
        self._ensure_idle(Operation.CREATE)

        errors = self.form.validation_errors()
        if errors:
            logger.info("Create refused: %s", "; ".join(errors))
            return OperationOutcome.invalid(Operation.CREATE, "; ".join(errors))

        draft = self.form.to_vessel()
        self.reconciler.begin(BusyStatus.CREATING)
        outcome = await self._dispatch(Operation.CREATE, self.client.create(draft))
        self.reconciler.apply_created(draft, outcome)
        self.form.mark_pristine()
        return outcome

    async def search(self) -> OperationOutcome:
        """Search the registry with the configured strategy."""
        self._ensure_idle(Operation.SEARCH)

        try:
            request = self.strategy.build(self.form)
        except InvalidSearchError as e:
            outcome = OperationOutcome.invalid(Operation.SEARCH, str(e))
            self.reconciler.apply_invalid(outcome, clear_results=True)
            return outcome

        self.reconciler.begin(BusyStatus.SEARCHING, clear_results=True)
        outcome = await self._dispatch(Operation.SEARCH, self.client.search(request))
        self.reconciler.apply_search(outcome)
        self.form.mark_pristine()
        return outcome

    def press(self) -> None:
        """User interaction inside the console."""
        self.reconciler.dismiss_message()

    # ==================== Listing / detail view ====================

    def show(self, vessel: Vessel) -> None:
        """Show a vessel from the listing in the detail view."""
        self.reconciler.select(vessel)

    async def load(self, uuid: str) -> OperationOutcome:
        """Fetch a vessel by identity and show it."""
        return await self._load(uuid, edit=False)

    async def edit(self, vessel: Vessel) -> OperationOutcome:
        """Reload a vessel and open it for editing."""
        return await self._load(self._require_identity(vessel), edit=True)

    def cancel_edit(self) -> None:
        self.reconciler.leave_edit_mode()

    def add_last_seen_position(self, now: Optional[datetime] = None) -> LastSeenPosition:
        """Attach a last seen position (origin, current minute) to the selected vessel."""
        selected = self.state.selected
        if selected is None:
            raise ValueError("No vessel selected")
        position = LastSeenPosition.at(now)
        self.reconciler.select(selected.model_copy(update={"last_seen_position": position}))
        return position

    async def update(self, vessel: Vessel) -> OperationOutcome:
        """Save an edited vessel."""
        self._ensure_idle(Operation.UPDATE)

        self._require_identity(vessel)

        saved = vessel.for_saving()
        self.reconciler.begin(BusyStatus.UPDATING)
        outcome = await self._dispatch(Operation.UPDATE, self.client.update(saved))
        self.reconciler.apply_updated(saved, outcome)
        return outcome

    def request_delete(self, vessel: Vessel) -> PendingDeletion:
        """Start a deletion; the request is only sent on confirmation."""
        return PendingDeletion(self, vessel)

    async def delete(self, vessel: Vessel, confirm: ConfirmCallback) -> Optional[OperationOutcome]:
        """Delete a vessel if `confirm` agrees.

        Args:
            vessel: Vessel to delete.
            confirm: Sync or async callback deciding whether to proceed.

        Returns:
            The outcome, or None if the user declined.
        """
        pending = self.request_delete(vessel)
        decision = confirm(vessel)
        if inspect.isawaitable(decision):
            decision = await decision

        if not decision:
            pending.cancel()
            return None
        return await pending.confirm()

    # ==================== Internals ====================

    async def _load(self, uuid: str, edit: bool) -> OperationOutcome:
        self._ensure_idle(Operation.LOAD)
        self.reconciler.begin(BusyStatus.LOADING)
        outcome = await self._dispatch(Operation.LOAD, self.client.load(uuid))
        self.reconciler.apply_loaded(outcome, edit=edit)
        return outcome

    async def _delete(self, vessel: Vessel) -> OperationOutcome:
        self._ensure_idle(Operation.DELETE)
        self._require_identity(vessel)
        self.reconciler.begin(BusyStatus.DELETING)
        outcome = await self._dispatch(Operation.DELETE, self.client.delete(vessel))
        self.reconciler.apply_deleted(vessel, outcome)
        return outcome

    @staticmethod
    def _require_identity(vessel: Vessel) -> str:
        if not vessel.uuid:
            raise ValueError(f"Vessel {vessel.name!r} has no identity yet")
        return vessel.uuid

    def _ensure_idle(self, operation: Operation) -> None:
        """Refuse to start while another request is outstanding.

        With concurrent operations allowed, the last response to arrive wins.
        """
        if not self.allow_concurrent and self.state.busy.in_flight:
            raise OperationInProgressError(
                f"Cannot {operation.value} while {self.state.busy.value} is in progress"
            )

    async def _dispatch(
        self, operation: Operation, request: Awaitable[ApiResponse]
    ) -> OperationOutcome:
        """Await a client call and classify its result."""
        try:
            response = await request
        except httpx.HTTPError as e:
            return OperationOutcome.transport_failure(operation, e)
        except Exception:
            self.reconciler.abort(operation)
            raise
        return OperationOutcome.from_response(operation, response)
