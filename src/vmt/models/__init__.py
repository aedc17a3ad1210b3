"""Data models for VMT."""

from .form import FORM_FIELDS, VesselForm
from .outcome import ApiResponse, Operation, OperationOutcome, OutcomeKind
from .state import BusyStatus, ViewState, create_initial_state
from .vessel import LastSeenPosition, Vessel

__all__ = [
    "FORM_FIELDS",
    "VesselForm",
    "ApiResponse",
    "Operation",
    "OperationOutcome",
    "OutcomeKind",
    "BusyStatus",
    "ViewState",
    "create_initial_state",
    "LastSeenPosition",
    "Vessel",
]
