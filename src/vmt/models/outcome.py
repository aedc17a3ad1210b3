"""Results of a single round trip to the vessel registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Operation(str, Enum):
    """Operations the console can issue against the registry."""

    CREATE = "create"
    SEARCH = "search"
    LOAD = "load"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def success_status(self) -> int:
        """HTTP status that counts as success for this operation."""
        return 201 if self is Operation.CREATE else 200


class OutcomeKind(str, Enum):
    """How an operation ended."""

    SUCCESS = "success"
    REJECTED = "rejected"  # Server answered with a non-success status
    TRANSPORT_ERROR = "transport_error"  # No usable answer at all
    INVALID = "invalid"  # Refused locally, nothing sent


@dataclass
class ApiResponse:
    """Status, decoded body and headers of an HTTP response."""

    status_code: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@dataclass
class OperationOutcome:
    """Outcome of one console operation.

    Callers receive every failure as an explicit variant and decide
    themselves whether to ignore it.
    """

    operation: Operation
    kind: OutcomeKind
    response: Optional[ApiResponse] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def from_response(cls, operation: Operation, response: ApiResponse) -> OperationOutcome:
        """Classify a response by the operation's expected status code."""
        if response.status_code == operation.success_status:
            return cls(operation=operation, kind=OutcomeKind.SUCCESS, response=response)
        return cls(
            operation=operation,
            kind=OutcomeKind.REJECTED,
            response=response,
            error=f"HTTP {response.status_code}",
        )

    @classmethod
    def transport_failure(cls, operation: Operation, exc: Exception) -> OperationOutcome:
        return cls(operation=operation, kind=OutcomeKind.TRANSPORT_ERROR, error=str(exc) or type(exc).__name__)

    @classmethod
    def invalid(cls, operation: Operation, reason: str) -> OperationOutcome:
        return cls(operation=operation, kind=OutcomeKind.INVALID, error=reason)
