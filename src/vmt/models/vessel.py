"""Vessel data models for the registry console."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..utils import datetime_to_epoch_ms, epoch_ms_to_datetime


class LastSeenPosition(BaseModel):
    """Where and when a vessel was last seen.

    `time` (epoch milliseconds) is the persisted form. `date` is derived for
    editing only and is never serialized.
    """

    model_config = ConfigDict(extra="ignore")

    location: Tuple[float, float] = (0.0, 0.0)
    time: Optional[int] = None
    date: Optional[datetime] = Field(default=None, exclude=True)

    @classmethod
    def at(cls, now: Optional[datetime] = None) -> LastSeenPosition:
        """Create a position at the origin, stamped with the current minute."""
        moment = (now or datetime.now(timezone.utc)).replace(second=0, microsecond=0)
        return cls(location=(0.0, 0.0), time=datetime_to_epoch_ms(moment), date=moment)

    def with_derived_date(self) -> LastSeenPosition:
        """Return a copy whose `date` mirrors `time`."""
        if self.time is None:
            return self.model_copy()
        return self.model_copy(update={"date": epoch_ms_to_datetime(self.time)})

    def with_canonical_time(self) -> LastSeenPosition:
        """Return a copy whose `time` is taken from `date`, with `date` dropped."""
        if self.date is None:
            return self.model_copy(update={"date": None})
        return self.model_copy(update={"time": datetime_to_epoch_ms(self.date), "date": None})


class Vessel(BaseModel):
    """Represents a vessel from the registry.

    `uuid` is assigned by the server on creation and is absent on drafts.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uuid: Optional[str] = None
    name: str
    width: Optional[float] = None
    length: Optional[float] = None
    draft: Optional[float] = None
    last_seen_position: Optional[LastSeenPosition] = Field(
        default=None, alias="lastSeenPosition"
    )

    def for_editing(self) -> Vessel:
        """Copy with the last seen `date` derived from the persisted `time`."""
        if self.last_seen_position is None:
            return self.model_copy()
        return self.model_copy(
            update={"last_seen_position": self.last_seen_position.with_derived_date()}
        )

    def for_saving(self) -> Vessel:
        """Copy with the last seen `time` taken from the edited `date`."""
        if self.last_seen_position is None:
            return self.model_copy()
        return self.model_copy(
            update={"last_seen_position": self.last_seen_position.with_canonical_time()}
        )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize for the REST backend (camelCase, no derived fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
