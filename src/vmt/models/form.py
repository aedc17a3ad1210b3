"""Search/create form snapshot with per-field dirty tracking."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Optional, Set

from .vessel import Vessel

FORM_FIELDS = ("name", "width", "length", "draft")
NUMERIC_FIELDS = ("width", "length", "draft")


def _has_value(value: Any) -> bool:
    """A value counts as filled in when it is non-empty and non-zero."""
    if value is None:
        return False
    if isinstance(value, str):
        return len(value) > 0
    return value != 0


class VesselForm:
    """Values typed into the vessel form plus which fields the user touched.

    Defaults are shown to the user but never count as entered, so query
    building does not guess values for untouched fields. The dirty flags are
    separate: `mark_pristine()` resets them and keeps what was entered.
    """

    def __init__(self, defaults: Optional[Dict[str, Any]] = None):
        """Initialize the form.

        Args:
            defaults: Initial field values (e.g. width/length/draft).
        """
        self.values: Dict[str, Any] = {field: None for field in FORM_FIELDS}
        for field, value in (defaults or {}).items():
            self.values[self._check_field(field)] = self._coerce(field, value)
        self._entered: Set[str] = set()
        self._dirty: Set[str] = set()

    @staticmethod
    def _check_field(field: str) -> str:
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {field}")
        return field

    @staticmethod
    def _coerce(field: str, value: Any) -> Any:
        if field in NUMERIC_FIELDS and isinstance(value, str):
            return float(value) if value.strip() else None
        return value

    def get(self, field: str) -> Any:
        return self.values[self._check_field(field)]

    def set(self, field: str, value: Any) -> None:
        """Record a value typed by the user and mark the field entered and dirty."""
        self.values[self._check_field(field)] = self._coerce(field, value)
        self._entered.add(field)
        self._dirty.add(field)

    def update(self, **values: Any) -> None:
        for field, value in values.items():
            self.set(field, value)

    def is_populated(self, field: str) -> bool:
        """Whether the user entered the field and left a value in it."""
        return self._check_field(field) in self._entered and _has_value(self.values[field])

    @property
    def populated_fields(self) -> FrozenSet[str]:
        return frozenset(field for field in FORM_FIELDS if self.is_populated(field))

    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty)

    def mark_pristine(self) -> None:
        """Reset dirty flags, keeping the current values."""
        self._dirty.clear()

    def validation_errors(self) -> List[str]:
        """Problems preventing the form from describing a new vessel."""
        errors = []
        name = self.values["name"]
        if not isinstance(name, str) or not name.strip():
            errors.append("name is required")
        for field in NUMERIC_FIELDS:
            value = self.values[field]
            if value is None or value <= 0:
                errors.append(f"{field} must be a positive number")
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()

    def to_vessel(self) -> Vessel:
        """Build a draft vessel (no identity yet) from the form values."""
        return Vessel(
            name=self.values["name"],
            width=self.values["width"],
            length=self.values["length"],
            draft=self.values["draft"],
        )
