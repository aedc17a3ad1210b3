"""Clause builders for the fuzzy regex/range search predicate.

Each builder only contributes a clause when the user actually populated the
field, so untouched form defaults never narrow the search.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models.form import VesselForm

Criteria = Dict[str, Any]

DEFAULT_RANGE_SPAN = 2.0


def add_prefix(criteria: Criteria, field: str, form: VesselForm) -> Criteria:
    """Match values starting with the form value, case-insensitively."""
    if form.is_populated(field):
        criteria[field] = {"$regex": f"^{form.get(field)}.*", "$options": "i"}
    return criteria


def add_regex(criteria: Criteria, field: str, form: VesselForm) -> Criteria:
    """Match values containing the form value, case-insensitively."""
    if form.is_populated(field):
        criteria[field] = {"$regex": f".*?{form.get(field)}.*", "$options": "i"}
    return criteria


def add_range(criteria: Criteria, field: str, span: float, form: VesselForm) -> Criteria:
    """Match values strictly within `span / 2` of the form value."""
    if form.is_populated(field):
        value = form.get(field)
        half = span / 2
        criteria["$and"] = [
            {field: {"$gt": value - half}},
            {field: {"$lt": value + half}},
        ]
    return criteria


def build_fuzzy_range_criteria(form: VesselForm, span: float = DEFAULT_RANGE_SPAN) -> Criteria:
    """Compose the disjunctive search predicate.

    A name prefix alone is enough to return a candidate. Otherwise a name
    substring together with proximity on one dimension (width, length or
    draft) is a separate reason to match.

    Args:
        form: Form snapshot with touched fields.
        span: Total width of the numeric window around each value.

    Returns:
        `{"$or": [prefix, name+width, name+length, name+draft]}`.
    """
    by_width = add_range(add_regex({}, "name", form), "width", span, form)
    by_length = add_range(add_regex({}, "name", form), "length", span, form)
    by_draft = add_range(add_regex({}, "name", form), "draft", span, form)
    by_prefix = add_prefix({}, "name", form)
    return {"$or": [by_prefix, by_width, by_length, by_draft]}


def matches_everything(criteria: Criteria) -> bool:
    """True when any disjunct is empty, since `{}` inside `$or` matches every record."""
    return any(not clause for clause in criteria.get("$or", [criteria]))
