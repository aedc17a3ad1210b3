"""Search strategies turning a form snapshot into a registry query.

Two query designs are supported and selected by configuration:

- fuzzy_range_or: regex/range disjunction sent as a GET query parameter
- flat_equality: flat field object sent as a POST body
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Literal, Optional

from ..models.form import FORM_FIELDS, VesselForm
from .criteria import DEFAULT_RANGE_SPAN, build_fuzzy_range_criteria, matches_everything

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class InvalidSearchError(ValueError):
    """The form cannot produce a query worth sending."""

    pass


@dataclass(frozen=True)
class SearchRequest:
    """A query ready to be dispatched by the vessels client."""

    strategy: str
    method: Literal["GET", "POST"]
    query: Dict[str, Any]


class SearchStrategy(ABC):
    """Builds a `SearchRequest` from the form."""

    name: str = ""

    @abstractmethod
    def build(self, form: VesselForm) -> SearchRequest:
        """Build the request, raising InvalidSearchError if nothing can be searched."""


class FuzzyRangeOr(SearchStrategy):
    """Name prefix, or name substring plus proximity on one dimension."""

    name = "fuzzy_range_or"

    def __init__(self, span: float = DEFAULT_RANGE_SPAN):
        self.span = span

    def build(self, form: VesselForm) -> SearchRequest:
        criteria = build_fuzzy_range_criteria(form, self.span)
        if matches_everything(criteria):
            raise InvalidSearchError("Enter a vessel name to search")
        return SearchRequest(strategy=self.name, method="GET", query=criteria)


class FlatEquality(SearchStrategy):
    """Field-equality object, only sent once the name is long enough."""

    name = "flat_equality"

    def __init__(self, min_name_length: int = 3):
        self.min_name_length = min_name_length

    def build(self, form: VesselForm) -> SearchRequest:
        query = {field: form.get(field) for field in FORM_FIELDS if form.get(field) is not None}
        name = query.get("name")
        if not name or len(str(name)) < self.min_name_length:
            raise InvalidSearchError(
                f"Name must have at least {self.min_name_length} characters to search"
            )
        return SearchRequest(strategy=self.name, method="POST", query=query)


def get_search_strategy(name: Optional[str] = None, settings: Optional[Settings] = None) -> SearchStrategy:
    """Create the configured search strategy.

    Args:
        name: Strategy name override (default: settings.search_strategy).
        settings: Settings to read from (default: cached settings).

    Returns:
        A ready-to-use strategy instance.
    """
    if settings is None:
        from ..config import get_settings

        settings = get_settings()

    name = name or settings.search_strategy
    logger.debug("Using %s search strategy", name)
    if name == FuzzyRangeOr.name:
        return FuzzyRangeOr(span=settings.range_span)
    if name == FlatEquality.name:
        return FlatEquality(min_name_length=settings.min_search_name_length)
    raise ValueError(f"Unknown search strategy: {name}")
