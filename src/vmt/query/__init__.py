"""Query building for vessel searches."""

from .criteria import add_prefix, add_range, add_regex, build_fuzzy_range_criteria, matches_everything
from .strategies import (
    FlatEquality,
    FuzzyRangeOr,
    InvalidSearchError,
    SearchRequest,
    SearchStrategy,
    get_search_strategy,
)

__all__ = [
    "add_prefix",
    "add_range",
    "add_regex",
    "build_fuzzy_range_criteria",
    "matches_everything",
    "FlatEquality",
    "FuzzyRangeOr",
    "InvalidSearchError",
    "SearchRequest",
    "SearchStrategy",
    "get_search_strategy",
]
