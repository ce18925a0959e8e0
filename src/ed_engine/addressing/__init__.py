"""Address resolution and search state."""

from .resolver import ResolvedRange, resolve_address, resolve_range, search
from .search import SearchState

__all__ = [
    "ResolvedRange",
    "SearchState",
    "resolve_address",
    "resolve_range",
    "search",
]
