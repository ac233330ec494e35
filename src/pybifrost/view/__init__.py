"""Read-path helpers: entity filtering/sorting and list virtualization."""

from pybifrost.view.model import EntityTab, derive_view, entity_sort_key, matches_query, tab_counters
from pybifrost.view.virtualizer import VirtualItem, Virtualizer

__all__ = [
    "EntityTab",
    "VirtualItem",
    "Virtualizer",
    "derive_view",
    "entity_sort_key",
    "matches_query",
    "tab_counters",
]
