"""
Selection system for paginated record collections.

This package keeps a selection of record ids that spans every page of a remote collection while only one page is
loaded, and provides the bulk "select the first N records" walk.
"""

# Core selection components
from .store import SelectionStore
from .bulk import BulkSelector
from .selection_helpers import parse_count, reconcile_selection, selection_banner, visible_records


__all__ = (
    # Components
    "SelectionStore",
    "BulkSelector",
    # Helpers
    "reconcile_selection",
    "visible_records",
    "parse_count",
    "selection_banner",
)
