"""
Helper utilities for the selection system.

These are pure functions: they never mutate their arguments, so they can be tested without a store or a session.
"""

import logging
from typing import AbstractSet, Any, Iterable, List, Optional

from utils.errors import InvalidArgument, ValidationError
from . import constants

log = logging.getLogger(__name__)


def reconcile_selection(
    current: AbstractSet[int], page_ids: Iterable[int], selected_subset: Iterable[int]
) -> frozenset:
    """
    Merge a page-scoped selection into the global selection.

    Every id of the page is removed from the current selection, then the ids checked on that page are added back.
    Ids that are not on the page are left as they were.

    Args:
        current: The global selection before the change
        page_ids: Ids of every record on the page
        selected_subset: Ids checked on the page after the change; must be a subset of page_ids

    Returns:
        The new global selection

    Raises:
        InvalidArgument: If selected_subset contains ids that are not on the page
    """
    page_ids = frozenset(page_ids)
    selected_subset = frozenset(selected_subset)
    stray = selected_subset - page_ids
    if stray:
        raise InvalidArgument(f"Ids {sorted(stray)} are not on the current page.")
    return (frozenset(current) - page_ids) | selected_subset


def visible_records(records: Iterable[Any], selected: AbstractSet[int]) -> List[Any]:
    """Return the records whose id is selected, in their original order."""
    return [r for r in records if r.id in selected]


def parse_count(value) -> int:
    """
    Parse a bulk selection count.

    Args:
        value: An int, or the text the user typed

    Returns:
        The count, a positive integer

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError()
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            log.debug(f"Invalid selection count received: {value!r}")
            raise ValidationError()
    if not isinstance(value, int) or value <= 0:
        log.debug(f"Invalid selection count received: {value!r}")
        raise ValidationError()
    return value


def selection_banner(count: int) -> Optional[str]:
    """The "N rows selected" banner, or None when nothing is selected."""
    if count <= 0:
        return None
    if count == 1:
        return constants.BANNER_SELECTED_SINGULAR.format(count=count)
    return constants.BANNER_SELECTED_PLURAL.format(count=count)
