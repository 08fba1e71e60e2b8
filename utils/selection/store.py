import logging
from typing import Iterable, List

from .selection_helpers import reconcile_selection, visible_records

log = logging.getLogger(__name__)


class SelectionStore:
    """
    The session-wide set of selected record ids.

    Membership does not depend on whether a record is on the loaded page; only ids are stored, never records.
    Page navigation never touches the store.
    """

    def __init__(self, ids: Iterable[int] = ()):
        self._ids = set(ids)

    def __contains__(self, record_id):
        return record_id in self._ids

    def __iter__(self):
        return iter(self._ids)

    def __len__(self):
        return len(self._ids)

    def __repr__(self):
        return f"<SelectionStore size={len(self._ids)}>"

    def size(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> frozenset:
        return frozenset(self._ids)

    # ==== mutation ====
    def add(self, ids: Iterable[int]):
        self._ids.update(ids)

    def remove(self, ids: Iterable[int]):
        self._ids.difference_update(ids)

    def clear(self):
        self._ids.clear()

    def reconcile_page(self, page_ids: Iterable[int], selected_subset: Iterable[int]):
        """
        Replaces the selection state of one page: ids of *page_ids* end up selected iff they are in
        *selected_subset*. Ids on other pages are untouched.

        :raises InvalidArgument: if *selected_subset* is not a subset of *page_ids*. The store is unchanged.
        """
        before = len(self._ids)
        self._ids = set(reconcile_selection(self._ids, page_ids, selected_subset))
        log.debug(f"Reconciled page selection: {before} -> {len(self._ids)} selected")

    # ==== queries ====
    def visible_selection(self, page_records: Iterable) -> List:
        """Returns the records of *page_records* that are selected, in page order."""
        return visible_records(page_records, self._ids)
