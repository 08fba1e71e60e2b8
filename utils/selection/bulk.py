"""
Bulk selection: selects the first N records of the whole collection by walking pages in order.
"""

import asyncio
import logging
from typing import Optional

from catalog.errors import CatalogException
from utils.errors import BulkSelectionCancelled, FetchError, ValidationError
from . import constants
from .store import SelectionStore

log = logging.getLogger(__name__)


class BulkSelector:
    """
    Walks the collection from the first page, independently of the page a user is looking at, adding ids to a
    SelectionStore until the requested count is reached or the collection runs out.

    :param fetcher: Anything with a ``fetch_page(page) -> Page`` coroutine, usually a
                    :class:`catalog.client.CollectionClient`.
    :param store: The store to add ids to.
    """

    def __init__(self, fetcher, store: SelectionStore):
        self.fetcher = fetcher
        self.store = store
        self._running = 0

    @property
    def running(self) -> bool:
        return self._running > 0

    async def select_first_n(self, n, cancel: Optional[asyncio.Event] = None) -> int:
        """
        Selects the first *n* records of the collection, in collection order.

        Pages are fetched one at a time starting at page 1, and each page's ids are committed to the store before
        the next page is requested. Ids that were already selected count towards *n*.

        :param int n: How many records to select.
        :param cancel: If set while the walk is running, the walk stops before its next fetch.
        :return: How many records were selected. Less than *n* if the collection has fewer records.
        :raises ValidationError: if *n* is not a positive integer. Raised before any request is made.
        :raises FetchError: if a page fetch fails. Ids committed before the failure stay selected.
        :raises BulkSelectionCancelled: if *cancel* was set. Ids committed before then stay selected.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            log.debug(f"Invalid bulk selection count: {n!r}")
            raise ValidationError()
        remaining = n
        selected = 0
        page = constants.FIRST_PAGE

        self._running += 1
        try:
            while True:
                if cancel is not None and cancel.is_set():
                    log.info(f"Bulk selection of {n} cancelled before page {page} ({selected} selected)")
                    raise BulkSelectionCancelled(selected)

                try:
                    result = await self.fetcher.fetch_page(page)
                except CatalogException as e:
                    log.warning(f"Bulk selection of {n} failed on page {page} ({selected} selected): {e}")
                    raise FetchError(page, selected) from e
                if cancel is not None and cancel.is_set():
                    log.info(f"Bulk selection of {n} cancelled on page {page} ({selected} selected)")
                    raise BulkSelectionCancelled(selected)

                ids = result.ids[:remaining]
                self.store.add(ids)
                selected += len(ids)
                remaining -= len(ids)

                if remaining == 0 or not result.records or not result.pagination.has_next:
                    break
                page += 1
        finally:
            self._running -= 1

        log.info(f"Bulk selection of {n} selected {selected} records over {page} page(s)")
        return selected
