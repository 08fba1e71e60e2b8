import asyncio
import contextlib
import dataclasses
import logging
from typing import Callable, Iterable, Mapping, Optional, Tuple, Union

from catalog.models import Record
from utils.errors import NavigationLocked
from utils.selection import BulkSelector, SelectionStore, constants, parse_count, selection_banner
from .controller import PageState, PaginationController

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class TableRow:
    id: int
    cells: Mapping[str, Union[str, int]]
    checked: bool


@dataclasses.dataclass(frozen=True)
class TableView:
    """Everything a renderer needs to draw one frame of the table."""

    state: PageState
    rows: Tuple[TableRow, ...]
    checked_ids: frozenset
    loading: bool
    error: Optional[str]
    # paginator window
    first: int
    rows_per_page: int
    total_records: int
    current_page: Optional[int]
    total_pages: int
    # selection
    selected_count: int
    banner: Optional[str]
    navigation_locked: bool

    @property
    def headers(self):
        return [constants.COLUMN_HEADERS[f] for f in constants.DISPLAY_FIELDS]


class TableSession:
    """
    The surface a renderer talks to: it receives page-change, selection-change and row-count events, and is notified
    with a fresh :class:`TableView` whenever something it displays changes.

    The session owns one SelectionStore shared by the page-scoped checkboxes and the bulk selection, so selections
    survive page navigation.
    """

    def __init__(self, fetcher, on_render: Optional[Callable[[TableView], None]] = None):
        """
        :param fetcher: Anything with a ``fetch_page(page) -> Page`` coroutine.
        :param on_render: Called with the new view after every change.
        """
        self.store = SelectionStore()
        self.controller = PaginationController(fetcher)
        self.bulk = BulkSelector(fetcher, self.store)
        self.on_render = on_render
        self._bulk_cancel = None  # type: Optional[asyncio.Event]
        self._navigation_locks = 0
        self.controller.add_listener(lambda _: self.notify())

    # ==== events ====
    async def start(self) -> bool:
        """Loads the first page."""
        return await self.controller.start()

    async def change_page(self, page: int) -> bool:
        """
        Displays another page. The selection is kept.

        :raises NavigationLocked: if a bulk selection is running.
        :raises PageOutOfRange: if the page does not exist.
        """
        if self.navigation_locked:
            raise NavigationLocked()
        return await self.controller.request_page(page)

    def change_selection(self, checked: Iterable[Union[Record, int]]):
        """
        The checked rows of the displayed page changed. *checked* is the complete set of checked rows (records or
        ids) on the displayed page; rows on other pages keep their state.
        """
        checked_ids = {r.id if isinstance(r, Record) else r for r in checked}
        self.store.reconcile_page(self.controller.page_ids, checked_ids)
        self.notify()

    async def select_rows(self, count) -> int:
        """
        Selects the first *count* records of the collection. Any bulk selection already running is cancelled first.

        :param count: An int, or the text the user typed.
        :return: The number of records selected.
        :raises ValidationError: if *count* is not a positive integer. Nothing is fetched or selected.
        :raises FetchError: if a page could not be loaded. Records selected before then stay selected.
        :raises BulkSelectionCancelled: if another bulk selection replaced this one.
        """
        n = parse_count(count)
        self.cancel_bulk_selection()
        cancel = self._bulk_cancel = asyncio.Event()
        try:
            with self._lock_navigation():
                return await self.bulk.select_first_n(n, cancel=cancel)
        finally:
            if self._bulk_cancel is cancel:
                self._bulk_cancel = None
            self.notify()

    def cancel_bulk_selection(self):
        """Cancels the running bulk selection, if any. Records it already selected stay selected."""
        if self._bulk_cancel is not None:
            log.debug("Cancelling running bulk selection")
            self._bulk_cancel.set()

    def clear_selection(self):
        self.store.clear()
        self.notify()

    # ==== rendering ====
    @property
    def navigation_locked(self) -> bool:
        return self._navigation_locks > 0

    @contextlib.contextmanager
    def _lock_navigation(self):
        """Locks navigation while this context manager is active, refreshing the view on both sides."""
        self._navigation_locks += 1
        self.notify()
        try:
            yield
        finally:
            self._navigation_locks -= 1

    def render(self) -> TableView:
        controller = self.controller
        pagination = controller.pagination
        checked = frozenset(r.id for r in self.store.visible_selection(controller.records))
        rows = tuple(
            TableRow(
                id=record.id,
                cells={constants.COLUMN_HEADERS[f]: record.display(f) for f in constants.DISPLAY_FIELDS},
                checked=record.id in checked,
            )
            for record in controller.records
        )

        error = None
        if controller.state is PageState.ERROR:
            error = constants.ERROR_PAGE_LOAD.format(page=controller.requested_page, error=controller.error)

        return TableView(
            state=controller.state,
            rows=rows,
            checked_ids=checked,
            loading=controller.loading,
            error=error,
            first=pagination.offset if pagination else 0,
            rows_per_page=pagination.limit if pagination else constants.DEFAULT_PAGE_SIZE,
            total_records=pagination.total if pagination else 0,
            current_page=controller.current_page,
            total_pages=pagination.total_pages if pagination else 0,
            selected_count=len(self.store),
            banner=selection_banner(len(self.store)),
            navigation_locked=self.navigation_locked,
        )

    def notify(self):
        if self.on_render is None:
            return
        try:
            self.on_render(self.render())
        except Exception:
            log.exception("Render callback raised")
