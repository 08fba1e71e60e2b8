import enum
import logging
from typing import Callable, List, Optional

from catalog.errors import NetworkError, ParseError
from catalog.models import PaginationInfo, Record
from utils.pagination import check_page
from utils.selection import constants

log = logging.getLogger(__name__)


class PageState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"

    def __str__(self):
        return self.value


class PaginationController:
    """
    Tracks which page of the collection is displayed and loads pages on request.

    Only the displayed page's records are held; loading a page replaces the previous page's records and pagination.
    If several requests overlap, only the most recently issued one may change the displayed page: every request gets
    a generation number, and a response whose generation is no longer the latest is discarded.
    """

    def __init__(self, fetcher):
        """
        :param fetcher: Anything with a ``fetch_page(page) -> Page`` coroutine.
        """
        self.fetcher = fetcher
        self.state = PageState.IDLE
        self.records = []  # type: List[Record]
        self.pagination = None  # type: Optional[PaginationInfo]
        self.error = None  # type: Optional[BaseException]
        self.requested_page = None  # type: Optional[int]
        self._generation = 0
        self._listeners = []

    # ==== properties ====
    @property
    def loading(self) -> bool:
        return self.state is PageState.LOADING

    @property
    def current_page(self) -> Optional[int]:
        if self.pagination is None:
            return None
        return self.pagination.current_page

    @property
    def total_pages(self) -> Optional[int]:
        if self.pagination is None:
            return None
        return self.pagination.total_pages

    @property
    def page_ids(self) -> List[int]:
        return [r.id for r in self.records]

    # ==== listeners ====
    def add_listener(self, callback: Callable[["PaginationController"], None]):
        """
        Registers a callable that is called with this controller after every state transition.
        Registering the same callable twice does nothing.
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        """Deregisters a listener. If the listener is not registered, does nothing."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _transition(self, state: PageState):
        log.debug(f"Page state {self.state} -> {state} (generation {self._generation})")
        self.state = state
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                log.exception(f"Page state listener {listener!r} raised")

    # ==== navigation ====
    async def start(self) -> bool:
        """Loads the first page."""
        return await self.request_page(constants.FIRST_PAGE)

    async def reload(self) -> bool:
        """Loads the most recently requested page again, e.g. after a failed load."""
        return await self.request_page(self.requested_page or constants.FIRST_PAGE)

    async def request_page(self, page: int) -> bool:
        """
        Loads a page and displays it.

        Load failures do not raise: the controller moves to ``PageState.ERROR``, clears its records and keeps the
        error in ``self.error``.

        :param int page: The 1-based page number.
        :return: Whether this request's response was committed. False if a later request superseded it.
        :raises PageOutOfRange: if the page is not in 1..total_pages. No request is made and the state is unchanged.

        Any other exception, including cancellation of the calling task, is re-raised after the controller moves to
        ``PageState.ERROR`` (if this is still the latest request).
        """
        check_page(page, self.total_pages)

        self._generation += 1
        generation = self._generation
        self.requested_page = page
        self._transition(PageState.LOADING)

        try:
            result = await self.fetcher.fetch_page(page)
        except (NetworkError, ParseError) as e:
            if generation != self._generation:
                log.debug(f"Discarding stale failure for page {page} (generation {generation}): {e}")
                return False
            log.warning(f"Could not load page {page}: {e}")
            self._fail(e)
            return True
        except BaseException as e:
            # cancelled or unexpected: never leave the latest request loading, but let the error through
            if generation == self._generation:
                log.warning(f"Loading page {page} was interrupted: {e!r}")
                self._fail(e)
            raise

        if generation != self._generation:
            log.debug(f"Discarding stale response for page {page} (generation {generation})")
            return False
        self.records = list(result.records)
        self.pagination = result.pagination
        self.error = None
        self._transition(PageState.LOADED)
        return True

    def _fail(self, error: BaseException):
        self.records = []
        self.error = error
        self._transition(PageState.ERROR)
