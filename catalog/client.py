import logging
from typing import Iterable, Optional

import pydantic

from utils.config import CATALOG_BASE_URL
from utils.pagination import check_page
from utils.selection.constants import CATALOG_COLLECTION_ROUTE, DEFAULT_PAGE_SIZE, RECORD_FIELDS
from .baseclient import BaseClient
from .errors import ParseError
from .models import Page

log = logging.getLogger(__name__)


class CollectionClient(BaseClient):
    """
    Fetches pages of a remote record collection. Each call issues exactly one request; nothing is cached or retried.
    """

    SERVICE_BASE = CATALOG_BASE_URL
    logger = log

    def __init__(
        self,
        http=None,
        route: str = CATALOG_COLLECTION_ROUTE,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
        fields: Optional[Iterable[str]] = RECORD_FIELDS,
        base_url: Optional[str] = None,
        **kwargs,
    ):
        """
        :param http: An aiohttp session to share. If None, the client creates and owns its own.
        :param route: The collection route, relative to the service base.
        :param limit: The page size to ask for. If None, no limit is sent and the remote's default page size is used.
        :param fields: The record fields to ask for. If None, the remote sends every field.
        :param base_url: Overrides the configured service base URL.
        """
        super().__init__(http, **kwargs)
        if base_url is not None:
            self.SERVICE_BASE = base_url.rstrip("/")
        self.route = route
        self.limit = limit
        self.fields = tuple(fields) if fields is not None else None

    async def fetch_page(self, page: int) -> Page:
        """
        Gets one page of the collection.

        GET /artworks?page={page}

        :param int page: The 1-based page number.
        :rtype: Page
        :raises InvalidArgument: if the page number is not a positive integer (no request is made).
        :raises NetworkError: if the request fails or the remote returns a non-success status.
        :raises ParseError: if the body does not have the page shape.
        """
        check_page(page)
        params = {"page": page}
        if self.limit is not None:
            params["limit"] = self.limit
        if self.fields:
            params["fields"] = ",".join(self.fields)

        data = await self.get(self.route, params=params)
        try:
            result = Page.from_json(data)
        except pydantic.ValidationError as e:
            log.warning(f"Bad catalog response for page {page}:\n{e}")
            raise ParseError(f"The catalog returned a malformed page: {e.error_count()} error(s)") from e
        log.debug(f"Page {page}: {len(result.records)} records, {result.pagination!r}")
        return result
