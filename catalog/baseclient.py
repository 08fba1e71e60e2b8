import abc
import asyncio
import logging
from typing import Optional

import aiohttp

from utils.selection.constants import REQUEST_TIMEOUT
from .errors import NetworkError, ParseError, RequestTimeout


class BaseClient(abc.ABC):
    SERVICE_BASE: str = ...
    logger: logging.Logger = ...

    def __init__(self, http: Optional[aiohttp.ClientSession] = None, timeout: float = REQUEST_TIMEOUT):
        self._owns_http = http is None
        self.http = http
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _session(self) -> aiohttp.ClientSession:
        # created lazily so that the session binds to the running loop
        if self.http is None:
            self.http = aiohttp.ClientSession(timeout=self.timeout)
        return self.http

    async def close(self):
        if self._owns_http and self.http is not None:
            await self.http.close()
            self.http = None

    async def request(self, method: str, route: str, **kwargs):
        """Performs a request against the service and returns the deserialized JSON body."""
        url = f"{self.SERVICE_BASE}{route}"
        try:
            async with self._session().request(method, url, timeout=self.timeout, **kwargs) as resp:
                self.logger.debug(f"{method} {url} {kwargs.get('params')} returned {resp.status}")
                if not 199 < resp.status < 300:
                    data = await resp.text(errors="replace")
                    self.logger.warning(f"{method} {url} returned {resp.status} {resp.reason}\n{data}")
                    raise NetworkError(f"The catalog returned an error: {resp.status}: {resp.reason}", resp.status)
                try:
                    data = await resp.json()
                except (aiohttp.ContentTypeError, ValueError, TypeError):
                    data = await resp.text(errors="replace")
                    self.logger.warning(f"{method} {url} response could not be deserialized:\n{data}")
                    raise ParseError(f"Could not deserialize catalog response: {data[:200]}")
        except (aiohttp.ServerTimeoutError, asyncio.TimeoutError):
            self.logger.warning(f"Request timeout: {method} {url}")
            raise RequestTimeout("Timed out connecting to the catalog. Please try again in a few minutes.")
        except (NetworkError, ParseError):
            raise
        except aiohttp.ClientError as e:
            self.logger.warning(f"{method} {url} failed: {e!r}")
            raise NetworkError(f"Could not connect to the catalog: {e}") from e
        return data

    async def get(self, route: str, **kwargs):
        return await self.request("GET", route, **kwargs)
