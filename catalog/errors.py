import aiohttp

from utils.errors import ArtSelectException

__all__ = ("CatalogException", "ClientException", "NetworkError", "RequestTimeout", "ParseError")


class CatalogException(ArtSelectException):
    """Base exception for all catalog-related exceptions"""
    pass


class ClientException(CatalogException, aiohttp.ClientError):
    """Something happened in the catalog client"""
    pass


class NetworkError(ClientException):
    """The request failed in transport or the response is an error status code"""

    def __init__(self, msg, status=None):
        super().__init__(msg)
        self.status = status


class RequestTimeout(NetworkError, aiohttp.ServerTimeoutError):
    """We timed out connecting to the server"""
    pass


class ParseError(ClientException):
    """We cannot deserialize the response, or it does not have the shape we expect"""
    pass
