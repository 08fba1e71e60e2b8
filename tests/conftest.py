"""
Shared fixtures: an in-memory collection of 100 records served 12 per page (9 pages), and the selection components
wired to it.
"""

import logging

import pytest

from tests.mocks import MockCollection
from utils.selection import BulkSelector, SelectionStore

log = logging.getLogger(__name__)


@pytest.fixture
def collection():
    """100 records, 12 per page."""
    return MockCollection(total=100, limit=12)


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def selector(collection, store):
    return BulkSelector(collection, store)
