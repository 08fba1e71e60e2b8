"""
Pagination utilities for offset-addressed collections.

Remote pages are 1-based; ``get_page_choices`` works on 0-based page indices over an in-memory sequence.
"""

from typing import Any, List, Optional, Sequence

from utils.errors import PageOutOfRange


def get_page_choices(choices: Sequence[Any], page: int, per_page: int = 10) -> List[Any]:
    """Get choices for a specific 0-based page without creating all pages."""
    if page < 0:
        return []
    start_idx = page * per_page
    end_idx = start_idx + per_page
    return list(choices[start_idx:end_idx])


def get_total_pages(total: int, per_page: int = 10) -> int:
    """Calculate total pages needed for *total* items."""
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    return (total + per_page - 1) // per_page


def get_page_offset(page: int, per_page: int) -> int:
    """The offset of the first item of a 1-based page."""
    return (page - 1) * per_page


def is_page_number(page) -> bool:
    # bool is an int subclass, but True is not page 1
    return isinstance(page, int) and not isinstance(page, bool)


def check_page(page, total_pages: Optional[int] = None) -> int:
    """
    Ensures *page* is a valid 1-based page number. If *total_pages* is known and non-zero, the page must also
    be at most *total_pages*.

    :raises PageOutOfRange: if the page is not valid.
    """
    if not is_page_number(page) or page < 1:
        raise PageOutOfRange(page, total_pages)
    if total_pages and page > total_pages:
        raise PageOutOfRange(page, total_pages)
    return page
