"""
Constants for the selection utilities.

This module contains all constants used across the catalog client, the table session and the selection
system to ensure consistency and maintainability.
"""

# Remote collection
CATALOG_COLLECTION_ROUTE = "/artworks"
DEFAULT_PAGE_SIZE = 12
FIRST_PAGE = 1

# Timeout Values
REQUEST_TIMEOUT = 30.0

# Fields we display; also requested from the remote so it only sends what we render
RECORD_FIELDS = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)
DISPLAY_FIELDS = RECORD_FIELDS[1:]

# Column headers, in display order
COLUMN_HEADERS = {
    "title": "Title",
    "place_of_origin": "Place of Origin",
    "artist_display": "Artist",
    "inscriptions": "Inscriptions",
    "date_start": "Date Start",
    "date_end": "Date End",
}

# Rendered in place of a missing display field
DISPLAY_MISSING = "N/A"

# Banner Text
BANNER_SELECTED_SINGULAR = "{count} row selected"
BANNER_SELECTED_PLURAL = "{count} rows selected"

# Error Messages
ERROR_INVALID_COUNT = "Please enter a valid number"
ERROR_PAGE_LOAD = "Could not load page {page}: {error}"
