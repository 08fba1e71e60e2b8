class ArtSelectException(Exception):
    """A base exception class."""

    def __init__(self, msg):
        super().__init__(msg)


class InvalidArgument(ArtSelectException):
    """Raised when an argument is invalid."""
    pass


class ValidationError(InvalidArgument):
    """Raised when a bulk selection count is not a positive integer."""

    def __init__(self, msg=None):
        super().__init__(msg or "Please enter a valid number")


class PageOutOfRange(InvalidArgument):
    """Raised when a page outside of the collection's page range is requested."""

    def __init__(self, page, total_pages=None):
        if total_pages:
            msg = f"Page {page!r} is out of range (1-{total_pages})."
        else:
            msg = f"Page {page!r} is not a valid page number."
        super().__init__(msg)
        self.page = page
        self.total_pages = total_pages


class SelectionException(ArtSelectException):
    """A base exception for selection exceptions to stem from."""
    pass


class FetchError(SelectionException):
    """
    Raised when a page fetch fails partway through a bulk selection.
    Ids selected before the failure stay selected; *selected* is the authoritative count.
    """

    def __init__(self, page, selected, msg=None):
        super().__init__(msg or f"Could not load page {page} while selecting rows ({selected} selected).")
        self.page = page
        self.selected = selected


class BulkSelectionCancelled(SelectionException):
    """Raised when a bulk selection is cancelled before it finishes."""

    def __init__(self, selected):
        super().__init__(f"Row selection cancelled ({selected} selected).")
        self.selected = selected


class NavigationLocked(SelectionException):
    """Raised when the user tries to change page while a bulk selection is running."""

    def __init__(self, msg="Please wait for the current row selection to finish."):
        super().__init__(msg)
