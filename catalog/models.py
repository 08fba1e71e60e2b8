from typing import List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from utils.selection.constants import DISPLAY_MISSING


# ==== pydantic helpers ====
class ApiBaseModel(BaseModel):
    """A base pydantic model for catalog payloads. Unknown keys sent by the remote are dropped."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_dict(cls, d):
        return cls.model_validate(d)

    def to_dict(self, *args, **kwargs):
        return self.model_dump(*args, **kwargs)


class Record(ApiBaseModel):
    id: int
    title: Optional[str] = None
    place_of_origin: Optional[str] = None
    artist_display: Optional[str] = None
    inscriptions: Optional[str] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None

    def display(self, field: str) -> Union[str, int]:
        """Returns the value of a display field, or the missing-value sentinel if it is absent."""
        value = getattr(self, field)
        if value is None or value == "":
            return DISPLAY_MISSING
        return value

    # records are the same record iff they share an id; display fields never participate
    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


class PaginationInfo(ApiBaseModel):
    total: int
    limit: int
    offset: int
    total_pages: int
    current_page: int

    @model_validator(mode="after")
    def check_page_window(self) -> "PaginationInfo":
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")
        if self.total < 0 or self.total_pages < 0:
            raise ValueError("total and total_pages must not be negative")
        if self.total_pages > 0 and not 1 <= self.current_page <= self.total_pages:
            raise ValueError(f"current_page {self.current_page} outside of 1..{self.total_pages}")
        if self.offset != (self.current_page - 1) * self.limit:
            raise ValueError(
                f"offset {self.offset} does not match page {self.current_page} with limit {self.limit}"
            )
        return self

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class PageResponse(ApiBaseModel):
    """The body of one collection page: ``{data: Record[], pagination: PaginationInfo}``."""

    data: List[Record]
    pagination: PaginationInfo


class Page(NamedTuple):
    records: List[Record]
    pagination: PaginationInfo

    @classmethod
    def from_json(cls, data):
        """
        Parses a page body.

        :raises pydantic.ValidationError: if the body does not match the page schema.
        """
        body = PageResponse.from_dict(data)
        return cls(list(body.data), body.pagination)

    @property
    def ids(self):
        return [r.id for r in self.records]


__all__ = ("ApiBaseModel", "Record", "PaginationInfo", "PageResponse", "Page")
