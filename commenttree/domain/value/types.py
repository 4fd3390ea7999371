"""Domain value objects for the comment tree.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field

from commenttree.domain.value.common import ValueObject

DEFAULT_PAGE_SIZE = 50


class CommentStatus(str, Enum):
    """Lifecycle status of a comment.

    Transitions are one-way: ACTIVE -> DELETED.
    """

    ACTIVE = "active"
    DELETED = "deleted"


class SortOrder(str, Enum):
    """Direction of the created_at ordering."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: "str | SortOrder | None") -> "SortOrder":
        """Normalize client input; anything unrecognized means ascending."""
        if isinstance(value, SortOrder):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ASC


class Page(ValueObject):
    """A 1-based page window over an ordered result set."""

    number: int = Field(default=1, ge=1)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)

    @classmethod
    def of(cls, page: int | None, page_size: int | None) -> "Page":
        """Build a page, replacing out-of-range values with defaults."""
        number = page if page is not None and page >= 1 else 1
        size = page_size if page_size is not None and page_size > 0 else DEFAULT_PAGE_SIZE
        return cls(number=number, size=size)

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size
