"""
Pagination schemas and data models.

This module defines the request, error and result models shared by the
validator, the paginator and the metadata builder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

CursorValue = Union[str, int]


class PageRequest(BaseModel):
    """Validated pagination intent for a single request."""

    model_config = ConfigDict(frozen=True)

    size: int = Field(0, ge=0, description="Page size; 0 disables pagination")
    before: Optional[CursorValue] = Field(
        None, description="Return records before this cursor"
    )
    after: Optional[CursorValue] = Field(
        None, description="Return records after this cursor"
    )

    @property
    def paginated(self) -> bool:
        """Whether the client asked for pagination at all."""
        return self.size > 0


class PaginationErrorKind(str, Enum):
    """Categories of page parameter errors."""

    INVALID_PARAMETER = "InvalidParameter"
    UNSUPPORTED_SORT = "UnsupportedSort"
    RANGE_PAGINATION_NOT_SUPPORTED = "RangePaginationNotSupported"


class ErrorSource(BaseModel):
    """Reference to the query parameter that caused an error."""

    parameter: str


class ErrorLinks(BaseModel):
    """Profile-defined error type URIs."""

    type: List[str] = Field(default_factory=list)


class PaginationError(BaseModel):
    """
    A JSON:API error object describing a rejected page parameter.

    The ``kind`` is kept for programmatic handling and is not part of the
    rendered error object.
    """

    model_config = ConfigDict(frozen=True)

    kind: PaginationErrorKind = Field(exclude=True)
    title: str
    detail: str
    source: Optional[ErrorSource] = None
    links: Optional[ErrorLinks] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render as a JSON:API error object, omitting absent members."""
        return self.model_dump(exclude_none=True)


@dataclass
class PageResult(Generic[T]):
    """Rows of one page window plus the figures needed for its metadata."""

    rows: List[T] = field(default_factory=list)
    size: int = 0
    total_size: Optional[int] = None
    total_pages: Optional[int] = None
    next_cursor: Optional[Any] = None
    prev_cursor: Optional[Any] = None

    @property
    def paginated(self) -> bool:
        return self.size > 0
