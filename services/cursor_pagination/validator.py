"""
Page parameter validation.

Implements the parameter rules of the JSON:API cursor pagination profile:
https://jsonapi.org/profiles/ethanresnick/cursor-pagination/

Checks run in a fixed priority order and stop at the first failure, so a
rejected request carries exactly one error.
"""

import re
from typing import Any, List, Mapping, Optional, Tuple

from services.cursor_pagination.logging_config import get_logger
from services.cursor_pagination.schemas import (
    ErrorLinks,
    ErrorSource,
    PageRequest,
    PaginationError,
    PaginationErrorKind,
)
from services.cursor_pagination.settings import get_settings

logger = get_logger(__name__)

PAGE_KEYS = ("size", "sort", "before", "after")

INVALID_PARAMETER_TITLE = "Invalid Parameter."
UNSUPPORTED_SORT_TITLE = "Unsupported Sort."
RANGE_PAGINATION_TITLE = "Range Pagination Not Supported."

_LEADING_INT = re.compile(r"\s*([+-]?\d+(?:_\d+)*)")
_FLAT_PAGE_KEY = re.compile(r"^page\[([^\]]+)\]$")


def parse_lenient_int(value: Any) -> int:
    """
    Parse the leading integer of a value, returning 0 when there is none.

    "10" -> 10, " 7 " -> 7, "12abc" -> 12, "3.9" -> 3, "abc" -> 0, None -> 0

    Single underscores between digits are separators, so "1_000" -> 1000
    while "1__0" -> 1.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1).replace("_", "")) if match else 0


def is_blank(value: Any) -> bool:
    """None, empty and whitespace-only strings are blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _is_cursor_type(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _display(value: Any) -> str:
    return "" if value is None else str(value)


def extract_page_params(query_params: Mapping[str, Any]) -> Optional[dict]:
    """
    Collect page parameters from request query parameters.

    Accepts flattened keys (``page[size]``), as found in Starlette's
    ``QueryParams``, as well as an already nested ``{"page": {...}}`` mapping.
    Returns None when the query carries no page parameters.
    """
    page: dict = {}
    nested = query_params.get("page")
    if isinstance(nested, Mapping):
        page.update(nested)

    for key in query_params.keys():
        match = _FLAT_PAGE_KEY.match(key)
        if match:
            page[match.group(1)] = query_params[key]

    return page or None


class ParameterValidator:
    """Turns raw page parameters into a PageRequest and a list of errors."""

    def __init__(self, profile_url: Optional[str] = None):
        """
        Args:
            profile_url: Base URI for profile error types; defaults to settings
        """
        if profile_url is None:
            profile_url = get_settings().pagination_profile_url
        if not profile_url.endswith("/"):
            profile_url += "/"
        self.profile_url = profile_url

    def _error_type(self, name: str) -> ErrorLinks:
        return ErrorLinks(type=[f"{self.profile_url}{name}"])

    def validate(
        self, raw_params: Optional[Mapping[str, Any]]
    ) -> Tuple[PageRequest, List[PaginationError]]:
        """
        Validate raw page parameters.

        Args:
            raw_params: Mapping with optional keys size, sort, before, after

        Returns:
            Tuple of (PageRequest, errors); the list is empty iff the request is valid
        """
        if not raw_params:
            return PageRequest(size=0), []

        raw_size = raw_params.get("size")
        size = parse_lenient_int(raw_size)

        if size < 1:
            error = PaginationError(
                kind=PaginationErrorKind.INVALID_PARAMETER,
                title=INVALID_PARAMETER_TITLE,
                detail=(
                    "page[size] is required and must be a positive integer; "
                    f"got {_display(raw_size)}"
                ),
                source=ErrorSource(parameter="page[size]"),
            )
            return self._reject(PageRequest(size=0), error)

        if "sort" in raw_params:
            error = PaginationError(
                kind=PaginationErrorKind.UNSUPPORTED_SORT,
                title=UNSUPPORTED_SORT_TITLE,
                detail=(
                    "page[sort] is not supported; "
                    f"got page[sort]={_display(raw_params['sort'])}"
                ),
                source=ErrorSource(parameter="page[sort]"),
                links=self._error_type("unsupported-sort"),
            )
            return self._reject(PageRequest(size=size), error)

        if "before" in raw_params and "after" in raw_params:
            error = PaginationError(
                kind=PaginationErrorKind.RANGE_PAGINATION_NOT_SUPPORTED,
                title=RANGE_PAGINATION_TITLE,
                detail=(
                    "Range pagination not supported; "
                    f"got page[before]={_display(raw_params['before'])} "
                    f"and page[after]={_display(raw_params['after'])}"
                ),
                links=self._error_type("range-pagination-not-supported"),
            )
            return self._reject(PageRequest(size=size), error)

        for boundary in ("before", "after"):
            if boundary not in raw_params:
                continue
            value = raw_params[boundary]
            accepted = value is None or _is_cursor_type(value)
            request = PageRequest(size=size, **({boundary: value} if accepted else {}))
            if not accepted or is_blank(value):
                error = PaginationError(
                    kind=PaginationErrorKind.INVALID_PARAMETER,
                    title=INVALID_PARAMETER_TITLE,
                    detail=f"page[{boundary}] is invalid",
                    source=ErrorSource(parameter=f"page[{boundary}]"),
                )
                return self._reject(request, error)
            return request, []

        return PageRequest(size=size), []

    def _reject(
        self, request: PageRequest, error: PaginationError
    ) -> Tuple[PageRequest, List[PaginationError]]:
        logger.info(
            "Rejected page parameters",
            error_kind=error.kind.value,
            detail=error.detail,
        )
        return request, [error]


def validate_page_params(
    raw_params: Optional[Mapping[str, Any]],
) -> Tuple[PageRequest, List[PaginationError]]:
    """Validate page parameters with the default profile settings."""
    return ParameterValidator().validate(raw_params)
