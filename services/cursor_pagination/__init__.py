"""
Cursor pagination for JSON:API record queries.

Based on https://jsonapi.org/profiles/ethanresnick/cursor-pagination/

    page_request, errors = ParameterValidator().validate(page_params)
    if not errors:
        result = CursorPaginator().paginate(page_request, scope, "id")
        envelope = MetadataBuilder().build(result, base_url, query_params)
"""

from services.cursor_pagination.metadata import MetadataBuilder
from services.cursor_pagination.paginator import CursorPaginator
from services.cursor_pagination.query_string import group_query_params, to_query
from services.cursor_pagination.schemas import (
    ErrorLinks,
    ErrorSource,
    PageRequest,
    PageResult,
    PaginationError,
    PaginationErrorKind,
)
from services.cursor_pagination.scope import (
    InMemoryScope,
    QueryScope,
    coerce_to_type,
    read_field,
)
from services.cursor_pagination.validator import (
    ParameterValidator,
    extract_page_params,
    validate_page_params,
)

__all__ = [
    "CursorPaginator",
    "ErrorLinks",
    "ErrorSource",
    "InMemoryScope",
    "MetadataBuilder",
    "PageRequest",
    "PageResult",
    "PaginationError",
    "PaginationErrorKind",
    "ParameterValidator",
    "QueryScope",
    "coerce_to_type",
    "extract_page_params",
    "group_query_params",
    "read_field",
    "to_query",
    "validate_page_params",
]
