"""
FastAPI integration for cursor pagination.

Usage:
    pagination = CursorPagination()

    @app.get("/records")
    async def list_records(
        request: Request,
        page_request: PageRequest = Depends(page_request_dependency),
    ):
        scope = SQLAlchemyScope(session, select(Record), Record)
        result = pagination.paginate(page_request, scope, "id")
        return pagination.response(result, request, status="Success")
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from fastapi import Request

from services.cursor_pagination.http_errors import PaginationParameterError
from services.cursor_pagination.metadata import MetadataBuilder
from services.cursor_pagination.paginator import CursorPaginator
from services.cursor_pagination.query_string import group_query_params
from services.cursor_pagination.schemas import PageRequest, PageResult, PaginationError
from services.cursor_pagination.scope import QueryScope
from services.cursor_pagination.validator import (
    ParameterValidator,
    extract_page_params,
)


def request_base_url(request: Request) -> str:
    """Request URL without its query string."""
    return str(request.url).split("?", 1)[0]


class CursorPagination:
    """Validator, paginator and metadata builder wired together for a route."""

    def __init__(
        self,
        validator: Optional[ParameterValidator] = None,
        paginator: Optional[CursorPaginator] = None,
        builder: Optional[MetadataBuilder] = None,
    ):
        self.validator = validator or ParameterValidator()
        self.paginator = paginator or CursorPaginator()
        self.builder = builder or MetadataBuilder()

    def validate(
        self, query_params: Mapping[str, Any]
    ) -> Tuple[PageRequest, List[PaginationError]]:
        return self.validator.validate(extract_page_params(query_params))

    def page_request(self, request: Request) -> PageRequest:
        """
        Validate the page parameters of a request.

        Raises:
            PaginationParameterError: If the parameters are rejected
        """
        page_request, errors = self.validate(request.query_params)
        if errors:
            raise PaginationParameterError(errors)
        return page_request

    def paginate(
        self,
        page_request: PageRequest,
        scope: QueryScope,
        cursor_field: str,
        result_field: Optional[str] = None,
    ) -> PageResult:
        return self.paginator.paginate(page_request, scope, cursor_field, result_field)

    def links_and_meta(self, result: PageResult, request: Request) -> Dict[str, Any]:
        query_params = group_query_params(request.query_params.multi_items())
        return self.builder.build(result, request_base_url(request), query_params)

    def response(
        self,
        result: PageResult,
        request: Request,
        results_key: str = "results",
        **body: Any,
    ) -> Dict[str, Any]:
        """
        Build a response body: caller fields, then meta/links, then the rows.
        """
        response = dict(body)
        response.update(self.links_and_meta(result, request))
        response[results_key] = result.rows
        return response


def page_request_dependency(request: Request) -> PageRequest:
    """FastAPI dependency returning the validated PageRequest of a request."""
    return CursorPagination().page_request(request)
