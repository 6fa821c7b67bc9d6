"""
Cursor paginator.

Cuts one page window out of a query scope and works out the figures the
response metadata needs: total size, total pages and the cursors of the
first and last row of the window.
"""

from typing import Any, List, Optional

from services.cursor_pagination.logging_config import get_logger
from services.cursor_pagination.schemas import PageRequest, PageResult
from services.cursor_pagination.scope import ASC, DESC, QueryScope, read_field

logger = get_logger(__name__)


def total_pages_for(total_size: int, size: int) -> int:
    """Number of pages of ``size`` records needed to hold ``total_size``."""
    pages, remainder = divmod(total_size, size)
    return pages + 1 if remainder else pages


class CursorPaginator:
    """
    Applies a validated PageRequest to a QueryScope.

    The paginator holds no per-request state; one instance can serve any
    number of requests.
    """

    def paginate(
        self,
        request: PageRequest,
        scope: QueryScope,
        cursor_field: str,
        result_field: Optional[str] = None,
    ) -> PageResult:
        """
        Fetch the page window described by ``request``.

        Args:
            request: Validated page request
            scope: Query scope holding the full candidate record set
            cursor_field: Field used for filtering and ordering in the query
            result_field: Field read off returned rows to derive cursors
                (defaults to cursor_field)

        Returns:
            PageResult with rows in ascending cursor order
        """
        result_field = result_field or cursor_field

        if not request.paginated:
            return PageResult(rows=scope.materialize(), size=0)

        size = request.size
        total_size = scope.count()
        total_pages = total_pages_for(total_size, size)

        if request.after is not None:
            scope = scope.filter_greater_than(cursor_field, request.after)
        if request.before is not None:
            scope = scope.filter_less_than(cursor_field, request.before)
        scope = scope.limit(size)

        rows: List[Any]
        if request.before is not None and request.after is None:
            # nearest records below the boundary, presented ascending
            rows = scope.order_by(cursor_field, DESC).materialize()
            rows = sorted(rows, key=lambda row: read_field(row, result_field))
        else:
            rows = scope.order_by(cursor_field, ASC).materialize()

        next_cursor = read_field(rows[-1], result_field) if rows else None
        prev_cursor = read_field(rows[0], result_field) if rows else None

        logger.debug(
            "Paginated scope",
            size=size,
            before=request.before,
            after=request.after,
            total_size=total_size,
            total_pages=total_pages,
            returned=len(rows),
        )

        return PageResult(
            rows=rows,
            size=size,
            total_size=total_size,
            total_pages=total_pages,
            next_cursor=next_cursor,
            prev_cursor=prev_cursor,
        )
