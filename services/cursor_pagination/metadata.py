"""
Pagination metadata builder.

Builds the ``meta`` and ``links`` members of a JSON:API response for a page
produced by the cursor paginator.
"""

from typing import Any, Dict, Mapping, Optional

from services.cursor_pagination.query_string import merge_page_params, to_query
from services.cursor_pagination.schemas import PageResult
from services.cursor_pagination.validator import is_blank


class MetadataBuilder:
    """Builds the pagination envelope; pure and safe to share between requests."""

    def build(
        self,
        result: PageResult,
        base_url: str,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Build the ``meta``/``links`` envelope for a page.

        Args:
            result: Output of CursorPaginator.paginate
            base_url: Request URL without its query string
            query_params: Original query parameters, kept in the links

        Returns:
            {"meta": {...}, "links": {...}}, or {} when pagination is disabled
        """
        if not result.paginated:
            return {}

        query_params = query_params or {}
        has_prev = not is_blank(result.prev_cursor)
        has_next = not is_blank(result.next_cursor)

        cursor: Dict[str, Any] = {}
        if has_prev:
            cursor["before"] = result.prev_cursor
        if has_next:
            cursor["after"] = result.next_cursor

        links: Dict[str, str] = {}
        if has_prev:
            links["prev"] = self._link(
                base_url,
                query_params,
                {"before": result.prev_cursor, "size": result.size},
            )
        if has_next:
            links["next"] = self._link(
                base_url,
                query_params,
                {"after": result.next_cursor, "size": result.size},
            )

        return {
            "meta": {
                "page": {
                    "cursor": cursor,
                    "total": result.total_size,
                    "pages": result.total_pages,
                }
            },
            "links": links,
        }

    @staticmethod
    def _link(
        base_url: str, query_params: Mapping[str, Any], page: Dict[str, Any]
    ) -> str:
        query_string = to_query(merge_page_params(query_params, page))
        return f"{base_url}?{query_string}"
