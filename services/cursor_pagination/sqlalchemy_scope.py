"""
SQLAlchemy implementation of the query scope.

Wraps a ``Select`` statement and the session that executes it. Cursor
filters become WHERE conditions, ordering replaces any ordering already on
the statement so the cursor field always drives the window.
"""

from typing import Any, List, Optional

from sqlalchemy import Select, column, func, select
from sqlalchemy.orm import Session

from services.cursor_pagination.scope import ASC, DESC, QueryScope, coerce_to_type


def _coerce_for_column(col: Any, value: Any) -> Any:
    """Convert a cursor value to the Python type of the column it filters."""
    try:
        python_type = col.type.python_type
    except (AttributeError, NotImplementedError):
        return value
    return coerce_to_type(value, python_type)


class SQLAlchemyScope(QueryScope):
    """
    Query scope over a SQLAlchemy ``Select``.

    Example:
        scope = SQLAlchemyScope(session, select(Record).where(Record.owner == me), Record)
        result = CursorPaginator().paginate(page_request, scope, "id")

    Args:
        session: Session used to run count and materialize
        statement: Base statement holding the candidate records
        model: Mapped class fields are resolved against; when omitted, fields
            are treated as plain column names and rows come back as mappings
    """

    def __init__(
        self,
        session: Session,
        statement: Select[Any],
        model: Optional[type] = None,
    ):
        self.session = session
        self.statement = statement
        self.model = model

    def _copy(self, statement: Select[Any]) -> "SQLAlchemyScope":
        return SQLAlchemyScope(self.session, statement, self.model)

    def _column(self, field: str) -> Any:
        if self.model is not None:
            return getattr(self.model, field)
        return column(field)

    def count(self) -> int:
        count_stmt = select(func.count()).select_from(
            self.statement.order_by(None).subquery()
        )
        return self.session.execute(count_stmt).scalar_one()

    def filter_greater_than(self, field: str, value: Any) -> "SQLAlchemyScope":
        col = self._column(field)
        return self._copy(self.statement.where(col > _coerce_for_column(col, value)))

    def filter_less_than(self, field: str, value: Any) -> "SQLAlchemyScope":
        col = self._column(field)
        return self._copy(self.statement.where(col < _coerce_for_column(col, value)))

    def order_by(self, field: str, direction: str = ASC) -> "SQLAlchemyScope":
        col = self._column(field)
        if direction == DESC:
            ordering = col.desc()
        elif direction == ASC:
            ordering = col.asc()
        else:
            raise ValueError(f"Unknown sort direction: {direction}")
        return self._copy(self.statement.order_by(None).order_by(ordering))

    def limit(self, n: int) -> "SQLAlchemyScope":
        return self._copy(self.statement.limit(n))

    def materialize(self) -> List[Any]:
        if self.model is not None:
            return list(self.session.scalars(self.statement).all())
        return list(self.session.execute(self.statement).mappings().all())
