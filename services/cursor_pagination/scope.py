"""
Query scope abstraction for cursor pagination.

A scope is the filterable, orderable, limitable record set a page window is
cut from. Builder methods return a new scope and never change the receiver,
so a scope can be counted before the cursor filters are applied.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from uuid import UUID

ASC = "asc"
DESC = "desc"


def read_field(row: Any, name: str) -> Any:
    """Read a named field off a record, by attribute or by mapping key."""
    if isinstance(row, Mapping):
        return row[name]
    return getattr(row, name)


class QueryScope(ABC):
    """Abstract ordered, filterable collection consumed by the paginator."""

    @abstractmethod
    def count(self) -> int:
        """Number of records matching the current filters, ignoring any limit."""
        pass

    @abstractmethod
    def filter_greater_than(self, field: str, value: Any) -> "QueryScope":
        pass

    @abstractmethod
    def filter_less_than(self, field: str, value: Any) -> "QueryScope":
        pass

    @abstractmethod
    def order_by(self, field: str, direction: str = ASC) -> "QueryScope":
        """
        Order the scope by a single field.

        Args:
            field: Field name to order by
            direction: "asc" or "desc"
        """
        pass

    @abstractmethod
    def limit(self, n: int) -> "QueryScope":
        pass

    @abstractmethod
    def materialize(self) -> List[Any]:
        """Execute the scope and return its records in order."""
        pass


def coerce_to_type(value: Any, python_type: type) -> Any:
    """
    Convert a cursor value to the Python type of the field it is compared with.

    Cursors travel through the query string as text, so a cursor built from a
    datetime, Decimal or integer field comes back as its ``str()`` form.
    Values that cannot be converted are returned unchanged.
    """
    if value is None or isinstance(value, python_type) or python_type is bool:
        return value
    try:
        if issubclass(python_type, date):
            return python_type.fromisoformat(str(value).replace("Z", "+00:00"))
        if python_type is Decimal:
            return Decimal(str(value))
        if python_type is UUID:
            return UUID(str(value))
        if python_type in (int, float, str):
            return python_type(value)
    except (TypeError, ValueError, ArithmeticError):
        return value
    return value


def coerce_like(value: Any, sample: Any) -> Any:
    """Convert a cursor value to the type of a record value it is compared with."""
    if sample is None:
        return value
    return coerce_to_type(value, type(sample))


class InMemoryScope(QueryScope):
    """
    List-backed query scope.

    Useful for tests and for paginating small, already loaded collections.
    Filters, ordering and limit are recorded and applied on materialize,
    in that order, like a SQL query would.
    """

    def __init__(
        self,
        records: Iterable[Any],
        filters: Tuple[Tuple[str, str, Any], ...] = (),
        ordering: Optional[Tuple[str, str]] = None,
        limit_count: Optional[int] = None,
    ):
        self.records = list(records)
        self.filters = filters
        self.ordering = ordering
        self.limit_count = limit_count

    def _copy(self, **changes: Any) -> "InMemoryScope":
        state = {
            "filters": self.filters,
            "ordering": self.ordering,
            "limit_count": self.limit_count,
        }
        state.update(changes)
        return InMemoryScope(self.records, **state)

    def _filtered(self) -> List[Any]:
        rows = self.records
        for field, op, value in self.filters:
            rows = [row for row in rows if self._matches(row, field, op, value)]
        return rows

    @staticmethod
    def _matches(row: Any, field: str, op: str, value: Any) -> bool:
        current = read_field(row, field)
        target = coerce_like(value, current)
        if op == ">":
            return current > target
        return current < target

    def count(self) -> int:
        return len(self._filtered())

    def filter_greater_than(self, field: str, value: Any) -> "InMemoryScope":
        return self._copy(filters=self.filters + ((field, ">", value),))

    def filter_less_than(self, field: str, value: Any) -> "InMemoryScope":
        return self._copy(filters=self.filters + ((field, "<", value),))

    def order_by(self, field: str, direction: str = ASC) -> "InMemoryScope":
        if direction not in (ASC, DESC):
            raise ValueError(f"Unknown sort direction: {direction}")
        return self._copy(ordering=(field, direction))

    def limit(self, n: int) -> "InMemoryScope":
        return self._copy(limit_count=n)

    def materialize(self) -> List[Any]:
        rows = self._filtered()
        if self.ordering:
            field, direction = self.ordering
            rows = sorted(
                rows,
                key=lambda row: read_field(row, field),
                reverse=direction == DESC,
            )
        if self.limit_count is not None:
            rows = rows[: self.limit_count]
        return list(rows)
