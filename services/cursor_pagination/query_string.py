"""
Query string serialization for pagination links.

Serializes nested parameter mappings the way Rails' ``to_query`` does:
nested keys become ``parent[child]``, lists become ``key[]``, every pair is
percent-encoded and the pairs are sorted, so the same parameters always
produce the same string. Tuples repeat the bare key (``tag=a&tag=b``), which
is how a query string that repeats a key without brackets round-trips.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus


def _param_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _pairs(value: Any, key: str) -> List[str]:
    if isinstance(value, Mapping):
        pairs: List[str] = []
        for child_key, child_value in value.items():
            pairs.extend(_pairs(child_value, f"{key}[{child_key}]"))
        return pairs
    if isinstance(value, tuple):
        pairs = []
        for item in value:
            pairs.extend(_pairs(item, key))
        return pairs
    if isinstance(value, list):
        item_key = key if key.endswith("[]") else f"{key}[]"
        if not value:
            return [f"{quote_plus(item_key)}="]
        pairs = []
        for item in value:
            pairs.extend(_pairs(item, item_key))
        return pairs
    return [f"{quote_plus(key)}={quote_plus(_param_value(value))}"]


def to_query(params: Mapping[str, Any], namespace: Optional[str] = None) -> str:
    """
    Serialize a (possibly nested) mapping into a query string.

    Args:
        params: Parameters to serialize
        namespace: Optional key to nest every parameter under

    Returns:
        Sorted, percent-encoded query string without the leading "?"

    Example:
        >>> to_query({"page": {"size": 3, "after": 5}, "filter": "a b"})
        'filter=a+b&page%5Bafter%5D=5&page%5Bsize%5D=3'
    """
    pairs: List[str] = []
    for key, value in params.items():
        full_key = f"{namespace}[{key}]" if namespace else str(key)
        pairs.extend(_pairs(value, full_key))
    return "&".join(sorted(pairs))


def merge_page_params(
    query_params: Mapping[str, Any], page: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Replace the ``page`` parameters of a query mapping.

    Drops both a nested ``page`` entry and flattened ``page[...]`` keys,
    keeping every other parameter.
    """
    merged = {
        key: value
        for key, value in query_params.items()
        if key != "page" and not str(key).startswith("page[")
    }
    merged["page"] = page
    return merged


def group_query_params(items: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Collect decoded ``(key, value)`` query pairs into a mapping for ``to_query``.

    Keys ending in ``[]`` always collect a list, and a bare key that appears
    more than once collects a tuple, so every value survives serialization.

    Example:
        >>> group_query_params([("tag[]", "a"), ("tag[]", "b"), ("q", "x")])
        {'tag[]': ['a', 'b'], 'q': 'x'}
    """
    grouped: Dict[str, Any] = {}
    for key, value in items:
        if key.endswith("[]"):
            grouped.setdefault(key, []).append(value)
        elif key not in grouped:
            grouped[key] = value
        elif isinstance(grouped[key], tuple):
            grouped[key] += (value,)
        else:
            grouped[key] = (grouped[key], value)
    return grouped
