"""
Dot-notation path resolution against nested JSON data.
"""

from collections.abc import Mapping, Sequence
from typing import Any


class _Missing:
    """Marker for "no value along the path" (JSON null resolves to None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment, MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if not (segment.isascii() and segment.isdigit()):
            return MISSING
        if len(segment) > 1 and segment.startswith("0"):
            return MISSING
        index = int(segment)
        return current[index] if index < len(current) else MISSING
    return MISSING


def resolve_path(data: Any, path: str) -> Any:
    """Resolve a dot-notation path against a data structure.

    Args:
        data: Any JSON-like value.
        path: Segments joined by ``.``; numeric segments index sequences.

    Returns:
        The value reached, which may be ``None``, ``False``, ``0`` or ``""``,
        or :data:`MISSING` if any segment along the path is absent.

    Examples:
        >>> resolve_path({"a": {"b": 1}}, "a.b")
        1
        >>> resolve_path({"x": [1, 2]}, "x.0")
        1
        >>> resolve_path({"a": {"b": 1}}, "a.c")
        MISSING
    """
    if data is None or data is MISSING or path == "":
        return MISSING

    current = data
    for segment in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        current = _step(current, segment)

    return current
