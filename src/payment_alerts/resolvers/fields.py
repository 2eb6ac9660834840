"""Dotted-path field lookup over loosely structured event payloads."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any


def get_path(record: Any, path: str) -> Any | None:
    """
    Walk a dotted key path through nested mappings.

    Numeric segments index into lists, so ``"lineItems.0.name"`` reads the
    first line item's name.

    Args:
        record: Nested mapping to read from
        path: Dotted key path

    Returns:
        The value at the path, or None if any step is missing
    """
    current = record
    for key in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not key.isdigit() or int(key) >= len(current):
                return None
            current = current[int(key)]
        else:
            return None

        if current is None:
            return None

    return current


def first_of(record: Any, paths: Iterable[str], fallback: Any = None) -> Any:
    """
    Return the first non-empty value found under any of the paths.

    Paths are tried in order, so callers list the most trusted schema
    shape first. None and empty strings count as empty.
    """
    for path in paths:
        value = get_path(record, path)
        if value is not None and value != "":
            return value
    return fallback


def is_number(value: Any) -> bool:
    """Check for a real numeric value (bools excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
