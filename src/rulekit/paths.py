"""Dotted field path extraction over nested data.

A field path such as ``people.*.email`` is split on dots. The ``*`` segment
fans out over every key of a mapping or every index of a list, and each
extracted value is returned under its concrete path (``people.0.email``)
so errors can be attributed to the exact location that failed.
"""

from typing import Any, Mapping, Sequence

WILDCARD = "*"
ROOT_PATH = "0"


def split_path(field_path: str) -> list[str]:
    """Split a dotted field path into segments."""
    return field_path.split(".") if field_path else []


def _join(base: str | None, key: Any) -> str:
    return f"{base}.{key}" if base else str(key)


def _children(data: Any) -> list[tuple[Any, Any]]:
    if isinstance(data, Mapping):
        return list(data.items())
    if isinstance(data, (list, tuple)):
        return list(enumerate(data))
    return []


def _child(data: Any, segment: str) -> tuple[bool, Any]:
    """Look up a literal segment. Keys holding None count as absent."""
    if isinstance(data, Mapping):
        value = data.get(segment)
        return value is not None, value
    if isinstance(data, (list, tuple)) and segment.isdigit():
        index = int(segment)
        if index < len(data) and data[index] is not None:
            return True, data[index]
    return False, None


def extract_values(
    data: Any,
    path: Sequence[str] = (),
    base: str | None = None,
) -> dict[str, Any]:
    """Extract all values located at a field path.

    Args:
        data: The (possibly nested) data
        path: Path segments, e.g. ``["people", "*", "email"]``
        base: Dotted path of ``data`` within the root document

    Returns:
        Dict of resolved path -> value, in data order. Empty when no value
        exists for any concrete instantiation of the path.
    """
    if not path:
        return {base or ROOT_PATH: data}

    segment, rest = path[0], path[1:]

    if segment == WILDCARD:
        values: dict[str, Any] = {}
        for key, child in _children(data):
            values.update(extract_values(child, rest, _join(base, key)))
        return values

    found, child = _child(data, segment)
    if not found:
        return {}
    if not rest:
        return {_join(base, segment): child}
    return extract_values(child, rest, _join(base, segment))
