# utils/json_path.py
"""
Path-based access into parsed JSON documents (dicts / lists / scalars).
A path is a sequence of object keys and list indexes.
"""
from typing import Any, Sequence, Union

PathPart = Union[str, int]

_MISSING = object()


def get_path(document: Any, path: Sequence[PathPart], default: Any = None) -> Any:
    """Walk `path` through `document`; return `default` if any hop is missing."""
    node = document
    for part in path:
        if isinstance(node, dict) and isinstance(part, str):
            node = node.get(part, _MISSING)
        elif isinstance(node, list) and isinstance(part, int) and -len(node) <= part < len(node):
            node = node[part]
        else:
            return default
        if node is _MISSING:
            return default
    return node


def set_path(document: Any, path: Sequence[PathPart], value: Any) -> bool:
    """
    Set `value` at `path` in place. The parent node must already exist;
    returns False (document untouched) when it does not.
    """
    if not path:
        return False
    parent = get_path(document, path[:-1], default=_MISSING)
    last = path[-1]
    if isinstance(parent, dict) and isinstance(last, str):
        parent[last] = value
        return True
    if isinstance(parent, list) and isinstance(last, int) and -len(parent) <= last < len(parent):
        parent[last] = value
        return True
    return False


def get_str(document: Any, path: Sequence[PathPart]) -> str:
    """String value at `path`, or "" when missing / null. Non-strings are str()'d."""
    value = get_path(document, path)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
