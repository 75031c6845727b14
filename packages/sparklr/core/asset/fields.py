"""Dotted field-path access for editors.

Paths name attributes and list indices separated by dots, e.g.
``"emitters.0.scale.range.min"``. Reads walk the live objects; writes go
through a dumped copy and re-validate, so a write can never leave a model
in a state pydantic would reject.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


class FieldPathError(LookupError):
    """A field path does not resolve against the object."""

    def __init__(self, path: str, segment: str, reason: str) -> None:
        self.path = path
        self.segment = segment
        super().__init__(f"Invalid field path {path!r} at {segment!r}: {reason}")


def split_path(path: str) -> list[str]:
    segments = path.split(".")
    if not path or any(not s for s in segments):
        raise FieldPathError(path, path, "empty segment")
    return segments


def _step(node: Any, segment: str, path: str) -> Any:
    if isinstance(node, BaseModel):
        if segment not in type(node).model_fields:
            raise FieldPathError(path, segment, f"{type(node).__name__} has no such field")
        return getattr(node, segment)
    if isinstance(node, dict):
        if segment not in node:
            raise FieldPathError(path, segment, "no such key")
        return node[segment]
    if isinstance(node, (list, tuple)):
        return node[_index(node, segment, path)]
    raise FieldPathError(path, segment, f"cannot descend into {type(node).__name__}")


def _index(node: list[Any] | tuple[Any, ...], segment: str, path: str) -> int:
    try:
        index = int(segment)
    except ValueError:
        raise FieldPathError(path, segment, "expected a list index") from None
    if not 0 <= index < len(node):
        raise FieldPathError(path, segment, f"index out of range (len {len(node)})")
    return index


def get_field(obj: Any, path: str) -> Any:
    """Read the value at a dotted path.

    Example:
        >>> get_field(asset, "emitters.0.time.lifetime")
        1.0
    """
    node = obj
    for segment in split_path(path):
        node = _step(node, segment, path)
    return node


def set_field(model: M, path: str, value: Any) -> M:
    """Return a validated copy of ``model`` with the value at ``path`` replaced.

    Args:
        model: Root model.
        path: Dotted path to the field to replace.
        value: New value, in any form pydantic accepts for the field.

    Returns:
        A new instance of ``type(model)``; ``model`` is not modified.

    Raises:
        FieldPathError: If the path does not resolve.
        pydantic.ValidationError: If the new value is invalid for the field.
    """
    segments = split_path(path)
    # Resolve against the live model first so errors name real fields.
    get_field(model, path)

    data = model.model_dump()
    node: Any = data
    for segment in segments[:-1]:
        node = _step(node, segment, path)
        if isinstance(node, tuple):
            raise FieldPathError(path, segment, "tuples are replaced as a whole")

    last = segments[-1]
    if isinstance(node, list):
        node[_index(node, last, path)] = value
    elif isinstance(node, dict):
        node[last] = value
    else:
        raise FieldPathError(path, last, "tuples are replaced as a whole")
    return type(model).model_validate(data)
