"""JSON helpers shared by the asset loader, the config loader and bake manifests.

Non-finite floats are written as ``Infinity`` / ``NaN`` (the json module's
extension to the standard), which ``json.loads`` and the asset loader read
back unchanged.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
from pydantic import BaseModel

logger = logging.getLogger(__name__)


def _encode_extra(obj: Any) -> Any:
    """``default`` hook for ``json.dumps``.

    Handles:
    - pydantic models -> their JSON-mode dump
    - numpy arrays -> nested lists, numpy scalars -> Python scalars
    - enums -> their value
    - pathlib.Path -> POSIX string

    Raises:
        TypeError: For anything else, as ``json.dumps`` would.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return obj.as_posix()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps_json(obj: Any, indent: int | None = 2) -> str:
    """Serialize to JSON text, keeping non-ASCII characters as-is."""
    return json.dumps(obj, indent=indent, ensure_ascii=False, default=_encode_extra)


def write_json(path: str | Path, obj: Any) -> None:
    """Write ``obj`` as indented JSON, creating parent directories.

    Args:
        path: Output file path
        obj: Data to write; see ``_encode_extra`` for the extra types accepted
    """
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(dumps_json(obj) + "\n", encoding="utf-8")
    logger.debug("Wrote %s", path_obj)


def read_json(path: str | Path) -> dict[str, Any]:
    """Read a JSON file whose top level is an object.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top level is not an object.
    """
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data
