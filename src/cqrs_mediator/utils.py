"""Common utility functions and helpers."""

from __future__ import annotations

from typing import Any


def type_name(tp: Any) -> str:
    """Readable name for a class or a typing construct (``list[int]``)."""
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type) and not getattr(tp, "__args__", None):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
