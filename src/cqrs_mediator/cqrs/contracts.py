"""Runtime checks of pipeline results against declared response types."""

from __future__ import annotations

import types
import typing
from typing import Annotated, Any, Literal, Union, get_args, get_origin


def matches_response_type(value: Any, expected: Any) -> bool:
    """Return whether *value* satisfies the declared response type *expected*.

    ``isinstance`` semantics; parameterized generics are checked by origin
    only (``list[int]`` accepts any list). Types that cannot be checked at
    runtime (``TypeVar``, ``NewType``, non-runtime protocols) are accepted.
    """
    if expected is Any or isinstance(expected, typing.TypeVar):
        return True
    if expected is None or expected is type(None):
        return value is None

    origin = get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return any(matches_response_type(value, arg) for arg in get_args(expected))
    if origin is Literal:
        return value in get_args(expected)
    if origin is Annotated:
        return matches_response_type(value, get_args(expected)[0])
    if origin is not None:
        expected = origin

    if not isinstance(expected, type):
        return True
    if getattr(expected, "_is_protocol", False) and not getattr(
        expected, "_is_runtime_protocol", False
    ):
        return True
    return isinstance(value, expected)
