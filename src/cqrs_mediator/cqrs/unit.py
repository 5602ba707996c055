"""Unit — the result envelope of void requests and notifications."""

from __future__ import annotations

from typing import Any


class Unit:
    """Singleton value meaning "completed, nothing to return".

    The innermost continuation of a void pipeline yields :data:`unit`, so a
    decorator that forgets to return its continuation's result is detected
    as a null result instead of passing silently.
    """

    _instance: Unit | None = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "unit"

    def __reduce__(self) -> tuple[Any, ...]:
        return (Unit, ())


unit = Unit()
