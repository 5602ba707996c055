"""Reusable pipeline decorators."""

from __future__ import annotations

from .logging import LoggingDecorator, kind_of
from .timeout import TimeoutDecorator
from .validation import ValidationDecorator

__all__ = [
    "LoggingDecorator",
    "TimeoutDecorator",
    "ValidationDecorator",
    "kind_of",
]
