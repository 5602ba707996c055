"""Primitives: exceptions, cancellation."""

from __future__ import annotations

from .cancellation import CancellationToken
from .exceptions import (
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    HandlerShapeMismatchError,
    InvalidRequestError,
    MediatorError,
    NotificationHandlerNotFoundError,
    NullResultError,
    RequestCancelledError,
    RequestTimeoutError,
    TypeContractViolationError,
    ValidationError,
)

__all__ = [
    "CancellationToken",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "HandlerShapeMismatchError",
    "InvalidRequestError",
    "MediatorError",
    "NotificationHandlerNotFoundError",
    "NullResultError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "TypeContractViolationError",
    "ValidationError",
]
