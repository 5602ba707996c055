"""Dispatch and registration exceptions for cqrs-mediator."""

from __future__ import annotations

from typing import Any

from ..utils import type_name


class MediatorError(Exception):
    """Root exception for the entire cqrs-mediator package."""


class InvalidRequestError(MediatorError, ValueError):
    """Raised when ``None`` or an object of the wrong kind is dispatched.

    This is a contract violation by the caller, not a routing failure, and is
    raised before any handler lookup happens.
    """


class HandlerError(MediatorError):
    """Base class for all handler related errors (registration, lookup, shape)."""


class HandlerRegistrationError(HandlerError):
    """Raised when a handler or decorator registration is rejected.

    Usage: HandlerRegistry raises this when trying to register a second
    handler for a request type, or a handler that cannot satisfy the
    handler contract.
    """


class HandlerNotFoundError(HandlerError):
    """Raised when no handler is registered for a request."""

    def __init__(self, request_type: type[Any], response_type: Any = None) -> None:
        self.request_type = request_type
        self.response_type = response_type
        msg = f"No handler registered for request '{type_name(request_type)}'"
        if response_type is not None:
            msg += f" and response '{type_name(response_type)}'"
        super().__init__(msg + ".")


class NotificationHandlerNotFoundError(HandlerError):
    """Raised for a notification without handlers when the policy demands one."""

    def __init__(self, notification_type: type[Any]) -> None:
        self.notification_type = notification_type
        super().__init__(
            f"No handlers registered for notification '{type_name(notification_type)}'."
        )


class HandlerShapeMismatchError(HandlerError, TypeError):
    """Raised when a resolved handler has no usable ``handle`` entry point.

    Indicates a misregistration: the handler was stored under a key whose
    contract it does not satisfy.
    """

    def __init__(
        self,
        handler_type: type[Any],
        message_type: type[Any],
        reason: str | None = None,
    ) -> None:
        self.handler_type = handler_type
        self.message_type = message_type
        self.reason = reason
        msg = (
            f"Handler '{type_name(handler_type)}' has no entry point "
            f"handle({type_name(message_type)}, CancellationToken)"
        )
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class NullResultError(MediatorError):
    """Raised when the handler/decorator chain produced ``None``."""

    def __init__(self, handler_type: type[Any], message_type: type[Any]) -> None:
        self.handler_type = handler_type
        self.message_type = message_type
        super().__init__(
            f"Invocation of '{type_name(handler_type)}.handle' for "
            f"'{type_name(message_type)}' returned None."
        )


class TypeContractViolationError(MediatorError, TypeError):
    """Raised when the produced value does not match the declared response type."""

    def __init__(self, message_type: type[Any], expected: Any, actual: Any) -> None:
        self.message_type = message_type
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Pipeline for '{type_name(message_type)}' must produce "
            f"'{type_name(expected)}', but produced '{type_name(type(actual))}'."
        )


class ValidationError(MediatorError):
    """Raised when request validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class RequestCancelledError(MediatorError):
    """Raised by ``CancellationToken.raise_if_cancelled`` once cancellation
    was requested."""


class RequestTimeoutError(MediatorError):
    """Raised by ``TimeoutDecorator`` when the pipeline exceeds its deadline."""

    def __init__(self, message_type: type[Any], timeout: float) -> None:
        self.message_type = message_type
        self.timeout = timeout
        super().__init__(
            f"Handling '{type_name(message_type)}' did not complete within {timeout}s"
        )
