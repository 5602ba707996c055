"""cqrs-mediator — in-process mediator for commands, queries and notifications.

Requests are routed by their concrete runtime type to a registered handler,
through an ordered chain of decorators.
"""

from __future__ import annotations

from .configuration import MediatorConfiguration, create_sender

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import (
    ANY_RESPONSE,
    BaseCommand,
    BaseQuery,
    BaseRequest,
    Command,
    CommandHandler,
    EmptyNotificationPolicy,
    HandlerKey,
    HandlerRegistry,
    Lifetime,
    Notification,
    NotificationHandler,
    PublishStrategy,
    Query,
    QueryHandler,
    Request,
    RequestHandler,
    Sender,
    SenderOptions,
    Unit,
    build_pipeline,
    unit,
)

# ── Decorators ───────────────────────────────────────────────────
from .decorators import (
    LoggingDecorator,
    TimeoutDecorator,
    ValidationDecorator,
    kind_of,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IHandlerDecorator, IHandlerResolver, ISender, IValidator

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    CancellationToken,
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

# ── Validation ───────────────────────────────────────────────────
from .validation import CompositeValidator, PydanticValidator, ValidationResult

__all__ = [
    "ANY_RESPONSE",
    "BaseCommand",
    "BaseQuery",
    "BaseRequest",
    "CancellationToken",
    "Command",
    "CommandHandler",
    "CompositeValidator",
    "EmptyNotificationPolicy",
    "HandlerError",
    "HandlerKey",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "HandlerRegistry",
    "HandlerShapeMismatchError",
    "IHandlerDecorator",
    "IHandlerResolver",
    "ISender",
    "IValidator",
    "InvalidRequestError",
    "Lifetime",
    "LoggingDecorator",
    "MediatorConfiguration",
    "MediatorError",
    "Notification",
    "NotificationHandler",
    "NotificationHandlerNotFoundError",
    "NullResultError",
    "PublishStrategy",
    "PydanticValidator",
    "Query",
    "QueryHandler",
    "Request",
    "RequestCancelledError",
    "RequestHandler",
    "RequestTimeoutError",
    "Sender",
    "SenderOptions",
    "TimeoutDecorator",
    "TypeContractViolationError",
    "Unit",
    "ValidationDecorator",
    "ValidationError",
    "ValidationResult",
    "build_pipeline",
    "create_sender",
    "kind_of",
    "unit",
]
