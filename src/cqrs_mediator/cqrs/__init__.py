"""CQRS primitives: requests, handlers, registry, sender, pipeline."""

from __future__ import annotations

from .command import BaseCommand, Command
from .definition import Lifetime
from .discovery import discover_handlers, handler_signature
from .handler import CommandHandler, NotificationHandler, QueryHandler, RequestHandler
from .keys import ANY_RESPONSE, HandlerKey, HandlerKind
from .notification import Notification
from .options import EmptyNotificationPolicy, PublishStrategy, SenderOptions
from .pipeline import Continuation, build_pipeline
from .query import BaseQuery, Query
from .registry import HandlerRegistry
from .request import BaseRequest, Request, response_type_of
from .sender import Sender
from .unit import Unit, unit

__all__ = [
    "ANY_RESPONSE",
    "BaseCommand",
    "BaseQuery",
    "BaseRequest",
    "Command",
    "CommandHandler",
    "Continuation",
    "EmptyNotificationPolicy",
    "HandlerKey",
    "HandlerKind",
    "HandlerRegistry",
    "Lifetime",
    "Notification",
    "NotificationHandler",
    "PublishStrategy",
    "Query",
    "QueryHandler",
    "Request",
    "RequestHandler",
    "Sender",
    "SenderOptions",
    "Unit",
    "build_pipeline",
    "discover_handlers",
    "handler_signature",
    "response_type_of",
    "unit",
]
