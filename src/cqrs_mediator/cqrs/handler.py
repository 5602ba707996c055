"""Handler base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from ..primitives.cancellation import CancellationToken
    from .command import Command
    from .notification import Notification
    from .query import Query
    from .request import Request

TRequest = TypeVar("TRequest", bound="Request[Any]")
TCommand = TypeVar("TCommand", bound="Command[Any]")
TQuery = TypeVar("TQuery", bound="Query[Any]")
TNotification = TypeVar("TNotification", bound="Notification")
TResult = TypeVar("TResult")


class RequestHandler(ABC, Generic[TRequest, TResult]):
    """Base class for request handlers.

    The generic parameters name the handled request type and its result;
    :meth:`HandlerRegistry.add` and :meth:`HandlerRegistry.scan` read them
    to infer the registration key. Void handlers use ``None`` as result.

    Usage::

        class PingHandler(RequestHandler[Ping, None]):
            async def handle(
                self, request: Ping, cancellation_token: CancellationToken
            ) -> None:
                ...
    """

    @abstractmethod
    async def handle(
        self, request: TRequest, cancellation_token: CancellationToken
    ) -> TResult:
        """Process the request and return its result."""
        ...


class CommandHandler(RequestHandler[TCommand, TResult], Generic[TCommand, TResult]):
    """Base class for command handlers.

    Usage::

        class CreateOrderHandler(CommandHandler[CreateOrder, OrderId]):
            async def handle(
                self, command: CreateOrder, cancellation_token: CancellationToken
            ) -> OrderId:
                ...
    """

    @abstractmethod
    async def handle(
        self, command: TCommand, cancellation_token: CancellationToken
    ) -> TResult:
        """Execute the command."""
        ...


class QueryHandler(RequestHandler[TQuery, TResult], Generic[TQuery, TResult]):
    """Base class for query handlers.

    Usage::

        class GetIntQueryHandler(QueryHandler[GetIntQuery, int]):
            async def handle(
                self, query: GetIntQuery, cancellation_token: CancellationToken
            ) -> int:
                return 42
    """

    @abstractmethod
    async def handle(
        self, query: TQuery, cancellation_token: CancellationToken
    ) -> TResult:
        """Execute the query and return its result."""
        ...


class NotificationHandler(ABC, Generic[TNotification]):
    """Base class for notification handlers.

    Any number of handlers may be registered per notification type.

    Usage::

        class SendWelcomeEmail(NotificationHandler[UserRegistered]):
            async def handle(
                self,
                notification: UserRegistered,
                cancellation_token: CancellationToken,
            ) -> None:
                ...
    """

    @abstractmethod
    async def handle(
        self, notification: TNotification, cancellation_token: CancellationToken
    ) -> None:
        """React to the notification."""
        ...
