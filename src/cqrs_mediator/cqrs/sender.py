"""Sender — resolves handlers by runtime type and runs the decorator chain."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from ..ports.sender import ISender
from ..primitives.cancellation import CancellationToken
from ..primitives.exceptions import (
    HandlerNotFoundError,
    HandlerShapeMismatchError,
    InvalidRequestError,
    NotificationHandlerNotFoundError,
    NullResultError,
    TypeContractViolationError,
)
from .contracts import matches_response_type
from .keys import HandlerKey
from .notification import Notification
from .options import EmptyNotificationPolicy, PublishStrategy, SenderOptions
from .pipeline import build_pipeline
from .request import Request
from .unit import Unit, unit

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.registry import IHandlerResolver

logger = logging.getLogger(__name__)

TResult = TypeVar("TResult")


class Sender(ISender):
    """Routes requests and notifications through decorators to their handlers.

    The sender holds no per-call state: handlers and decorators are resolved
    from *resolver* on every call, and nothing it receives is cached.

    Parameters
    ----------
    resolver:
        Any :class:`~cqrs_mediator.ports.registry.IHandlerResolver`, usually a
        :class:`~cqrs_mediator.cqrs.registry.HandlerRegistry`.
    options:
        Optional :class:`~cqrs_mediator.cqrs.options.SenderOptions`.
    """

    def __init__(
        self,
        resolver: IHandlerResolver,
        *,
        options: SenderOptions | None = None,
    ) -> None:
        self._resolver = resolver
        self._options = options or SenderOptions()

    @property
    def options(self) -> SenderOptions:
        return self._options

    # ── Public API ───────────────────────────────────────────────

    async def send(
        self,
        request: Request[TResult],
        cancellation_token: CancellationToken | None = None,
    ) -> TResult:
        """Dispatch *request* to its single handler.

        Returns the handler's result, or ``None`` for void requests.
        Exceptions raised by the handler or a decorator reach the caller
        unchanged.
        """
        if request is None:
            raise InvalidRequestError("Cannot send None")
        if not isinstance(request, Request):
            msg = f"send() expects a Request, got {type(request).__name__}"
            raise InvalidRequestError(msg)

        token = cancellation_token or CancellationToken()
        key = HandlerKey.for_request(type(request))
        handler = self._resolver.resolve_one(key)
        if handler is None:
            raise HandlerNotFoundError(key.message_type, key.response_type)

        logger.debug("Sending %s to %s", key, type(handler).__name__)
        result = await self._invoke(handler, request, key, token)
        if key.is_void:
            return None  # type: ignore[return-value]
        return result  # type: ignore[no-any-return]

    async def notify(
        self,
        notification: Notification,
        cancellation_token: CancellationToken | None = None,
    ) -> None:
        """Deliver *notification* to every registered handler.

        Each handler runs through its own decorator chain. Without handlers
        this is a no-op unless the empty-notification policy says otherwise.
        """
        if notification is None:
            raise InvalidRequestError("Cannot notify None")
        if not isinstance(notification, Notification):
            msg = f"notify() expects a Notification, got {type(notification).__name__}"
            raise InvalidRequestError(msg)

        token = cancellation_token or CancellationToken()
        key = HandlerKey.for_notification(type(notification))
        handlers = self._resolver.resolve_many(key)
        if not handlers:
            policy = self._options.empty_notification_policy
            if policy is EmptyNotificationPolicy.RAISE:
                raise NotificationHandlerNotFoundError(key.message_type)
            logger.debug("No handlers for %s, nothing to do", key)
            return

        logger.debug("Publishing %s to %d handler(s)", key, len(handlers))
        if self._options.publish_strategy is PublishStrategy.CONCURRENT:
            outcomes = await asyncio.gather(
                *(self._invoke(h, notification, key, token) for h in handlers),
                return_exceptions=True,
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
            return

        for handler in handlers:
            await self._invoke(handler, notification, key, token)

    # ── Internals ────────────────────────────────────────────────

    async def _invoke(
        self,
        handler: Any,
        message: Any,
        key: HandlerKey,
        token: CancellationToken,
    ) -> Any:
        """Run one handler inside its decorator chain and check the outcome."""
        handle = _get_entry_point(handler, message, token)

        async def _innermost() -> Any:
            result = handle(message, token)
            if inspect.isawaitable(result):
                result = await result
            return unit if key.is_void else result

        decorators = self._resolver.resolve_decorators(
            key.message_type, key.response_type
        )
        pipeline = build_pipeline(decorators, message, _innermost, token)
        result = await pipeline()

        if result is None:
            raise NullResultError(type(handler), key.message_type)
        expected: Any = Unit if key.is_void else key.response_type
        if not matches_response_type(result, expected):
            raise TypeContractViolationError(key.message_type, expected, result)
        return result


def _get_entry_point(
    handler: Any, message: Any, token: CancellationToken
) -> Callable[..., Any]:
    """Return ``handler.handle`` once it is known to accept (message, token)."""
    handle = getattr(handler, "handle", None)
    if handle is None:
        raise HandlerShapeMismatchError(
            type(handler), type(message), "no 'handle' attribute"
        )
    if not callable(handle):
        raise HandlerShapeMismatchError(
            type(handler), type(message), "'handle' is not callable"
        )
    try:
        signature = inspect.signature(handle)
    except ValueError:
        # No introspectable signature (some builtins); the call decides.
        return handle
    try:
        signature.bind(message, token)
    except TypeError as exc:
        raise HandlerShapeMismatchError(type(handler), type(message), str(exc)) from exc
    return handle
