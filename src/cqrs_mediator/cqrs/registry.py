"""HandlerRegistry — in-memory resolver with explicit registration,
auto-discovery and conflict detection."""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import HandlerRegistrationError
from ..utils import type_name
from .definition import DecoratorRegistration, Lifetime, Registration
from .discovery import discover_handlers, handler_signature
from .keys import ANY_RESPONSE, HandlerKey, HandlerKind
from .notification import Notification
from .request import Request

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import ModuleType

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Primary declarative store for request handlers, notification handlers
    and decorators.

    Implements :class:`~cqrs_mediator.ports.registry.IHandlerResolver`, the
    only interface the :class:`~cqrs_mediator.cqrs.sender.Sender` consumes.

    **Conflict detection:** registering a second handler for the same
    request type raises :class:`HandlerRegistrationError`. Multiple
    notification handlers per notification type are allowed.

    **Ordering:** notification handlers and decorators are returned in
    registration order; decorators are never sorted by priority.

    Parameters
    ----------
    handler_factory:
        Optional callable ``(handler_cls) -> handler_instance`` used to build
        handler and decorator classes (plug a DI container in here).
        Defaults to simple ``handler_cls()`` construction.
    """

    def __init__(
        self, *, handler_factory: Callable[[type[Any]], Any] | None = None
    ) -> None:
        self._handler_factory: Callable[[type[Any]], Any] = handler_factory or (
            lambda cls: cls()
        )
        self._handlers: dict[HandlerKey, Registration] = {}
        self._notification_handlers: dict[HandlerKey, list[Registration]] = {}
        self._decorators: list[DecoratorRegistration] = []

    # ── Registration ─────────────────────────────────────────────

    def register_handler(
        self,
        request_type: type[Any],
        handler: Any = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Callable[[], Any] | None = None,
    ) -> HandlerKey:
        """Register the single handler for *request_type*.

        *handler* is a handler class, a handler instance, or omitted when
        *factory* builds it. Re-registering the same handler is a no-op.
        """
        if not (inspect.isclass(request_type) and issubclass(request_type, Request)):
            msg = f"{request_type!r} is not a Request subclass"
            raise HandlerRegistrationError(msg)

        registration = _make_registration(handler, lifetime, factory)
        key = HandlerKey.for_request(request_type)
        if handler is not None:
            _check_handler(handler, key)

        existing = self._handlers.get(key)
        if existing is not None:
            if existing.identity is not registration.identity:
                msg = (
                    f"Duplicate handler for {type_name(request_type)}: "
                    f"{existing.name} already registered, "
                    f"cannot register {registration.name}"
                )
                raise HandlerRegistrationError(msg)
            return key

        self._handlers[key] = registration
        logger.debug("Registered %s -> %s", key, registration.name)
        return key

    def register_notification_handler(
        self,
        notification_type: type[Any],
        handler: Any = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Callable[[], Any] | None = None,
    ) -> HandlerKey:
        """Append a handler for *notification_type* (order is kept)."""
        if not (
            inspect.isclass(notification_type)
            and issubclass(notification_type, Notification)
        ):
            msg = f"{notification_type!r} is not a Notification subclass"
            raise HandlerRegistrationError(msg)

        registration = _make_registration(handler, lifetime, factory)
        key = HandlerKey.for_notification(notification_type)
        if handler is not None:
            _check_handler(handler, key)

        handlers = self._notification_handlers.setdefault(key, [])
        if any(r.identity is registration.identity for r in handlers):
            return key
        handlers.append(registration)
        logger.debug("Registered %s -> %s", key, registration.name)
        return key

    def register_decorator(
        self,
        decorator: Any = None,
        *,
        request_type: type[Any] | None = None,
        response_type: Any = ANY_RESPONSE,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Callable[[], Any] | None = None,
    ) -> None:
        """Register a decorator, open (all messages) or for *request_type*.

        *request_type* matches that class and its subclasses;
        *response_type* further restricts a closed registration to requests
        declaring exactly that response type.
        """
        if decorator is not None:
            _check_decorator(decorator)
        if request_type is not None and not inspect.isclass(request_type):
            msg = f"Decorator request_type must be a class, got {request_type!r}"
            raise HandlerRegistrationError(msg)

        registration = _make_registration(decorator, lifetime, factory)
        self._decorators.append(
            DecoratorRegistration(
                registration=registration,
                request_type=request_type,
                response_type=response_type,
            )
        )
        logger.debug(
            "Registered decorator %s for %s",
            registration.name,
            "all messages" if request_type is None else type_name(request_type),
        )

    def add(
        self,
        handler_cls: type[Any] | None = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> Any:
        """Decorator-style registration, inferring the handled type.

        Usage::

            @registry.add
            class GetIntQueryHandler(QueryHandler[GetIntQuery, int]): ...

            @registry.add(lifetime=Lifetime.SINGLETON)
            class AuditTrail(NotificationHandler[UserCreated]): ...
        """
        if handler_cls is None:
            # Called as @registry.add(lifetime=...)
            def wrapper(cls: type[Any]) -> type[Any]:
                self._register_inferred(cls, lifetime)
                return cls

            return wrapper

        # Called as @registry.add
        self._register_inferred(handler_cls, lifetime)
        return handler_cls

    def scan(self, target: ModuleType | str, *, recursive: bool = True) -> int:
        """Register every concrete handler class defined in *target*.

        *target* is a module or an importable dotted name; packages are
        walked recursively unless ``recursive=False``. Returns the number of
        handler classes found.
        """
        discovered = discover_handlers(target, recursive=recursive)
        for handler_cls, _ in discovered:
            self._register_inferred(handler_cls, Lifetime.TRANSIENT)
        logger.debug("Discovered %d handler(s) in %s", len(discovered), target)
        return len(discovered)

    def _register_inferred(self, handler_cls: type[Any], lifetime: Lifetime) -> None:
        signature = handler_signature(handler_cls)
        if signature is None:
            msg = (
                f"Cannot infer the handled type of {handler_cls.__name__}; "
                "subclass RequestHandler[...] / NotificationHandler[...] "
                "or register it explicitly"
            )
            raise HandlerRegistrationError(msg)
        if signature.kind is HandlerKind.NOTIFICATION:
            self.register_notification_handler(
                signature.message_type, handler_cls, lifetime=lifetime
            )
        else:
            self.register_handler(
                signature.message_type, handler_cls, lifetime=lifetime
            )

    # ── Lookup (IHandlerResolver) ────────────────────────────────

    def resolve_one(self, key: HandlerKey) -> Any | None:
        registration = self._handlers.get(key)
        if registration is None:
            return None
        return registration.build(self._handler_factory)

    def resolve_many(self, key: HandlerKey) -> list[Any]:
        return [
            registration.build(self._handler_factory)
            for registration in self._notification_handlers.get(key, [])
        ]

    def resolve_decorators(
        self, request_type: type[Any], response_type: Any
    ) -> list[Any]:
        return [
            entry.registration.build(self._handler_factory)
            for entry in self._decorators
            if entry.applies_to(request_type, response_type)
        ]

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, Any]:
        """Return a snapshot of all registrations (for debugging)."""
        return {
            "requests": {str(k): r.name for k, r in self._handlers.items()},
            "notifications": {
                str(k): [r.name for r in v]
                for k, v in self._notification_handlers.items()
            },
            "decorators": [d.registration.name for d in self._decorators],
        }

    # ── Cleanup ──────────────────────────────────────────────────

    def clear(self) -> None:
        """Clear all registrations (testing utility)."""
        self._handlers.clear()
        self._notification_handlers.clear()
        self._decorators.clear()


def _make_registration(
    target: Any, lifetime: Lifetime, factory: Callable[[], Any] | None
) -> Registration:
    if target is None and factory is None:
        msg = "Either a handler/decorator or a factory must be given"
        raise HandlerRegistrationError(msg)
    if target is not None and factory is not None:
        msg = "Pass either a handler/decorator or a factory, not both"
        raise HandlerRegistrationError(msg)
    if target is not None and not inspect.isclass(target):
        lifetime = Lifetime.SINGLETON
    return Registration(target=target, lifetime=lifetime, factory=factory)


def _check_handler(handler: Any, key: HandlerKey) -> None:
    """Enforce the handler contract at registration time."""
    handler_cls = handler if inspect.isclass(handler) else type(handler)
    if not callable(getattr(handler, "handle", None)):
        msg = f"{handler_cls.__name__} has no callable 'handle' method"
        raise HandlerRegistrationError(msg)

    signature = handler_signature(handler_cls)
    if signature is None:
        return
    if signature.kind is not key.kind:
        msg = (
            f"{handler_cls.__name__} is a {signature.kind.value} handler, "
            f"cannot register it as {key}"
        )
        raise HandlerRegistrationError(msg)
    if not issubclass(key.message_type, signature.message_type):
        msg = (
            f"{handler_cls.__name__} handles "
            f"{type_name(signature.message_type)}, "
            f"not {type_name(key.message_type)}"
        )
        raise HandlerRegistrationError(msg)
    if signature.response_declared and signature.response_type != key.response_type:
        msg = (
            f"{handler_cls.__name__} returns "
            f"{type_name(signature.response_type)}, but "
            f"{type_name(key.message_type)} expects {type_name(key.response_type)}"
        )
        raise HandlerRegistrationError(msg)


def _check_decorator(decorator: Any) -> None:
    if inspect.isclass(decorator):
        defines_call = any(
            "__call__" in vars(base)
            for base in decorator.__mro__
            if base is not object
        )
        if not defines_call:
            msg = f"Decorator class {decorator.__name__} does not define __call__"
            raise HandlerRegistrationError(msg)
    elif not callable(decorator):
        msg = f"Decorator {decorator!r} is not callable"
        raise HandlerRegistrationError(msg)


__all__ = ["HandlerRegistry"]
