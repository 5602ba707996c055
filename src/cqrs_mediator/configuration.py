"""MediatorConfiguration — one-call setup of a registry and a sender."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .cqrs.definition import Lifetime
from .cqrs.keys import ANY_RESPONSE
from .cqrs.options import SenderOptions
from .cqrs.registry import HandlerRegistry
from .cqrs.sender import Sender

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import ModuleType


class MediatorConfiguration:
    """Builder collecting handlers, decorators and options for a sender.

    Every ``add_*`` method returns the configuration, so calls chain.

    **Example**
        ```python
        sender = create_sender(
            lambda cfg: cfg.add_handlers_from("app.handlers")
            .add_decorator(LoggingDecorator())
            .add_decorator(
                ValidationDecorator(PydanticValidator()),
                request_type=BaseCommand,
            )
        )
        ```
    """

    def __init__(
        self,
        registry: HandlerRegistry | None = None,
        *,
        options: SenderOptions | None = None,
    ) -> None:
        self.registry = registry or HandlerRegistry()
        self.options = options or SenderOptions()

    def add_handler(
        self,
        request_type: type[Any],
        handler: Any = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Callable[[], Any] | None = None,
    ) -> MediatorConfiguration:
        self.registry.register_handler(
            request_type, handler, lifetime=lifetime, factory=factory
        )
        return self

    def add_notification_handler(
        self,
        notification_type: type[Any],
        handler: Any = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Callable[[], Any] | None = None,
    ) -> MediatorConfiguration:
        self.registry.register_notification_handler(
            notification_type, handler, lifetime=lifetime, factory=factory
        )
        return self

    def add_decorator(
        self,
        decorator: Any = None,
        *,
        request_type: type[Any] | None = None,
        response_type: Any = ANY_RESPONSE,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Callable[[], Any] | None = None,
    ) -> MediatorConfiguration:
        self.registry.register_decorator(
            decorator,
            request_type=request_type,
            response_type=response_type,
            lifetime=lifetime,
            factory=factory,
        )
        return self

    def add_handlers_from(
        self, target: ModuleType | str, *, recursive: bool = True
    ) -> MediatorConfiguration:
        """Register every handler class found in a module or package."""
        self.registry.scan(target, recursive=recursive)
        return self

    def with_options(self, options: SenderOptions) -> MediatorConfiguration:
        self.options = options
        return self

    def build(self) -> Sender:
        return Sender(self.registry, options=self.options)


def create_sender(
    configure: Callable[[MediatorConfiguration], Any] | None = None,
    *,
    registry: HandlerRegistry | None = None,
    options: SenderOptions | None = None,
    handler_factory: Callable[[type[Any]], Any] | None = None,
) -> Sender:
    """Create a ready :class:`Sender`.

    Args:
        configure: Optional callback receiving the
            :class:`MediatorConfiguration` to register handlers and
            decorators on.
        registry: Existing registry to extend. Mutually exclusive with
            *handler_factory*.
        options: Sender options.
        handler_factory: Factory for a new registry, e.g. a DI container's
            resolve function.
    """
    if registry is not None and handler_factory is not None:
        msg = "Pass either registry or handler_factory, not both"
        raise ValueError(msg)
    if registry is None:
        registry = HandlerRegistry(handler_factory=handler_factory)
    config = MediatorConfiguration(registry, options=options)
    if configure is not None:
        configure(config)
    return config.build()
