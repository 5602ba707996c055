"""Registration — descriptor for a handler or decorator held by a registry."""

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .keys import ANY_RESPONSE

if TYPE_CHECKING:
    from collections.abc import Callable


class Lifetime(str, enum.Enum):
    """How often a registered class is instantiated."""

    TRANSIENT = "transient"
    SINGLETON = "singleton"


@dataclass
class Registration:
    """Descriptor for a handler or decorator.

    Supports **deferred instantiation**: supply a class (built through the
    registry's ``handler_factory``) or a zero-argument *factory*. Instances
    are registered as-is and behave as singletons.
    """

    target: Any
    lifetime: Lifetime = Lifetime.TRANSIENT
    factory: Callable[[], Any] | None = None
    _instance: Any = field(default=None, init=False, repr=False)

    @property
    def identity(self) -> Any:
        """What makes two registrations "the same" for de-duplication."""
        return self.factory if self.factory is not None else self.target

    @property
    def name(self) -> str:
        source = self.identity
        if inspect.isclass(source) or inspect.isfunction(source):
            return source.__name__
        return type(source).__name__

    def build(self, handler_factory: Callable[[type[Any]], Any]) -> Any:
        """Return the instance to use for this resolution."""
        if self._instance is not None:
            return self._instance
        if self.factory is not None:
            instance = self.factory()
        elif inspect.isclass(self.target):
            instance = handler_factory(self.target)
        else:
            instance = self.target
        if self.lifetime is Lifetime.SINGLETON:
            self._instance = instance
        return instance


@dataclass
class DecoratorRegistration:
    """A decorator plus the (request type, response type) pairs it applies to.

    ``request_type=None`` registers the decorator *open*: it applies to every
    request and notification. A class restricts it to that type and its
    subclasses (marker classes such as ``BaseCommand`` work too).
    """

    registration: Registration
    request_type: type[Any] | None = None
    response_type: Any = ANY_RESPONSE

    def applies_to(self, request_type: type[Any], response_type: Any) -> bool:
        if self.request_type is not None and not issubclass(
            request_type, self.request_type
        ):
            return False
        if self.response_type is ANY_RESPONSE:
            return True
        return bool(self.response_type == response_type)
