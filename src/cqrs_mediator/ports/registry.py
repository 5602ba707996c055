"""IHandlerResolver — the lookup contract the sender depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.keys import HandlerKey


@runtime_checkable
class IHandlerResolver(Protocol):
    """Type-keyed lookup of handlers and decorators.

    Implementations own handler lifetimes; the sender re-resolves on every
    call and never caches what it receives.
    """

    def resolve_one(self, key: HandlerKey) -> Any | None:
        """Return the single handler for a request key, or ``None``."""
        ...

    def resolve_many(self, key: HandlerKey) -> list[Any]:
        """Return every handler for a notification key (possibly empty)."""
        ...

    def resolve_decorators(
        self, request_type: type[Any], response_type: Any
    ) -> list[Any]:
        """Return the decorators for the pair, in **registration order**."""
        ...
