"""IHandlerDecorator — pipeline stage protocol."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..primitives.cancellation import CancellationToken


@runtime_checkable
class IHandlerDecorator(Protocol):
    """Protocol for decorators in the request/notification pipeline.

    A decorator wraps handler invocation and can run code before or after
    the continuation, short-circuit by not calling it, or raise.
    The chain is built so that the **first registered** decorator is the
    outermost wrapper and therefore runs first.
    """

    async def __call__(
        self,
        request: Any,
        next_handler: Callable[[], Awaitable[Any]],
        cancellation_token: CancellationToken,
    ) -> Any:
        """Execute decorator logic and await ``next_handler()`` to proceed.

        Parameters
        ----------
        request:
            The message being dispatched (request or notification).
        next_handler:
            Zero-argument async callable running the rest of the pipeline.
        cancellation_token:
            The call's cancellation signal.

        Returns
        -------
        The result from the rest of the chain (or a substitute value when
        short-circuiting).
        """
        ...
