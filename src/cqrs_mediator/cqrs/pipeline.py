"""build_pipeline — construct the decorator chain around a handler call."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..ports.decorator import IHandlerDecorator
    from ..primitives.cancellation import CancellationToken

Continuation = Callable[[], Awaitable[Any]]


def build_pipeline(
    decorators: Sequence[IHandlerDecorator],
    request: Any,
    handler_fn: Continuation,
    cancellation_token: CancellationToken,
) -> Continuation:
    """Build a decorator chain ending at *handler_fn*.

    *decorators* are given in registration order; the list is folded
    right-to-left so the **first** decorator becomes the outermost wrapper.
    Given ``[A, B]`` the call trace is
    ``A-before, B-before, handler, B-after, A-after``.
    """
    pipeline: Continuation = handler_fn

    for decorator in reversed(decorators):
        current_next = pipeline  # capture for closure

        async def _wrapper(
            _decorator: IHandlerDecorator = decorator,
            _next: Continuation = current_next,
        ) -> Any:
            return await _decorator(request, _next, cancellation_token)

        pipeline = _wrapper

    return pipeline
