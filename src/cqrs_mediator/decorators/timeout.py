"""TimeoutDecorator — bounds the rest of the pipeline by a deadline."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import RequestTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..primitives.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class TimeoutDecorator:
    """Fails the dispatch with :class:`RequestTimeoutError` after *timeout*
    seconds.

    On expiry the call's cancellation token is cancelled first, so handlers
    polling it stop cooperatively, and then the pending task is cancelled.
    A ``TimeoutError`` raised by the handler itself propagates unchanged.

    The token cancelled on expiry is the one passed to ``send``/``notify``,
    not a copy: it stays cancelled afterwards, so pass a fresh token to each
    call. Under ``PublishStrategy.CONCURRENT`` every handler of the
    notification shares that token and sees the cancellation too.
    """

    def __init__(self, timeout: float) -> None:
        if timeout <= 0:
            msg = f"timeout must be positive, got {timeout!r}"
            raise ValueError(msg)
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __call__(
        self,
        request: Any,
        next_handler: Callable[[], Awaitable[Any]],
        cancellation_token: CancellationToken,
    ) -> Any:
        task = asyncio.ensure_future(next_handler())
        try:
            done, _ = await asyncio.wait({task}, timeout=self._timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task in done:
            return task.result()

        logger.warning(
            "%s timed out after %ss", type(request).__name__, self._timeout
        )
        cancellation_token.cancel()
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        raise RequestTimeoutError(type(request), self._timeout)
