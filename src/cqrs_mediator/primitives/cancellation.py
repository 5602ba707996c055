"""CancellationToken — cooperative cancellation signal for a dispatch call."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .exceptions import RequestCancelledError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """Signal threaded through every decorator and into the handler.

    The sender never aborts a callee; honouring the token is each
    handler's and decorator's responsibility::

        async def handle(self, request, cancellation_token):
            for chunk in request.chunks:
                cancellation_token.raise_if_cancelled()
                await self._store(chunk)
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._event: asyncio.Event | None = None
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation. Idempotent.

        Every registered callback runs; if any of them fail, the first
        failure is re-raised once all have run.
        """
        if self._cancelled:
            return
        self._cancelled = True
        if self._event is not None:
            self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        failures: list[Exception] = []
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:
                logger.exception("Cancellation callback %r failed", callback)
                failures.append(exc)
        if failures:
            raise failures[0]

    def raise_if_cancelled(self) -> None:
        """Raise :class:`RequestCancelledError` if cancellation was requested."""
        if self._cancelled:
            raise RequestCancelledError("Cancellation was requested")

    def register(self, callback: Callable[[], None]) -> None:
        """Run *callback* on cancellation (immediately if already cancelled)."""
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)

    async def wait(self) -> None:
        """Suspend until cancellation is requested."""
        if self._cancelled:
            return
        if self._event is None:
            self._event = asyncio.Event()
        await self._event.wait()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
