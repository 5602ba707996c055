"""LoggingDecorator — logs request handling, duration and failures."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..cqrs.command import BaseCommand
from ..cqrs.notification import Notification
from ..cqrs.query import BaseQuery

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..primitives.cancellation import CancellationToken

_logger = logging.getLogger("cqrs_mediator.decorators")


def kind_of(message: Any) -> str:
    """Classify *message* as ``command``, ``query``, ``notification`` or
    ``request``."""
    if isinstance(message, BaseCommand):
        return "command"
    if isinstance(message, BaseQuery):
        return "query"
    if isinstance(message, Notification):
        return "notification"
    return "request"


class LoggingDecorator:
    """Logs each dispatch: kind and name, duration, and any failure.

    Failures are logged with their traceback and re-raised unchanged.
    """

    def __init__(
        self, logger: logging.Logger | None = None, *, level: int = logging.INFO
    ) -> None:
        self._logger = logger or _logger
        self._level = level

    async def __call__(
        self,
        request: Any,
        next_handler: Callable[[], Awaitable[Any]],
        cancellation_token: CancellationToken,
    ) -> Any:
        name = type(request).__name__
        self._logger.log(self._level, "Handling %s %s", kind_of(request), name)
        start = time.perf_counter()
        try:
            result = await next_handler()
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            self._logger.exception("%s failed after %.2fms", name, elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000
        self._logger.log(self._level, "%s completed in %.2fms", name, elapsed)
        return result
