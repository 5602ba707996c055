"""Sender protocol — the caller-facing dispatch API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from ..cqrs.notification import Notification
    from ..cqrs.request import Request
    from ..primitives.cancellation import CancellationToken

TResult = TypeVar("TResult")


class ISender(Protocol):
    """
    Interface for dispatching requests and publishing notifications.
    """

    async def send(
        self,
        request: Request[TResult],
        cancellation_token: CancellationToken | None = None,
    ) -> TResult: ...

    async def notify(
        self,
        notification: Notification,
        cancellation_token: CancellationToken | None = None,
    ) -> None: ...
