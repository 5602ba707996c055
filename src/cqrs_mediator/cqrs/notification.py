"""Notification base class — fire-and-forget message with many handlers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Notification(BaseModel):
    """Base class for notifications.

    Unrelated to :class:`~cqrs_mediator.cqrs.request.Request`: a notification
    is multicast to zero or more handlers and never returns a value.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
