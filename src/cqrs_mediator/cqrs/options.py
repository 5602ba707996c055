"""Sender behaviour switches."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PublishStrategy(str, enum.Enum):
    """How ``notify`` runs the handlers of one notification."""

    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"


class EmptyNotificationPolicy(str, enum.Enum):
    """What ``notify`` does when a notification has no handlers."""

    IGNORE = "ignore"
    RAISE = "raise"


@dataclass(frozen=True)
class SenderOptions:
    """Configuration for :class:`~cqrs_mediator.cqrs.sender.Sender`.

    Attributes:
        publish_strategy: ``SEQUENTIAL`` runs notification handlers one after
            another in resolution order and stops at the first failure.
            ``CONCURRENT`` runs all of them and re-raises the first failure
            in resolution order once every handler has finished.
        empty_notification_policy: ``IGNORE`` treats a notification without
            handlers as a successful no-op; ``RAISE`` raises
            :class:`NotificationHandlerNotFoundError`.
    """

    publish_strategy: PublishStrategy = PublishStrategy.SEQUENTIAL
    empty_notification_policy: EmptyNotificationPolicy = (
        EmptyNotificationPolicy.IGNORE
    )
