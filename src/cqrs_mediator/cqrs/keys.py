"""HandlerKey — type-keyed lookup tokens shared by the sender and registries."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Final

from ..utils import type_name
from .request import response_type_of


class HandlerKind(str, enum.Enum):
    REQUEST = "request"
    NOTIFICATION = "notification"


class _AnyResponse:
    """Wildcard response type for decorator registrations."""

    def __repr__(self) -> str:
        return "ANY_RESPONSE"


ANY_RESPONSE: Final[Any] = _AnyResponse()


@dataclass(frozen=True)
class HandlerKey:
    """Identifies the handler slot for one concrete message type.

    ``response_type`` is ``None`` for void requests and for notifications.
    """

    kind: HandlerKind
    message_type: type[Any]
    response_type: Any = None

    @classmethod
    def for_request(cls, request_type: type[Any]) -> HandlerKey:
        return cls(HandlerKind.REQUEST, request_type, response_type_of(request_type))

    @classmethod
    def for_notification(cls, notification_type: type[Any]) -> HandlerKey:
        return cls(HandlerKind.NOTIFICATION, notification_type)

    @property
    def is_void(self) -> bool:
        return self.response_type is None

    def __str__(self) -> str:
        name = type_name(self.message_type)
        if self.kind is HandlerKind.NOTIFICATION:
            return f"NotificationHandler[{name}]"
        if self.is_void:
            return f"RequestHandler[{name}]"
        return f"RequestHandler[{name}, {type_name(self.response_type)}]"
