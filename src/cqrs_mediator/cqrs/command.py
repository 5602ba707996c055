"""Command base class — immutable intent to change state."""

from __future__ import annotations

from typing import Generic

from typing_extensions import TypeVar

from .request import Request

TResult = TypeVar("TResult", default=None)


class BaseCommand:
    """Marker shared by every command.

    Never subclass this directly; it exists so decorators can ask
    ``isinstance(request, BaseCommand)``.
    """


class Command(Request[TResult], BaseCommand, Generic[TResult]):
    """
    Base for all commands.

    Commands represent write operations that change system state. They:
    - Are named with imperative verbs (e.g., CreateUser, TransferFunds)
    - Usually return nothing (``class Archive(Command)``), but may declare
      a result (``class CreateUser(Command[UserId])``)
    - Are handled by exactly one :class:`CommandHandler`
    """
