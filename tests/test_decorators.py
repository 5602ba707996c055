import asyncio
import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cqrs_mediator.cqrs.command import Command
from cqrs_mediator.cqrs.handler import CommandHandler
from cqrs_mediator.cqrs.notification import Notification
from cqrs_mediator.cqrs.query import Query
from cqrs_mediator.cqrs.registry import HandlerRegistry
from cqrs_mediator.cqrs.request import Request
from cqrs_mediator.cqrs.sender import Sender
from cqrs_mediator.decorators import (
    LoggingDecorator,
    TimeoutDecorator,
    ValidationDecorator,
    kind_of,
)
from cqrs_mediator.ports.decorator import IHandlerDecorator
from cqrs_mediator.ports.validation import IValidator
from cqrs_mediator.primitives.cancellation import CancellationToken
from cqrs_mediator.primitives.exceptions import (
    RequestCancelledError,
    RequestTimeoutError,
    ValidationError,
)
from cqrs_mediator.validation.result import ValidationResult

# --- Test Models ---


class MyCommand(Command):
    data: str


class MyQuery(Query[str]):
    pass


class MyNotification(Notification):
    pass


class PlainRequest(Request[int]):
    pass


# --- kind_of ---


def test_kind_of() -> None:
    assert kind_of(MyCommand(data="x")) == "command"
    assert kind_of(MyQuery()) == "query"
    assert kind_of(MyNotification()) == "notification"
    assert kind_of(PlainRequest()) == "request"


def test_builtin_decorators_satisfy_protocol() -> None:
    assert isinstance(LoggingDecorator(), IHandlerDecorator)
    assert isinstance(TimeoutDecorator(1.0), IHandlerDecorator)
    assert isinstance(ValidationDecorator(AsyncMock(spec=IValidator)), IHandlerDecorator)


# --- LoggingDecorator ---


@pytest.mark.asyncio()
async def test_logging_decorator_logs_execution(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)
    decorator = LoggingDecorator()
    next_fn = AsyncMock(return_value="ok")

    result = await decorator(MyCommand(data="test"), next_fn, CancellationToken())

    assert result == "ok"
    next_fn.assert_awaited_once_with()
    assert "Handling command MyCommand" in caplog.text
    assert "MyCommand completed in" in caplog.text


@pytest.mark.asyncio()
async def test_logging_decorator_logs_exception(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO)
    decorator = LoggingDecorator()
    error = ValueError("boom")
    next_fn = AsyncMock(side_effect=error)

    with pytest.raises(ValueError, match="boom") as exc_info:
        await decorator(MyQuery(), next_fn, CancellationToken())

    assert exc_info.value is error
    assert "Handling query MyQuery" in caplog.text
    assert "MyQuery failed after" in caplog.text
    assert any(record.exc_info for record in caplog.records)


@pytest.mark.asyncio()
async def test_logging_decorator_custom_logger_and_level(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger="app.dispatch")
    decorator = LoggingDecorator(logging.getLogger("app.dispatch"), level=logging.DEBUG)

    await decorator(MyNotification(), AsyncMock(return_value=1), CancellationToken())

    assert [r.name for r in caplog.records] == ["app.dispatch", "app.dispatch"]
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


# --- ValidationDecorator ---


@pytest.mark.asyncio()
async def test_validation_decorator_success() -> None:
    validator = AsyncMock(spec=IValidator)
    validator.validate.return_value = ValidationResult.success()
    decorator = ValidationDecorator(validator)
    command = MyCommand(data="valid")
    next_fn = AsyncMock(return_value="ok")

    result = await decorator(command, next_fn, CancellationToken())

    assert result == "ok"
    validator.validate.assert_called_once_with(command)
    next_fn.assert_awaited_once_with()


@pytest.mark.asyncio()
async def test_validation_decorator_failure() -> None:
    validator = AsyncMock(spec=IValidator)
    validator.validate.return_value = ValidationResult.failure({"data": ["Invalid"]})
    decorator = ValidationDecorator(validator)
    next_fn = AsyncMock()

    with pytest.raises(ValidationError) as exc_info:
        await decorator(MyCommand(data="invalid"), next_fn, CancellationToken())

    assert exc_info.value.errors == {"data": ["Invalid"]}
    next_fn.assert_not_called()


@pytest.mark.asyncio()
async def test_validation_decorator_honours_cancellation() -> None:
    validator = AsyncMock(spec=IValidator)
    token = CancellationToken()
    token.cancel()

    with pytest.raises(RequestCancelledError):
        await ValidationDecorator(validator)(MyCommand(data="x"), AsyncMock(), token)

    validator.validate.assert_not_called()


@pytest.mark.asyncio()
async def test_rejected_command_never_reaches_handler(
    registry: HandlerRegistry, sender: Sender
) -> None:
    handler = MagicMock()

    class Handler(CommandHandler[MyCommand, None]):
        async def handle(
            self, command: MyCommand, cancellation_token: CancellationToken
        ) -> None:
            handler(command)

    class RejectEmpty:
        async def validate(self, request: Any) -> ValidationResult:
            if not request.data:
                return ValidationResult.failure({"data": ["must not be empty"]})
            return ValidationResult.success()

    registry.register_handler(MyCommand, Handler)
    registry.register_decorator(ValidationDecorator(RejectEmpty()))

    with pytest.raises(ValidationError):
        await sender.send(MyCommand(data=""))

    handler.assert_not_called()
    await sender.send(MyCommand(data="ok"))
    handler.assert_called_once()


# --- TimeoutDecorator ---


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError, match="positive"):
        TimeoutDecorator(0)


@pytest.mark.asyncio()
async def test_timeout_decorator_returns_result_in_time() -> None:
    decorator = TimeoutDecorator(1.0)

    result = await decorator(MyQuery(), AsyncMock(return_value="fast"), CancellationToken())

    assert result == "fast"


@pytest.mark.asyncio()
async def test_timeout_decorator_cancels_slow_pipeline() -> None:
    decorator = TimeoutDecorator(0.01)
    token = CancellationToken()
    cancelled = asyncio.Event()

    async def slow() -> str:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return "late"

    with pytest.raises(RequestTimeoutError) as exc_info:
        await decorator(MyQuery(), slow, token)

    assert exc_info.value.message_type is MyQuery
    assert exc_info.value.timeout == 0.01
    assert token.is_cancelled
    assert cancelled.is_set()


@pytest.mark.asyncio()
async def test_timeout_decorator_keeps_inner_timeout_error() -> None:
    error = TimeoutError("upstream")

    async def failing() -> str:
        raise error

    with pytest.raises(TimeoutError) as exc_info:
        await TimeoutDecorator(1.0)(MyQuery(), failing, CancellationToken())

    assert exc_info.value is error
    assert not isinstance(exc_info.value, RequestTimeoutError)


@pytest.mark.asyncio()
async def test_timeout_leaves_the_callers_token_cancelled(
    registry: HandlerRegistry, sender: Sender
) -> None:
    seen: list[bool] = []

    class Slow(CommandHandler[MyCommand, None]):
        async def handle(
            self, command: MyCommand, cancellation_token: CancellationToken
        ) -> None:
            seen.append(cancellation_token.is_cancelled)
            if command.data == "slow":
                await asyncio.sleep(10)

    registry.register_handler(MyCommand, Slow)
    registry.register_decorator(TimeoutDecorator(0.01))
    token = CancellationToken()

    with pytest.raises(RequestTimeoutError):
        await sender.send(MyCommand(data="slow"), token)

    assert token.is_cancelled
    await sender.send(MyCommand(data="fast"), token)
    await sender.send(MyCommand(data="fast"))
    assert seen == [False, True, False]
