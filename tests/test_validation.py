from typing import Any
from unittest.mock import AsyncMock

import pytest
from pydantic import Field

from cqrs_mediator.cqrs.command import Command
from cqrs_mediator.cqrs.notification import Notification
from cqrs_mediator.ports.validation import IValidator
from cqrs_mediator.primitives.exceptions import ValidationError
from cqrs_mediator.validation import (
    CompositeValidator,
    PydanticValidator,
    ValidationResult,
)

# --- Test Models ---


class ValidatableCommand(Command):
    name: str = Field(..., min_length=3)
    age: int = Field(..., gt=0)


class Signup(Notification):
    email: str = Field(..., min_length=3)


class NotAModel:
    pass


def _validator(result: ValidationResult) -> Any:
    validator = AsyncMock(spec=IValidator)
    validator.validate.return_value = result
    return validator


# --- ValidationResult ---


def test_result_success_and_failure() -> None:
    assert ValidationResult.success().is_valid
    assert ValidationResult.success()

    failure = ValidationResult.failure({"name": ["is required"]})
    assert not failure.is_valid
    assert not failure


def test_result_failure_from_message() -> None:
    assert ValidationResult.failure("broken").errors == {"__root__": ["broken"]}


def test_result_merge_combines_errors() -> None:
    left = ValidationResult.failure({"name": ["too short"]})
    right = ValidationResult.failure({"name": ["not unique"], "age": ["negative"]})

    merged = left.merge(right)

    assert merged.errors == {"name": ["too short", "not unique"], "age": ["negative"]}
    assert left.errors == {"name": ["too short"]}


def test_result_add_error() -> None:
    result = ValidationResult.success()
    result.add_error("name", "is required")

    assert result.errors == {"name": ["is required"]}


def test_raise_if_invalid() -> None:
    ValidationResult.success().raise_if_invalid()

    with pytest.raises(ValidationError) as exc_info:
        ValidationResult.failure({"age": ["negative"]}).raise_if_invalid()

    assert exc_info.value.errors == {"age": ["negative"]}


def test_validation_error_from_message() -> None:
    assert ValidationError("nope").errors == {"__root__": ["nope"]}
    assert ValidationError().errors == {}


# --- PydanticValidator ---


@pytest.mark.asyncio
async def test_pydantic_validation_success() -> None:
    result = await PydanticValidator().validate(ValidatableCommand(name="Alice", age=30))

    assert result.is_valid
    assert result.errors == {}


@pytest.mark.asyncio
async def test_pydantic_validation_failure() -> None:
    cmd = ValidatableCommand.model_construct(name="Al", age=-5)

    result = await PydanticValidator().validate(cmd)

    assert not result.is_valid
    assert set(result.errors) == {"name", "age"}


@pytest.mark.asyncio
async def test_pydantic_validation_of_notifications() -> None:
    result = await PydanticValidator().validate(Signup.model_construct(email="a"))

    assert "email" in result.errors


@pytest.mark.asyncio
async def test_pydantic_strict_mode_rejects_coerced_values() -> None:
    cmd = ValidatableCommand.model_construct(name="Alice", age="30")

    assert (await PydanticValidator().validate(cmd)).is_valid
    assert not (await PydanticValidator(strict=True).validate(cmd)).is_valid


@pytest.mark.asyncio
async def test_pydantic_validation_skips_non_models() -> None:
    assert (await PydanticValidator().validate(NotAModel())).is_valid


# --- CompositeValidator ---


@pytest.mark.asyncio
async def test_composite_collects_all_errors() -> None:
    first = _validator(ValidationResult.failure({"name": ["too short"]}))
    second = _validator(ValidationResult.failure({"age": ["negative"]}))
    composite = CompositeValidator([first, second])

    result = await composite.validate(object())

    assert result.errors == {"name": ["too short"], "age": ["negative"]}
    second.validate.assert_awaited_once()


@pytest.mark.asyncio
async def test_composite_fail_fast_stops_at_first_failure() -> None:
    first = _validator(ValidationResult.failure({"name": ["too short"]}))
    second = _validator(ValidationResult.failure({"age": ["negative"]}))
    composite = CompositeValidator([first, second], fail_fast=True)

    result = await composite.validate(object())

    assert result.errors == {"name": ["too short"]}
    second.validate.assert_not_called()


@pytest.mark.asyncio
async def test_composite_add_and_empty() -> None:
    composite = CompositeValidator()
    assert (await composite.validate(object())).is_valid

    composite.add(_validator(ValidationResult.success())).add(
        _validator(ValidationResult.failure("bad"))
    )

    assert len(composite) == 2
    assert not (await composite.validate(object())).is_valid
