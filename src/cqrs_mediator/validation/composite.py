"""CompositeValidator — chains multiple validators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .result import ValidationResult

if TYPE_CHECKING:
    from ..ports.validation import IValidator


class CompositeValidator:
    """Runs a list of validators in order and merges their results.

    By default every validator runs and **all** errors are collected.
    With ``fail_fast=True`` the chain stops at the first invalid result.

    Usage::

        validator = CompositeValidator([NameValidator(), PriceValidator()])
        result = await validator.validate(command)
    """

    def __init__(
        self,
        validators: list[IValidator] | None = None,
        *,
        fail_fast: bool = False,
    ) -> None:
        self._validators: list[IValidator] = list(validators or [])
        self._fail_fast = fail_fast

    def add(self, validator: IValidator) -> CompositeValidator:
        """Append a validator to the chain."""
        self._validators.append(validator)
        return self

    def __len__(self) -> int:
        return len(self._validators)

    async def validate(self, request: Any) -> ValidationResult:
        combined = ValidationResult.success()
        for validator in self._validators:
            combined = combined.merge(await validator.validate(request))
            if self._fail_fast and not combined.is_valid:
                break
        return combined
