"""ValidationResult — field-level validation errors for one request."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..primitives.exceptions import ValidationError


@dataclass
class ValidationResult:
    """Collects field-level validation errors.

    Usage::

        result = ValidationResult.success()
        result = ValidationResult.failure({"name": ["is required"]})
        result.raise_if_invalid()
    """

    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, errors: dict[str, list[str]] | str) -> ValidationResult:
        if isinstance(errors, str):
            return cls(errors={"__root__": [errors]})
        return cls(errors={k: list(v) for k, v in errors.items()})

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Return a new result holding the errors of both."""
        merged = {k: list(v) for k, v in self.errors.items()}
        for field_name, messages in other.errors.items():
            merged.setdefault(field_name, []).extend(messages)
        return ValidationResult(errors=merged)

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def raise_if_invalid(self) -> None:
        """Raise :class:`ValidationError` carrying these errors, if any."""
        if not self.is_valid:
            raise ValidationError(self.errors)

    def __bool__(self) -> bool:
        return self.is_valid
