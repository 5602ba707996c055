"""PydanticValidator — re-runs pydantic model validation on a request."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .result import ValidationResult


class PydanticValidator:
    """Validates requests and notifications through their model class.

    Requests are frozen models, so field values were already validated at
    construction; re-validating catches instances built with
    ``model_construct`` and, with ``strict=True``, values that only passed
    through lax coercion. Non-pydantic objects are always valid.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict

    async def validate(self, request: Any) -> ValidationResult:
        if not isinstance(request, BaseModel):
            return ValidationResult.success()

        try:
            type(request).model_validate(
                request.model_dump(), strict=self._strict or None
            )
        except PydanticValidationError as exc:
            errors: dict[str, list[str]] = {}
            for error in exc.errors():
                loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
                errors.setdefault(loc, []).append(error.get("msg", "validation error"))
            return ValidationResult.failure(errors)
        return ValidationResult.success()
