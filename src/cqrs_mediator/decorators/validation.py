"""ValidationDecorator — rejects invalid requests before the handler runs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.validation import IValidator
    from ..primitives.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class ValidationDecorator:
    """Runs ``IValidator.validate()`` before the rest of the pipeline.

    If validation fails, raises :class:`ValidationError` and the
    continuation is never called.
    """

    def __init__(self, validator: IValidator) -> None:
        self._validator = validator

    async def __call__(
        self,
        request: Any,
        next_handler: Callable[[], Awaitable[Any]],
        cancellation_token: CancellationToken,
    ) -> Any:
        cancellation_token.raise_if_cancelled()
        result = await self._validator.validate(request)
        if not result.is_valid:
            logger.debug(
                "%s rejected by validation: %s", type(request).__name__, result.errors
            )
            raise ValidationError(result.errors)
        return await next_handler()
