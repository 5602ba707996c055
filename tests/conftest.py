"""Shared fixtures for cqrs-mediator tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from cqrs_mediator.cqrs.registry import HandlerRegistry
from cqrs_mediator.cqrs.sender import Sender


@pytest.fixture
def trace() -> list[str]:
    """Ordered record of pipeline events."""
    return []


@pytest.fixture
def tracer(trace: list[str]) -> Callable[[str], Any]:
    """Build decorators that append ``<name>-before`` / ``<name>-after``."""

    def _make(name: str) -> Any:
        async def _decorator(
            request: Any, next_handler: Any, cancellation_token: Any
        ) -> Any:
            trace.append(f"{name}-before")
            result = await next_handler()
            trace.append(f"{name}-after")
            return result

        _decorator.__name__ = f"{name}_decorator"
        return _decorator

    return _make


@pytest.fixture
def registry() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def sender(registry: HandlerRegistry) -> Sender:
    return Sender(registry)
