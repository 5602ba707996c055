"""Console walkthrough: a query, a void command and a command with data.

Run with ``python examples/basic_usage.py``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cqrs_mediator import (
    BaseCommand,
    BaseQuery,
    CancellationToken,
    Command,
    CommandHandler,
    MediatorConfiguration,
    PydanticValidator,
    Query,
    QueryHandler,
    ValidationDecorator,
    create_sender,
)

# ── Requests and handlers ────────────────────────────────────────


class GetIntQuery(Query[int]):
    pass


class GetIntQueryHandler(QueryHandler[GetIntQuery, int]):
    async def handle(
        self, query: GetIntQuery, cancellation_token: CancellationToken
    ) -> int:
        return 42


class DoSomethingCommand(Command):
    pass


class DoSomethingCommandHandler(CommandHandler[DoSomethingCommand, None]):
    async def handle(
        self, command: DoSomethingCommand, cancellation_token: CancellationToken
    ) -> None:
        print("From Handler -> Doing something...")


class SaySomethingCommand(Command):
    value: str


class SaySomethingCommandHandler(CommandHandler[SaySomethingCommand, None]):
    async def handle(
        self, command: SaySomethingCommand, cancellation_token: CancellationToken
    ) -> None:
        print(f"From Handler -> Something is '{command.value}'")


# ── Decorators ───────────────────────────────────────────────────


class CommandDecorator:
    async def __call__(
        self, request: Any, next_handler: Any, cancellation_token: CancellationToken
    ) -> Any:
        name = type(request).__name__
        print(f"Decorating command of type {name}")
        result = await next_handler()
        print(f"Finished decorating command of type {name}")
        return result


class QueryDecorator:
    async def __call__(
        self, request: Any, next_handler: Any, cancellation_token: CancellationToken
    ) -> Any:
        name = type(request).__name__
        print(f"Decorating query of type {name}")
        result = await next_handler()
        print(f"Finished decorating query of type {name}")
        return result


def configure(cfg: MediatorConfiguration) -> None:
    cfg.add_handlers_from(__name__)
    cfg.add_decorator(ValidationDecorator(PydanticValidator()))
    cfg.add_decorator(CommandDecorator, request_type=BaseCommand)
    cfg.add_decorator(QueryDecorator, request_type=BaseQuery)


# ── Walkthrough ──────────────────────────────────────────────────


async def main() -> None:
    sender = create_sender(configure)

    examples = [
        lambda: sender.send(GetIntQuery()),
        lambda: sender.send(DoSomethingCommand()),
        lambda: sender.send(SaySomethingCommand(value="Hello from example 3")),
    ]
    for number, example in enumerate(examples, start=1):
        print(f"Running example {number}...")
        result = await example()
        if result is not None:
            print(f"Result: {result}")
        print(f"Example {number} completed.")
        print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
