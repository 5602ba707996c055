"""Request base classes — the dispatch key is the concrete runtime type."""

from __future__ import annotations

import typing
from typing import Any, Generic

from pydantic import BaseModel, ConfigDict
from typing_extensions import TypeVar

TResponse = TypeVar("TResponse", default=None)


class BaseRequest:
    """Root marker for everything :meth:`Sender.send` accepts."""


class Request(BaseModel, BaseRequest, Generic[TResponse]):
    """Base for all requests routed to exactly one handler.

    The generic parameter declares the response type. Leaving it out (or
    passing ``None``) makes the request *void*: the handler returns nothing
    and ``send`` returns ``None``.

    Usage::

        class Ping(Request):
            ...

        class GetTotal(Request[int]):
            account_id: str
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def response_type_of(request_type: type[Any]) -> Any:
    """Return the response type declared by *request_type*, ``None`` if void.

    Walks the MRO collecting the type-variable bindings of every parameterized
    base until the ``Request[...]`` parameterization is reached, so generic
    intermediates resolve too::

        class GetIntQuery(Query[int]): ...            # -> int

        class Paged(Query[list[T]], Generic[T]): ...
        class GetUsers(Paged[int]): ...               # -> list[int]
    """
    bindings: dict[Any, Any] = {}
    for klass in request_type.__mro__:
        metadata = klass.__dict__.get("__pydantic_generic_metadata__")
        if not metadata:
            continue
        origin = metadata.get("origin")
        args = metadata.get("args") or ()
        if origin is None or not args:
            continue
        parameters = origin.__pydantic_generic_metadata__.get("parameters") or ()
        for parameter, arg in zip(parameters, args):
            bindings.setdefault(parameter, _substitute(arg, bindings))
        if origin is Request:
            break

    declared = bindings.get(TResponse)
    if declared is None or declared is type(None):
        return None
    if isinstance(declared, typing.TypeVar):
        return None
    return declared


def _substitute(tp: Any, bindings: dict[Any, Any]) -> Any:
    """Replace bound type variables inside *tp* (``list[T]`` -> ``list[int]``)."""
    if isinstance(tp, typing.TypeVar):
        return bindings.get(tp, tp)
    parameters = getattr(tp, "__parameters__", None) or ()
    if not parameters:
        return tp
    return tp[tuple(bindings.get(p, p) for p in parameters)]
