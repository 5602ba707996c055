"""Query base class — immutable request for data."""

from __future__ import annotations

from typing import Generic

from typing_extensions import TypeVar

from .request import Request

TResult = TypeVar("TResult", default=None)


class BaseQuery:
    """Marker shared by every query, for ``isinstance`` tests in decorators."""


class Query(Request[TResult], BaseQuery, Generic[TResult]):
    """Base class for all Queries.

    Queries represent a request for data and **must** be immutable.
    Declare the result type as the generic parameter::

        class GetIntQuery(Query[int]):
            pass
    """
