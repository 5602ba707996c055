import pickle
from typing import Any, Generic, Literal, Optional, TypeVar, Union

import pytest
from pydantic import ValidationError as PydanticValidationError

from cqrs_mediator.cqrs.command import BaseCommand, Command
from cqrs_mediator.cqrs.contracts import matches_response_type
from cqrs_mediator.cqrs.keys import ANY_RESPONSE, HandlerKey, HandlerKind
from cqrs_mediator.cqrs.notification import Notification
from cqrs_mediator.cqrs.query import BaseQuery, Query
from cqrs_mediator.cqrs.request import BaseRequest, Request, response_type_of
from cqrs_mediator.cqrs.unit import Unit, unit

# --- Test Models ---


class Ping(Request):
    pass


class Echo(Request[str]):
    text: str


class DoSomething(Command):
    pass


class CreateUser(Command[int]):
    name: str


class GetIntQuery(Query[int]):
    pass


class SpecialIntQuery(GetIntQuery):
    pass


class FindNames(Query[list[str]]):
    pass


class ExplicitVoid(Command[None]):
    pass


T = TypeVar("T")


class Paged(Query[list[T]], Generic[T]):
    page: int = 1


class GetUserIds(Paged[int]):
    pass


class Lookup(Query[Optional[T]], Generic[T]):
    pass


class LookupName(Lookup[str]):
    pass


class UserCreated(Notification):
    user_id: int


# --- Response types ---


def test_unparameterized_requests_are_void() -> None:
    assert response_type_of(Ping) is None
    assert response_type_of(DoSomething) is None
    assert response_type_of(ExplicitVoid) is None


def test_parameterized_requests_declare_response() -> None:
    assert response_type_of(Echo) is str
    assert response_type_of(CreateUser) is int
    assert response_type_of(GetIntQuery) is int
    assert response_type_of(FindNames) == list[str]


def test_response_type_is_inherited() -> None:
    assert response_type_of(SpecialIntQuery) is int


def test_response_type_resolves_through_generic_intermediates() -> None:
    assert response_type_of(GetUserIds) == list[int]
    assert response_type_of(LookupName) == Optional[str]
    assert HandlerKey.for_request(GetUserIds).response_type == list[int]


def test_unbound_generic_intermediate_keeps_type_variable() -> None:
    assert response_type_of(Paged) == list[T]


def test_markers() -> None:
    assert isinstance(DoSomething(), BaseCommand)
    assert isinstance(DoSomething(), BaseRequest)
    assert not isinstance(DoSomething(), BaseQuery)
    assert isinstance(GetIntQuery(), BaseQuery)
    assert not isinstance(UserCreated(user_id=1), Request)


def test_requests_are_immutable() -> None:
    request = CreateUser(name="alice")
    with pytest.raises(PydanticValidationError):
        request.name = "bob"  # type: ignore[misc]


def test_notifications_are_immutable() -> None:
    event = UserCreated(user_id=1)
    with pytest.raises(PydanticValidationError):
        event.user_id = 2  # type: ignore[misc]


# --- HandlerKey ---


def test_handler_key_for_request() -> None:
    key = HandlerKey.for_request(GetIntQuery)
    assert key.kind is HandlerKind.REQUEST
    assert key.message_type is GetIntQuery
    assert key.response_type is int
    assert not key.is_void
    assert str(key) == "RequestHandler[GetIntQuery, int]"


def test_handler_key_for_void_request() -> None:
    key = HandlerKey.for_request(DoSomething)
    assert key.is_void
    assert str(key) == "RequestHandler[DoSomething]"


def test_handler_key_for_notification() -> None:
    key = HandlerKey.for_notification(UserCreated)
    assert key.kind is HandlerKind.NOTIFICATION
    assert str(key) == "NotificationHandler[UserCreated]"


def test_handler_keys_are_hashable_and_distinct() -> None:
    keys = {
        HandlerKey.for_request(GetIntQuery),
        HandlerKey.for_request(GetIntQuery),
        HandlerKey.for_request(SpecialIntQuery),
    }
    assert len(keys) == 2
    assert repr(ANY_RESPONSE) == "ANY_RESPONSE"


# --- Unit ---


def test_unit_is_a_singleton() -> None:
    assert Unit() is unit
    assert pickle.loads(pickle.dumps(unit)) is unit
    assert repr(unit) == "unit"


# --- Response contracts ---


@pytest.mark.parametrize(
    ("value", "expected", "matches"),
    [
        (42, int, True),
        ("42", int, False),
        (True, int, True),
        ([1, 2], list[int], True),
        ((1, 2), list[int], False),
        (None, Optional[int], True),
        (3, Optional[int], True),
        ("x", Union[int, str], True),
        (1.5, Union[int, str], False),
        ("a", Literal["a", "b"], True),
        ("c", Literal["a", "b"], False),
        (object(), Any, True),
        (unit, Unit, True),
        (None, Unit, False),
        (None, None, True),
    ],
)
def test_matches_response_type(value: Any, expected: Any, matches: bool) -> None:
    assert matches_response_type(value, expected) is matches


def test_matches_pep604_union() -> None:
    assert matches_response_type(1, int | str)
    assert not matches_response_type(1.0, int | str)
