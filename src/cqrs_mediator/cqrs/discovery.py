"""Handler discovery — infer registration keys from generic handler bases."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, get_args, get_origin

from .handler import NotificationHandler, RequestHandler
from .keys import HandlerKind

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import ModuleType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerSignature:
    """What a handler class declares through its generic base."""

    kind: HandlerKind
    message_type: type[Any]
    response_type: Any = None
    response_declared: bool = False


def handler_signature(handler_cls: type[Any]) -> HandlerSignature | None:
    """Read ``RequestHandler[Req, Res]`` / ``NotificationHandler[N]`` bases.

    Returns ``None`` when the class does not parameterize one of the handler
    bases with a concrete message class.
    """
    for klass in inspect.getmro(handler_cls):
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not isinstance(origin, type):
                continue
            args = get_args(base)
            if not args or not isinstance(args[0], type):
                continue
            if issubclass(origin, NotificationHandler):
                return HandlerSignature(HandlerKind.NOTIFICATION, args[0])
            if issubclass(origin, RequestHandler):
                if len(args) < 2 or isinstance(args[1], typing.TypeVar):
                    return HandlerSignature(HandlerKind.REQUEST, args[0])
                response = None if args[1] is type(None) else args[1]
                return HandlerSignature(
                    HandlerKind.REQUEST, args[0], response, response_declared=True
                )
    return None


def iter_modules(
    target: ModuleType | str, *, recursive: bool = True
) -> Iterator[ModuleType]:
    """Yield *target* and, for packages, every sub-module when *recursive*."""
    module = importlib.import_module(target) if isinstance(target, str) else target
    yield module
    if not recursive or not hasattr(module, "__path__"):
        return
    for info in pkgutil.walk_packages(module.__path__, prefix=f"{module.__name__}."):
        logger.debug("Importing %s for handler discovery", info.name)
        yield importlib.import_module(info.name)


def discover_handlers(
    target: ModuleType | str, *, recursive: bool = True
) -> list[tuple[type[Any], HandlerSignature]]:
    """Find concrete handler classes defined in *target*.

    Classes merely imported into a module are skipped so each handler is
    found once, in the module that defines it.
    """
    found: list[tuple[type[Any], HandlerSignature]] = []
    for module in iter_modules(target, recursive=recursive):
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ != module.__name__ or inspect.isabstract(obj):
                continue
            signature = handler_signature(obj)
            if signature is not None:
                found.append((obj, signature))
    return found
