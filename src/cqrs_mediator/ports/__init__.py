from .decorator import IHandlerDecorator
from .registry import IHandlerResolver
from .sender import ISender
from .validation import IValidator

__all__ = [
    "IHandlerDecorator",
    "IHandlerResolver",
    "ISender",
    "IValidator",
]
