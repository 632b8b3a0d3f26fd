"""Result types for railway-oriented programming.

Every public identity operation returns a Result instead of raising for an
expected failure (wrong password, locked account, expired session...).
Callers branch on the variant with structural pattern matching.

Usage:
    result = await handler.handle(command)
    match result:
        case Success(value=outcome):
            ...
        case Failure(error=error):
            print(error.code)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
