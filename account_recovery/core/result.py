"""Result types for railway-oriented programming.

Operations that can fail in expected ways return a Result instead of
raising. Callers branch with structural pattern matching.

Usage:
    result = await service.redeem_reset(cmd)
    match result:
        case Success(value):
            ...
        case Failure(error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

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


type Result[T, E] = Success[T] | Failure[E]
