"""Result type used between pipeline stages.

Why:
- Each stage (validate -> build -> send -> parse) returns `Ok` or `Err`
  instead of raising, so the facade forwards failures explicitly.
- The public API unwraps at its edge: callers still get exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from stem_client.core.domain.errors import StemSeparatorError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)


@dataclass(frozen=True)
class Err:
    error: StemSeparatorError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error

    def and_then(self, fn: Callable[[object], "Result[U]"]) -> "Err":
        return self


Result = Union[Ok[T], Err]
