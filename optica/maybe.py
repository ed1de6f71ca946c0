""" Implementation of Maybe, the absence value reported by prisms."""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

A = TypeVar("A")
B = TypeVar("B")

type Maybe[A] = Just[A] | _Nothing


class _Nothing(Enum):
    NOTHING = "Nothing"

    def map(self, f: Callable[[A], B]) -> "_Nothing":  # pylint: disable=unused-argument
        return Nothing

    def __rand__(self, other: Callable[[A], B]) -> "_Nothing":
        return Nothing

    def __rshift__(self, m: Callable[[A], "Maybe[B]"]) -> "_Nothing":
        return Nothing

    def bind(self, m: Callable[[A], "Maybe[B]"]) -> "_Nothing":  # pylint: disable=unused-argument
        return Nothing

    @property
    def is_just(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def __repr__(self):
        """String representation of Nothing."""
        return "Nothing"

# singleton instance
Nothing: _Nothing = _Nothing.NOTHING


@dataclass(frozen=True)
class Just[A]:
    """
    A present value. Just(None) is present; only Nothing means absent.
    """
    a: A

    def map(self, f: Callable[[A], B]) -> "Just[B]":
        return Just(f(self.a))

    def __rand__(self, other: Callable[[A], B]) -> "Just[B]":
        """Defines the right-hand side of the map operation."""
        return self.map(other)

    def __rshift__(self, m: Callable[[A], Maybe[B]]) -> Maybe[B]:
        """Chains computations by passing the value inside Just to m."""
        return self.bind(m)

    def bind(self, m: Callable[[A], Maybe[B]]) -> Maybe[B]:
        return m(self.a)

    @property
    def is_just(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    def __repr__(self):
        """String representation of the Just."""
        return f"Just({self.a!r})"


def from_maybe(default: A, m: Maybe[A]) -> A:
    """Extracts the value from a Maybe, or returns a default value."""
    match m:
        case Just(value):
            return value
        case _:
            return default


def from_optional(x: A | None) -> Maybe[A]:
    """
    Lifts a value that uses None for absence into a Maybe.
    Only use where None can never be a legitimate focus value.
    """
    return Nothing if x is None else Just(x)
