"""
Isomorphisms, and retyping a lens's focus through one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

from .function import comp, identity
from .lens import Lens

S = TypeVar("S")
T = TypeVar("T")
V = TypeVar("V")


@dataclass(frozen=True)
class Isomorphism[T, V]:
    """
    A mapping to/from one type to another. Used with map to create a lens
    that operates on one type via another.

    to and from_ are assumed to be inverses of each other; nothing
    checks this.
    """
    to: Callable[[T], V]
    from_: Callable[[V], T]

    def inverse(self) -> Isomorphism[V, T]:
        """The same mapping, run the other way."""
        return Isomorphism(to=self.from_, from_=self.to)

    def then[W](self, other: Isomorphism[V, W]) -> Isomorphism[T, W]:
        """Chains two isomorphisms: T -> V -> W and back."""
        return Isomorphism(to=comp(other.to, self.to),
                           from_=comp(self.from_, other.from_))

    @classmethod
    def identity(cls) -> Isomorphism[T, T]:
        return cls(to=identity, from_=identity)


def map(l: Lens[S, T], iso: Isomorphism[T, V]) -> Lens[S, V]:  # pylint: disable=redefined-builtin
    """
    Given a lens and an isomorphism from its focus type, returns a lens
    that reads and writes the other type. Storage stays with l.
    """
    return Lens(get=comp(iso.to, l.get),
                set=lambda s, v: l.set(s, iso.from_(v)))
