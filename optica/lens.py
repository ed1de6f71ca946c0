"""
Lenses and prisms for reading and copy-updating substructure of
immutable values.

A Lens focuses a value that is always present; a Prism focuses a value
that may be absent, reporting it through Maybe. Both are frozen
dataclasses holding two pure functions, so they can be stored, shared
and reused freely.

Laws (preconditions on whoever writes the get/set pair, not checked):
    get(set(s, a)) == a
    set(s, get(s)) == s
For a Prism the first law holds only where the focus exists, and set
on an absent focus must return s itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, TypeVar

from .errors import CompositionError
from .maybe import Just, Maybe, Nothing, from_maybe

if TYPE_CHECKING:
    from .iso import Isomorphism

S = TypeVar("S")  # whole structure
A = TypeVar("A")  # focused value
B = TypeVar("B")


class LensSpec[S, A](Protocol):
    """Anything exposing a total get and a set, e.g. another Lens."""
    def get(self, s: S, /) -> A: ...
    def set(self, s: S, a: A, /) -> S: ...


class PrismSpec[S, A](Protocol):
    """Anything exposing a Maybe-returning get and a set."""
    def get(self, s: S, /) -> Maybe[A]: ...
    def set(self, s: S, a: A, /) -> S: ...


def _check_callable(spec, kind: str) -> None:
    for name in ("get", "set"):
        if not callable(getattr(spec, name, None)):
            raise TypeError(f"{kind} spec needs a callable '{name}', "
                            f"got {type(spec).__name__}")


@dataclass(frozen=True)
class Lens[S, A]:
    """
    Allows for focused access and modification of a mandatory value
    within a larger structure.
    """
    get: Callable[[S], A]  # function to get the field value
    set: Callable[[S, A], S]  # function to set the field value

    @classmethod
    def of(cls, spec: LensSpec[S, A]) -> Lens[S, A]:
        """Creates a Lens from any object with get/set functions."""
        _check_callable(spec, "Lens")
        return cls(get=spec.get, set=spec.set)

    def __call__(self, s: S) -> A:
        return self.get(s)

    def setter(self, a: A) -> Callable[[S], S]:
        """
        Given a value, returns a function which updates its argument
        to that value.
        """
        return lambda s: self.set(s, a)

    def update(self, s: S, f: Callable[[A], A]) -> S:
        """Applies f to the focused value and sets the result."""
        return self.set(s, f(self.get(s)))

    def updater(self, f: Callable[[A], A]) -> Callable[[S], S]:
        """Curried form of update."""
        return lambda s: self.update(s, f)

    def comp(self, *others: Lens | Prism) -> Lens | Prism:
        """
        Right-extends this lens with further stages. The result is a Lens
        when every stage is a Lens, otherwise a Prism.
        """
        if not others:
            raise CompositionError("Lens.comp needs at least one stage")
        from .compose import compose  # pylint: disable=import-outside-toplevel
        return compose(self, *others)

    def map(self, iso: Isomorphism[A, B]) -> Lens[S, B]:
        """Presents the focus as another type through an isomorphism."""
        from .iso import map as map_iso  # pylint: disable=import-outside-toplevel
        return map_iso(self, iso)

    def as_prism(self) -> Prism[S, A]:
        """The same accessor seen as a Prism whose focus is always present."""
        return Prism(get=lambda s: Just(self.get(s)), set=self.set)


@dataclass(frozen=True)
class Prism[S, A]:
    """
    Allows for focused access and modification of a value that may be
    absent. get reports absence as Nothing; set and update leave the
    structure untouched when the focus is absent.
    """
    get: Callable[[S], Maybe[A]]
    set: Callable[[S, A], S]

    @classmethod
    def of(cls, spec: PrismSpec[S, A]) -> Prism[S, A]:
        """Creates a Prism from any object with get/set functions."""
        _check_callable(spec, "Prism")
        return cls(get=spec.get, set=spec.set)

    def __call__(self, s: S) -> Maybe[A]:
        return self.get(s)

    def get_or(self, s: S, default: A) -> A:
        """Returns the focused value, or default when absent."""
        return from_maybe(default, self.get(s))

    def setter(self, a: A) -> Callable[[S], S]:
        """Curried form of set."""
        return lambda s: self.set(s, a)

    def update(self, s: S, f: Callable[[A], A]) -> S:
        """
        Applies f to the focused value and sets the result.
        f is never called when the focus is absent; s is returned as is.
        If f returns Nothing the focus stays as it was and s is returned.
        """
        match self.get(s):
            case Just(a):
                result = f(a)
                if result is Nothing:
                    return s
                return self.set(s, result)
            case _:
                return s

    def updater(self, f: Callable[[A], A]) -> Callable[[S], S]:
        """Curried form of update."""
        return lambda s: self.update(s, f)

    def update_maybe(self, s: S, f: Callable[[A], Maybe[A]]) -> S:
        """
        Like update, but f may decline to produce a value by returning
        Nothing, which leaves s unchanged.
        """
        match self.get(s):
            case Just(a):
                match f(a):
                    case Just(b):
                        return self.set(s, b)
                    case _:
                        return s
            case _:
                return s

    def comp(self, *others: Lens | Prism) -> Prism:
        """Right-extends this prism with further stages; always a Prism."""
        if not others:
            raise CompositionError("Prism.comp needs at least one stage")
        from .compose import compose_prism  # pylint: disable=import-outside-toplevel
        return compose_prism(self, *others)


# --- Function forms, for use in pipelines ---

def view(l: Lens[S, A] | Prism[S, A], s: S) -> A | Maybe[A]:
    """
    Get the focused value from a structure.
    """
    return l.get(s)

def set_(l: Lens[S, A] | Prism[S, A], a: A) -> Callable[[S], S]:
    """
    Returns a structure -> structure function setting the focus to a.
    """
    return l.setter(a)

def over(l: Lens[S, A] | Prism[S, A], f: Callable[[A], A]) \
    -> Callable[[S], S]:
    """
    Returns a structure -> structure function modifying the focus with f.
    """
    return l.updater(f)
