"""
Functional array helpers over lists and tuples.

Every helper returns a new sequence of the same kind as its input and
leaves the input untouched.
"""
from collections.abc import Sequence
from functools import partial
from typing import TypeVar

from .lens import Prism
from .maybe import Just, Maybe, Nothing

A = TypeVar("A")
Q = TypeVar("Q", list, tuple)


def _like(seq: Q, items) -> Q:
    """Builds a sequence of the same kind as seq."""
    return list(items) if isinstance(seq, list) else tuple(items)

def _in_bounds(seq: Sequence, n: int) -> bool:
    return 0 <= n < len(seq)


def _get_index(n: int, seq: Sequence[A]) -> Maybe[A]:
    return Just(seq[n]) if _in_bounds(seq, n) else Nothing

def _set_index(n: int, seq: Q, v) -> Q:
    if not _in_bounds(seq, n):
        return seq
    copy = list(seq)
    copy[n] = v
    return _like(seq, copy)

def index(n: int) -> Prism:
    """
    A prism on position n of a list or tuple. Absent when n is negative
    or past the end; setting an absent position returns the sequence
    unchanged.
    """
    return Prism(get=partial(_get_index, n), set=partial(_set_index, n))


def push(seq: Q, *items) -> Q:
    """Appends items to the end of the sequence."""
    return _like(seq, (*seq, *items))

def unshift(seq: Q, *items) -> Q:
    """Prepends items to the front of the sequence."""
    return _like(seq, (*items, *seq))

def pop(seq: Q) -> tuple[Maybe, Q]:
    """
    Removes the last element.
    Returns (Just(last), rest), or (Nothing, seq) for an empty sequence.
    """
    if not seq:
        return Nothing, seq
    return Just(seq[-1]), seq[:-1]

def shift(seq: Q) -> tuple[Maybe, Q]:
    """
    Removes the first element.
    Returns (Just(first), rest), or (Nothing, seq) for an empty sequence.
    """
    if not seq:
        return Nothing, seq
    return Just(seq[0]), seq[1:]

def splice(seq: Q, start: int, delete_count: int, *items) -> Q:
    """
    Removes delete_count elements from start and inserts items in their
    place. A negative start counts back from the end, as in JavaScript.
    """
    length = len(seq)
    if start < 0:
        start = max(length + start, 0)
    start = min(start, length)
    end = min(start + max(delete_count, 0), length)
    return _like(seq, (*seq[:start], *items, *seq[end:]))
