"""
Small function-composition helpers for chaining curried updaters.
"""
from functools import reduce
from typing import Callable, TypeVar

A = TypeVar('A')


def flow(*fns: Callable) -> Callable:
    """
    Composes functions left to right: flow(f, g)(x) == g(f(x)).
    Pairs naturally with Lens.setter / Lens.updater, which return
    container -> container functions.
    """
    return lambda x: reduce(lambda acc, f: f(acc), fns, x)

def comp(f: Callable, g: Callable) -> Callable:
    """
    Composes two functions f and g into a single function.
    """
    return lambda x: f(g(x))

def identity(x: A) -> A:
    """
    Returns the argument unchanged.
    """
    return x
