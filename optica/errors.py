"""
Exceptions raised for misuse of optics.

Absence of a prism focus is not an error and never raises; it is the
Nothing value from optica.maybe.
"""
from collections.abc import Hashable, Sequence


class OpticError(Exception):
    """
    Base class for optic construction and usage faults.
    """


class CompositionError(OpticError, ValueError):
    """
    Raised when a composition is built from invalid stages,
    e.g. no stages at all, or a Prism handed to compose_lens.
    """


class PathError(OpticError, LookupError):
    """
    Raised when a property path cannot be resolved against a container
    or a declared record type. Captures the full path, the offending key
    and the underlying exception, if any.
    """

    def __init__(self, message: str,
                 path: Sequence[Hashable] = (),
                 key: Hashable | None = None,
                 original: Exception | None = None):
        self.message = message
        self.path = tuple(path)
        self.key = key
        self.original = original
        super().__init__(message)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        dotted = ".".join(str(k) for k in self.path)
        cause = "" if self.original is None else \
            f" ({self.original.__class__.__name__}: {self.original})"
        return f"{self.message} [path: {dotted}, key: {self.key!r}]{cause}"
