"""
Lenses built from key paths into nested records.

    prop("foo", "bar", "baz")

focuses o["foo"]["bar"]["baz"] (or the matching attributes for
dataclasses, pydantic models and named tuples). Setting through a path
shallow-copies exactly one container per key and leaves every sibling
branch shared with the original.
"""
import logging
from collections.abc import Callable, Hashable, Mapping, Sequence
from functools import partial, reduce
from typing import Any, TypeVar

from .errors import PathError
from .lens import Lens, Prism
from .maybe import Just, Maybe, Nothing
from .records import field_type, get_field, replace_field

logger = logging.getLogger(__name__)

O = TypeVar("O")  # record type at the root of a path

type Path = tuple[Hashable, ...]


def _get_path(keys: Path, o: Any) -> Any:
    try:
        return reduce(get_field, keys, o)
    except (LookupError, AttributeError, TypeError) as e:
        raise PathError("Cannot read path", path=keys,
                        key=_failing_key(keys, o), original=e) from e

def _set_path(keys: Path, o: Any, v: Any, idx: int = 0) -> Any:
    key = keys[idx]
    try:
        if idx == len(keys) - 1:
            return replace_field(o, key, v)
        inner = get_field(o, key)
    except (LookupError, AttributeError, TypeError, ValueError) as e:
        raise PathError("Cannot write path", path=keys, key=key,
                        original=e) from e
    return replace_field(o, key, _set_path(keys, inner, v, idx + 1))

def _failing_key(keys: Path, o: Any) -> Hashable | None:
    """Walks the path again to report the first key that cannot be read."""
    for key in keys:
        try:
            o = get_field(o, key)
        except (LookupError, AttributeError, TypeError):
            return key
    return None


def prop(*keys: Hashable) -> Lens:
    """
    Creates a lens that accesses/updates substructure via a key path.
    Every key is expected to be present; a missing key raises PathError
    on first use.
    """
    if not keys:
        raise PathError("A property path needs at least one key")
    path: Path = tuple(keys)
    logger.debug("built property lens for %s", path)
    return Lens(get=partial(_get_path, path), set=partial(_set_path, path))

def lens(field_name: str) -> Lens:
    """
    Create a lens for accessing a single named field.
    """
    return prop(field_name)


class LensFactory[O]:
    """
    Creates property lenses for a given record type, checking each key
    of the path against the declared fields as the lens is built.
    """

    def __init__(self, record_type: type[O] | Any):
        self.record_type = record_type

    def prop(self, *keys: Hashable) -> Lens[O, Any]:
        """Creates a lens that accesses/updates substructure via a keypath."""
        if not keys:
            raise PathError("A property path needs at least one key")
        declared = self.record_type
        for i, key in enumerate(keys):
            declared = field_type(declared, key, keys[:i + 1])
        return prop(*keys)

    def __repr__(self):
        return f"LensFactory({getattr(self.record_type, '__name__', self.record_type)})"

def lens_for(record_type: type[O] | Any) -> LensFactory[O]:
    """
    Returns a builder for lenses over record_type, e.g.
    lens_for(Order).prop("customer", "address", "city").
    """
    return LensFactory(record_type)


# --- One-shot helpers ---

def get_in(o: Any, keys: Sequence[Hashable]) -> Any:
    """Reads a nested value through a key path."""
    return prop(*keys).get(o)

def set_in(o: Any, keys: Sequence[Hashable], v: Any) -> Any:
    """
    Given a container, a key path and a value, deep updates that value by
    copying every container along the path.
    """
    return prop(*keys).set(o, v)

def update_in(o: Any, keys: Sequence[Hashable], f: Callable[[Any], Any]) \
    -> Any:
    """Applies f to the nested value at keys, copying along the path."""
    return prop(*keys).update(o, f)


# --- Optional mapping entries ---

def _get_key(key: Hashable, m: Mapping) -> Maybe[Any]:
    return Just(m[key]) if key in m else Nothing

def _set_key(key: Hashable, m: Mapping, v: Any) -> Mapping:
    if key not in m:
        return m
    return replace_field(m, key, v)

def at(key: Hashable) -> Prism[Mapping, Any]:
    """
    A prism on an optional mapping entry. Absent when the key is missing;
    setting a missing key leaves the mapping unchanged.
    """
    return Prism(get=partial(_get_key, key), set=partial(_set_key, key))
