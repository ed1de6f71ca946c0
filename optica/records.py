"""
Per-container-kind field access and copy-on-write replacement.

Property paths delegate every read and every shallow copy to a
RecordAdapter picked by the container's type. Adapters registered in
RECORD_ADAPTERS take precedence over the built-in ones, which handle
pydantic models, dataclasses, named tuples, mappings, lists and tuples.
"""
import dataclasses
import logging
from collections.abc import Callable, Hashable, Mapping, MutableMapping, \
    Sequence
from dataclasses import dataclass
from typing import Any, get_args, get_origin, get_type_hints, is_typeddict

from pydantic import BaseModel

from .errors import PathError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordAdapter:
    """
    How to read one field of a container and how to build a shallow copy
    with one field replaced. replace must not mutate its argument.
    """
    get: Callable[[Any, Hashable], Any]
    replace: Callable[[Any, Hashable, Any], Any]


RECORD_ADAPTERS: dict[type, RecordAdapter] = {}

def register_record(record_type: type,
                    get: Callable[[Any, Hashable], Any],
                    replace: Callable[[Any, Hashable, Any], Any]) \
    -> RecordAdapter:
    """
    Registers how to read and copy-update instances of record_type
    (and its subclasses). Replaces any earlier registration.
    """
    adapter = RecordAdapter(get, replace)
    RECORD_ADAPTERS[record_type] = adapter
    logger.debug("registered record adapter for %s", record_type.__name__)
    return adapter

def recorddef(record_type: type) -> Callable[[type], type]:
    """
    Decorator for adapter classes
    The decorated class supplies get and replace as static methods
    and is registered for record_type
    """
    def decorator(cls: type) -> type:
        register_record(record_type, cls.get, cls.replace)
        return cls
    return decorator


# --- Built-in adapters ---

def _replace_model(o: BaseModel, key: Hashable, v: Any) -> BaseModel:
    return o.model_copy(update={key: v})

def _replace_dataclass(o: Any, key: Hashable, v: Any) -> Any:
    return dataclasses.replace(o, **{str(key): v})

def _replace_namedtuple(o: Any, key: Hashable, v: Any) -> Any:
    if isinstance(key, int):
        key = o._fields[key]
    return o._replace(**{key: v})

def _get_namedtuple(o: Any, key: Hashable) -> Any:
    return o[key] if isinstance(key, int) else getattr(o, str(key))

def _replace_mapping(o: Mapping, key: Hashable, v: Any) -> Mapping:
    if isinstance(o, MutableMapping):
        copy = o.copy() if hasattr(o, "copy") else dict(o)
        copy[key] = v
        return copy
    return type(o)({**o, key: v})

def _replace_sequence(o: Sequence, key: Hashable, v: Any) -> Sequence:
    if not isinstance(key, int):
        raise TypeError(f"sequence index must be an int, not {key!r}")
    copy = list(o)
    copy[key] = v
    if type(o) is list:
        return copy
    return type(o)(copy)

def _get_item(o: Any, key: Hashable) -> Any:
    return o[key]

def _get_attr(o: Any, key: Hashable) -> Any:
    return getattr(o, str(key))


MODEL_ADAPTER = RecordAdapter(_get_attr, _replace_model)
DATACLASS_ADAPTER = RecordAdapter(_get_attr, _replace_dataclass)
NAMEDTUPLE_ADAPTER = RecordAdapter(_get_namedtuple, _replace_namedtuple)
MAPPING_ADAPTER = RecordAdapter(_get_item, _replace_mapping)
SEQUENCE_ADAPTER = RecordAdapter(_get_item, _replace_sequence)


def _is_namedtuple(o: Any) -> bool:
    return isinstance(o, tuple) and hasattr(o, "_fields")

def adapter_for(o: Any) -> RecordAdapter | None:
    """
    Finds the adapter for a container: registered adapters first,
    walking the MRO, then the built-in kinds.
    """
    for cls in type(o).__mro__:
        if cls in RECORD_ADAPTERS:
            return RECORD_ADAPTERS[cls]
    match o:
        case BaseModel():
            return MODEL_ADAPTER
        case _ if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return DATACLASS_ADAPTER
        case _ if _is_namedtuple(o):
            return NAMEDTUPLE_ADAPTER
        case Mapping():
            return MAPPING_ADAPTER
        case list() | tuple():
            return SEQUENCE_ADAPTER
        case _:
            return None


def _require_adapter(o: Any, key: Hashable) -> RecordAdapter:
    adapter = adapter_for(o)
    if adapter is None:
        raise PathError(f"No record adapter for {type(o).__name__}",
                        key=key)
    return adapter

def get_field(o: Any, key: Hashable) -> Any:
    """Reads one field of a container."""
    return _require_adapter(o, key).get(o, key)

def replace_field(o: Any, key: Hashable, v: Any) -> Any:
    """Returns a shallow copy of o with one field replaced."""
    return _require_adapter(o, key).replace(o, key, v)


# --- Declared field types, for checking paths when they are built ---

class _Unknown:
    """Marks a type that cannot be introspected; checking stops there."""

UNKNOWN: Any = _Unknown()

def _hints(record_type: type) -> dict[str, Any] | None:
    try:
        return get_type_hints(record_type)
    except (NameError, TypeError):
        return None

def declared_fields(record_type: Any) -> Mapping[str, Any] | None:
    """
    Field name -> declared type for record types, or None when the type
    does not declare a fixed set of fields.
    """
    if get_origin(record_type) is not None or not isinstance(record_type, type):
        return None
    if issubclass(record_type, BaseModel):
        return {name: info.annotation
                for name, info in record_type.model_fields.items()}
    if dataclasses.is_dataclass(record_type):
        hints = _hints(record_type) or {}
        return {f.name: hints.get(f.name, UNKNOWN)
                for f in dataclasses.fields(record_type)}
    if issubclass(record_type, tuple) and hasattr(record_type, "_fields"):
        hints = _hints(record_type) or {}
        return {name: hints.get(name, UNKNOWN) for name in record_type._fields}
    if is_typeddict(record_type):
        return _hints(record_type)
    return None

def field_type(record_type: Any, key: Hashable, path: Sequence[Hashable] = ()) \
    -> Any:
    """
    Declared type of record_type's field named key.
    Raises PathError when record_type declares its fields and key is not
    one of them; returns UNKNOWN when nothing can be checked.
    """
    if record_type is UNKNOWN or record_type is Any:
        return UNKNOWN
    fields = declared_fields(record_type)
    if fields is not None:
        if key not in fields:
            raise PathError(
                f"{record_type.__name__} has no field {key!r}",
                path=path, key=key)
        return fields[key]
    origin, args = get_origin(record_type), get_args(record_type)
    if origin in (dict, Mapping) and len(args) == 2:
        return args[1]
    if origin is list and args:
        if not isinstance(key, int):
            raise PathError("list positions must be ints", path=path, key=key)
        return args[0]
    if origin is tuple and args:
        if not isinstance(key, int):
            raise PathError("tuple positions must be ints", path=path, key=key)
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if not -len(args) <= key < len(args):
            raise PathError("tuple position out of range", path=path, key=key)
        return args[key]
    return UNKNOWN
