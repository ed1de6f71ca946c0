"""
Composition of lenses and prisms into a single accessor.

A chain is turned into a tuple of Stage records once, when it is
composed; get and set then walk that tuple. Stages run left to right,
from the outermost container to the innermost focus.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable

from .errors import CompositionError
from .lens import Lens, Prism
from .maybe import Just, Maybe, Nothing

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Whether a stage always finds its focus."""
    LENS = "lens"
    PRISM = "prism"


@dataclass(frozen=True, slots=True)
class Stage:
    """
    One link of a composed chain.
    For LENS stages get returns the value, for PRISM stages a Maybe.
    """
    capability: Capability
    get: Callable[[Any], Any]
    set: Callable[[Any, Any], Any]


def to_stage(optic: Lens | Prism) -> Stage:
    """Tags an optic with its capability."""
    match optic:
        case Lens():
            return Stage(Capability.LENS, optic.get, optic.set)
        case Prism():
            return Stage(Capability.PRISM, optic.get, optic.set)
        case _:
            raise CompositionError(
                f"Cannot compose {type(optic).__name__}; "
                "expected a Lens or a Prism")


def get_chain(stages: tuple[Stage, ...], s: Any) -> Maybe[Any]:
    """
    Threads s through every stage, stopping at the first absent focus.
    """
    current = s
    for stage in stages:
        if stage.capability is Capability.LENS:
            current = stage.get(current)
            continue
        match stage.get(current):
            case Just(inner):
                current = inner
            case _:
                return Nothing
    return Just(current)


def set_chain(stages: tuple[Stage, ...], s: Any, v: Any, index: int = 0) -> Any:
    """
    Sets v at the end of the chain, copying only the containers on the
    path. Returns s itself when a prism stage finds nothing, or when
    nothing below this level changed.
    """
    stage = stages[index]
    if index == len(stages) - 1:
        return stage.set(s, v)
    if stage.capability is Capability.LENS:
        inner = stage.get(s)
    else:
        match stage.get(s):
            case Just(found):
                inner = found
            case _:
                return s
    updated = set_chain(stages, inner, v, index + 1)
    if updated is inner:
        return s
    return stage.set(s, updated)


def _lens_get_chain(stages: tuple[Stage, ...], s: Any) -> Any:
    for stage in stages:
        s = stage.get(s)
    return s


def _stages(optics: tuple, caller: str) -> tuple[Stage, ...]:
    if not optics:
        raise CompositionError(f"{caller} needs at least one stage")
    return tuple(to_stage(o) for o in optics)


def compose_lens(*lenses: Lens) -> Lens:
    """
    Composes lenses for updating nested structures. Every stage must be
    a Lens, so the result can never report absence.
    """
    stages = _stages(lenses, "compose_lens")
    for position, stage in enumerate(stages):
        if stage.capability is not Capability.LENS:
            raise CompositionError(
                f"compose_lens stage {position} is a Prism; "
                "use compose_prism for chains that can fail")
    if len(stages) == 1:
        return lenses[0]
    logger.debug("composed %d lens stages", len(stages))
    return Lens(get=partial(_lens_get_chain, stages),
                set=partial(set_chain, stages))


def compose_prism(*optics: Lens | Prism) -> Prism:
    """
    Composes any mix of lenses and prisms. The result is a Prism: get
    stops at the first absent focus and set is then a no-op.
    """
    stages = _stages(optics, "compose_prism")
    logger.debug("composed %d stages into a prism (%s)", len(stages),
                 ", ".join(stage.capability.value for stage in stages))
    return Prism(get=partial(get_chain, stages),
                 set=partial(set_chain, stages))


def compose(*optics: Lens | Prism) -> Lens | Prism:
    """
    Composes a chain, yielding a Lens when every stage is a Lens and a
    Prism as soon as any stage can fail.
    """
    stages = _stages(optics, "compose")
    if all(stage.capability is Capability.LENS for stage in stages):
        return compose_lens(*optics)
    return compose_prism(*optics)
