""" imports for optica """
import logging

from .array import index, push, pop, shift, unshift, splice
from .compose import Capability, Stage, compose, compose_lens, compose_prism
from .errors import OpticError, CompositionError, PathError
from .function import flow, comp, identity
from .iso import Isomorphism, map #pylint: disable=redefined-builtin
from .lens import Lens, Prism, LensSpec, PrismSpec, view, set_, over
from .maybe import Maybe, Just, Nothing, from_maybe, from_optional
from .path import prop, lens, LensFactory, lens_for, at, get_in, set_in, \
    update_in
from .records import RecordAdapter, RECORD_ADAPTERS, register_record, \
    recorddef, adapter_for

logging.getLogger(__name__).addHandler(logging.NullHandler())
