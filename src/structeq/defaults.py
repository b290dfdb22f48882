"""
Default-valued instances, used to stand in for None when null and empty are treated as the same
"""

import datetime
import logging
import uuid
import numpy as np
from enum import Enum
from .errors import DefaultConstructionError
from .pytypes import concrete_class
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Callable


logger = logging.getLogger(__name__)


def _first_enum_member(tp):
    try:
        return next(iter(tp))
    except StopIteration:
        raise DefaultConstructionError(tp, "enum has no members") from None


# Exact-type (or nearest base class) factories. Anything not in here gets called with no arguments
_DEFAULT_FACTORIES: 'dict[type, Callable[[type], Any]]' = {
    datetime.datetime: lambda tp: tp.min,
    datetime.date: lambda tp: tp.min,
    datetime.time: lambda tp: tp.min,
    datetime.timedelta: lambda tp: tp(0),
    uuid.UUID: lambda tp: tp(int=0),
    Enum: _first_enum_member,
}


def register_default(tp: type, factory: 'Callable[[type], Any]') -> None:
    """Registers how to build the default value of `tp` (and its subclasses)

    Args:
        tp (type): the type to register
        factory (Callable[[type], Any]): called with the actual type needing a default, returns the default value
    """
    if not isinstance(tp, type):
        raise TypeError("`tp` must be a class, not %s" % repr(type(tp).__name__))
    if not callable(factory):
        raise TypeError("`factory` must be callable, not %s" % repr(type(factory).__name__))
    _DEFAULT_FACTORIES[tp] = factory


def default_of(tp: 'Any') -> 'Any':
    """Returns a default-valued instance of `tp`

    `tp` may be a class or an annotation naming one (``Optional[int]``, ``list[str]``). Raises a
    ``DefaultConstructionError`` if no default can be built.
    """
    cls = concrete_class(tp)
    if cls is None:
        raise DefaultConstructionError(tp, "not a concrete class")

    factory = next((_DEFAULT_FACTORIES[k] for k in cls.__mro__ if k in _DEFAULT_FACTORIES), _call_no_args)
    try:
        return factory(cls)
    except DefaultConstructionError:
        raise
    except Exception as e:
        raise DefaultConstructionError(cls, "%s: %s" % (type(e).__name__, e)) from e


def _call_no_args(cls):
    logger.debug("Building default %s by calling it with no arguments", cls.__qualname__)
    return cls()


def default_like(value: 'Any', tp: 'Any' = None) -> 'Any':
    """Returns the default value standing in for a missing counterpart of the scalar `value`

    Built from `tp` if given, otherwise from the type of `value`. A few scalars take their default from the value
    itself instead: 0-d numpy arrays get the zero of their dtype, and classes have no default at all, so None is
    returned and the pair gets compared as-is.
    """
    if isinstance(value, np.ndarray):
        return np.zeros(value.shape, value.dtype)
    if isinstance(value, type):
        return None
    return default_of(type(value) if tp is None else tp)
