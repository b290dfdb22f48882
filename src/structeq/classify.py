"""
Decides how a pair of values gets compared

Every value falls into one of three kinds:
    - scalar: compared directly with '=='. Numbers, bools, text, dates, enums, numpy scalars, anything registered with
      register_scalar(), and anything that isn't iterable but defines its own ordering
    - collection: any other iterable. Text is never a collection, even though it iterates character by character
    - complex: everything else, compared member by member

The kind only depends on the type of the value, so it is computed once per type and cached.
"""

import functools
import numpy as np
from collections import abc
from enum import Enum
from .pytypes import SCALAR_TYPES, SingletonObjects
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any


class MemberKind(Enum):
    SCALAR = 'scalar'
    COLLECTION = 'collection'
    COMPLEX = 'complex'


_REGISTERED_SCALARS: 'list[type]' = []


def register_scalar(tp: type) -> type:
    """Registers `tp` (and its subclasses) to be compared with '==' instead of member by member

    Returns `tp`, so this can also be used as a class decorator.
    """
    if not isinstance(tp, type):
        raise TypeError("Can only register classes as scalars, not %s" % repr(type(tp).__name__))
    if tp not in _REGISTERED_SCALARS:
        _REGISTERED_SCALARS.append(tp)
        _kind_of_type.cache_clear()
    return tp


def unregister_scalar(tp: type) -> None:
    if tp in _REGISTERED_SCALARS:
        _REGISTERED_SCALARS.remove(tp)
        _kind_of_type.cache_clear()


@functools.lru_cache(maxsize=None)
def _kind_of_type(tp: type) -> MemberKind:
    if issubclass(tp, SCALAR_TYPES) or issubclass(tp, tuple(_REGISTERED_SCALARS)):
        return MemberKind.SCALAR
    if issubclass(tp, abc.Iterable):
        return MemberKind.COLLECTION
    # Types with their own ordering already know how to compare themselves
    if getattr(tp, '__lt__', None) is not object.__lt__:
        return MemberKind.SCALAR
    return MemberKind.COMPLEX


def kind_of(value: 'Any') -> MemberKind:
    """Returns the kind of a single non-None value"""
    if any(value is x for x in SingletonObjects):
        return MemberKind.SCALAR
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return MemberKind.SCALAR
    return _kind_of_type(type(value))


def is_directly_comparable(value: 'Any') -> bool:
    return value is not None and kind_of(value) is MemberKind.SCALAR


def is_collection(value: 'Any') -> bool:
    return value is not None and kind_of(value) is MemberKind.COLLECTION


def classify(v1: 'Any', v2: 'Any') -> MemberKind:
    """Classifies a pair of values where at most one is None

    The non-None side decides, and being scalar on either side wins over everything else. A scalar paired with a
    collection is therefore compared (unequally) as scalars.
    """
    if is_directly_comparable(v1) or is_directly_comparable(v2):
        return MemberKind.SCALAR
    if is_collection(v1) or is_collection(v2):
        return MemberKind.COLLECTION
    return MemberKind.COMPLEX


def both_numeric(a: 'np.ndarray', b: 'np.ndarray') -> bool:
    """True if NaN's can be looked for in both arrays"""
    return np.issubdtype(a.dtype, np.number) and np.issubdtype(b.dtype, np.number)


def arrays_equal(a: 'np.ndarray', b: 'np.ndarray') -> bool:
    """np.array_equal, where NaN's in the same places count as equal"""
    return bool(np.array_equal(a, b, equal_nan=both_numeric(a, b)))


def scalars_equal(a: 'Any', b: 'Any') -> bool:
    """'==' on two scalars, except that bools are never equal to non-bools, and NaN is equal to NaN"""
    if a is b:
        return True
    # Bool's are NOT int's, True == 1 does not hold here
    if isinstance(a, (bool, np.bool_)) != isinstance(b, (bool, np.bool_)):
        return False
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return arrays_equal(np.asarray(a), np.asarray(b))
    if _is_nan(a) and _is_nan(b):
        return True
    return bool(a == b)


def _is_nan(x):
    return isinstance(x, (float, complex, np.inexact)) and x != x
