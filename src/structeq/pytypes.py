"""
Type tables and annotation helpers shared across the comparison engine
"""

import datetime
import numbers
import pathlib
import types
import typing
import uuid
import numpy as np
from collections import abc
from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Optional


NoneType = type(None)

# Built-in singletons other than None, only ever equal to themselves
SingletonObjects = (Ellipsis, NotImplemented)

# Types that never need structural decomposition. Order doesn't matter, these are only used with isinstance()
SCALAR_TYPES = (bool, np.bool_, numbers.Number, np.generic, str, bytes, bytearray, datetime.date, datetime.time,
    datetime.timedelta, datetime.tzinfo, Enum, uuid.UUID, pathlib.PurePath, type)

# Containers whose declared element type is their single type argument
_SINGLE_ARG_CONTAINERS = (list, set, frozenset, abc.Sequence, abc.MutableSequence, abc.Set, abc.MutableSet,
    abc.Iterable, abc.Collection, abc.Iterator)


def unwrap_optional(tp: 'Any') -> 'Any':
    """Returns the underlying type of an ``Optional[X]`` annotation (``X | None`` too), or `tp` itself otherwise"""
    args = typing.get_args(tp)
    if args and NoneType in args and _is_union(tp):
        rest = [a for a in args if a is not NoneType]
        if len(rest) == 1:
            return rest[0]
    return tp


def concrete_class(tp: 'Any') -> 'Optional[type]':
    """Returns the runtime class named by the annotation `tp`, or None if there isn't exactly one

    Handles Optional, subscripted generics (``list[int]`` -> ``list``) and plain classes. Unions of multiple types,
    ``Any``, ``object``, type variables and string forward references all give None.
    """
    tp = unwrap_optional(tp)
    if tp is typing.Any or tp is object:
        return None
    if isinstance(tp, type):
        return tp
    origin = typing.get_origin(tp)
    if isinstance(origin, type) and not _is_union(tp):
        return origin
    return None


def element_type_of(tp: 'Any') -> 'Optional[Any]':
    """Returns the declared element type of a collection annotation, or None if it can't be determined

    Only annotations with a single element parameter qualify, as well as homogeneous tuples (``tuple[X, ...]``).
    For mappings, the value type is returned since that is what gets descended into.
    """
    tp = unwrap_optional(tp)
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin is None or not args:
        return None

    if origin is tuple:
        return args[0] if len(args) == 2 and args[1] is Ellipsis else None
    if isinstance(origin, type) and issubclass(origin, abc.Mapping):
        return args[1] if len(args) == 2 else None
    if len(args) == 1 and isinstance(origin, type) and issubclass(origin, _SINGLE_ARG_CONTAINERS):
        return args[0]
    return None


def _is_union(tp: 'Any') -> bool:
    origin = typing.get_origin(tp)
    return origin is typing.Union or origin is types.UnionType
