"""
Enumerates the structural members of a class

A member is a public, named value that can be read off of an instance: annotated attributes (dataclass fields, plain
class annotations, model fields) and properties. Members are returned base-class-first, in declaration order, followed
by properties in the same order. Classes without annotations take their stored members from ``__slots__``, or failing
that from whatever attributes the instances being compared actually carry. These come before any properties.
"""

import dataclasses
import functools
import inspect
import logging
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Iterable, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberDescriptor:
    """A single structural member of a class

    Attributes:
        name (str): attribute name, unique within its class
        origin (type): the class in the MRO that declares this member
        value_type (Any): the member's annotation (resolved if possible), or None if it has none
        is_property (bool): True if this member is a property rather than a stored attribute
    """
    name: str
    origin: type
    value_type: 'Any' = None
    is_property: bool = False


def members(cls: type, excluded_origin: 'Optional[type]' = None, excluded_names: 'Iterable[str]' = (),
    instances: 'Iterable[Any]' = ()) -> 'tuple[MemberDescriptor, ...]':
    """Returns the ordered structural members of `cls`

    Args:
        cls (type): the class to get members of
        excluded_origin (Optional[type]): if not None, members declared on this class are dropped
        excluded_names (Iterable[str]): member names to drop
        instances (Iterable[Any]): instances of `cls` to fall back on for attribute names when the class itself
            has no annotations or slots. None's are ignored.

    Returns:
        tuple[MemberDescriptor, ...]: the members, in a stable order for the same arguments
    """
    if not isinstance(cls, type):
        raise TypeError("`cls` must be a class, not %s" % repr(type(cls).__name__))

    found = _declared_members(cls)
    # Properties alone don't cover what an instance stores, so its slots or attributes come first in that case
    if all(m.is_property for m in found):
        names = {m.name for m in found}
        stored = _slot_members(cls) or _instance_members(cls, instances)
        found = tuple(m for m in stored if m.name not in names) + found

    excluded_names = frozenset(excluded_names)
    return tuple(m for m in found if m.name not in excluded_names
        and (excluded_origin is None or m.origin is not excluded_origin))


@functools.lru_cache(maxsize=None)
def _declared_members(cls: type) -> 'tuple[MemberDescriptor, ...]':
    """Annotated attributes then properties of `cls`, computed once per class"""
    hints = _resolved_hints(cls)
    found: 'dict[str, MemberDescriptor]' = {}

    # Annotations first. Re-declaring an annotation in a subclass keeps its position, but moves its origin
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, annotation in _own_annotations(klass).items():
            value_type = hints.get(name, annotation)
            if name.startswith('_') or _is_class_var(value_type) or isinstance(value_type, dataclasses.InitVar):
                continue
            found[name] = MemberDescriptor(name, klass, value_type)

    # Then properties
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith('_') or not isinstance(attr, property):
                continue
            found[name] = MemberDescriptor(name, klass, _property_type(attr), is_property=True)

    logger.debug("Found %d members on %s", len(found), cls.__qualname__)
    return tuple(found.values())


def _slot_members(cls: type) -> 'tuple[MemberDescriptor, ...]':
    found = {}
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get('__slots__', ())
        for name in ((slots,) if isinstance(slots, str) else slots):
            if not name.startswith('_'):
                found[name] = MemberDescriptor(name, klass)
    return tuple(found.values())


def _instance_members(cls: type, instances: 'Iterable[Any]') -> 'tuple[MemberDescriptor, ...]':
    found = {}
    for inst in instances:
        if inst is None:
            continue
        try:
            names = vars(inst)
        except TypeError:
            continue
        for name in names:
            if not name.startswith('_') and name not in found:
                found[name] = MemberDescriptor(name, cls)
    return tuple(found.values())


def _own_annotations(klass: type) -> 'dict[str, Any]':
    try:
        return dict(inspect.get_annotations(klass))
    except Exception:
        logger.debug("Could not read annotations of %s", klass.__qualname__, exc_info=True)
        return {}


def _resolved_hints(cls: type) -> 'dict[str, Any]':
    # Forward references that can't be resolved just leave the raw annotations in place
    try:
        return typing.get_type_hints(cls)
    except Exception:
        logger.debug("Could not resolve type hints of %s", cls.__qualname__, exc_info=True)
        return {}


def _property_type(prop: property) -> 'Any':
    if prop.fget is None:
        return None
    try:
        return typing.get_type_hints(prop.fget).get('return')
    except Exception:
        return getattr(prop.fget, '__annotations__', {}).get('return')


def _is_class_var(annotation: 'Any') -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(('ClassVar', 'typing.ClassVar'))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar
