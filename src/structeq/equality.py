"""
Structural equality for plain data objects

Compares two instances of the same class member by member, without relying on the class's own __eq__ (plain data
holders often don't have a useful one). Under the default policy, None, empty collections and default values are all
interchangeable, so an object that was never filled in compares equal to one filled in with defaults.

Each member is classified as:
    - scalar: compared with '==' no matter how deep the comparison is allowed to go
    - collection: compared by length, then element by element (see :mod:`structeq.sequences`)
    - complex: recursed into, as long as the remaining depth isn't 0

The comparison stops at the first divergence, which is stored under its path from the root object
(eg: 'orders[2].address.city') in the optional mismatch sink.
"""

import dataclasses
import logging
from collections.abc import MutableMapping
from functools import partial
from .classify import MemberKind, classify, scalars_equal
from .defaults import default_like, default_of
from .errors import EqualityCheckingError, EqualityError, TypeMismatchError, limit_str
from .extraction import as_null, read_member
from .introspection import members
from .policy import ComparisonPolicy, get_default_policy
from .pytypes import concrete_class, element_type_of
from .report import MismatchReason, member_path, record_mismatch
from .sequences import compare_collections
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Optional
    from .report import MismatchRecord


logger = logging.getLogger(__name__)

# Marks compare() kwargs that weren't passed, so they can be taken from the current default policy instead
_UNSPECIFIED = object()


@dataclasses.dataclass
class _Context:
    policy: ComparisonPolicy
    sink: 'dict[str, MismatchRecord]'

    @property
    def treat_null_and_empty_as_same(self) -> bool:
        return self.policy.treat_null_and_empty_as_same


def compare(a: 'Any', b: 'Any', treat_null_and_empty_as_same: 'bool' = _UNSPECIFIED, depth: 'int' = _UNSPECIFIED,
    excluded_origin: 'Optional[type]' = _UNSPECIFIED, mismatch_sink: 'Optional[MutableMapping[str, MismatchRecord]]' = None,
    *, excluded_names: 'tuple[str, ...]' = _UNSPECIFIED, policy: 'Optional[ComparisonPolicy]' = None,
    cls: 'Optional[type]' = None, raise_err: 'bool' = False) -> 'bool':
    """
    Determines whether `a` and `b` are structurally equal.

    NOTE: any of `treat_null_and_empty_as_same`, `depth`, `excluded_origin` and `excluded_names` that are not passed
    are taken from `policy` if given, otherwise from the current defaults (see
    :func:`~structeq.policy.comparison_defaults`).

    Args:
        a (Any): object to check equality
        b (Any): object to check equality, must be of the same type as `a` (either may be None)
        treat_null_and_empty_as_same (bool): if True, then None, empty collections and default values are all treated
            as equal. Defaults to True.
        depth (int): how many levels of nested objects to recurse into. Negative for unbounded, 0 to only compare the
            immediate scalar and collection members. Each element of a collection of objects also uses up one level.
            Defaults to -1.
        excluded_origin (Optional[type]): if not None, members declared on this class (usually a shared base class
            carrying housekeeping state) are never compared. Defaults to None.
        mismatch_sink (Optional[MutableMapping[str, MismatchRecord]]): if not None, then the first divergence found is
            stored in here under its path from the root object. Left untouched if the objects are equal.
        excluded_names (tuple[str, ...]): member names that are never compared. Defaults to ``('has_errors',)``.
        policy (Optional[ComparisonPolicy]): policy to use instead of the current defaults.
        cls (Optional[type]): the type both objects are expected to be instances of. Defaults to the type of whichever
            object is not None.
        raise_err (bool): if True, then an ``EqualityError`` describing the divergence is raised instead of returning
            False. Defaults to False.

    Returns:
        bool: True if no divergence was found

    Raises:
        TypeMismatchError: if the objects are of different types (or not instances of `cls`)
        DefaultConstructionError: if a default value was needed to stand in for a missing one, but couldn't be built
        EqualityCheckingError: if anything else went wrong while comparing
    """
    policy = _resolve_policy(policy, treat_null_and_empty_as_same=treat_null_and_empty_as_same, depth=depth,
        excluded_origin=excluded_origin, excluded_names=excluded_names)
    if mismatch_sink is not None and not isinstance(mismatch_sink, MutableMapping):
        raise TypeError("`mismatch_sink` must be a MutableMapping or None, not %s" % repr(type(mismatch_sink).__name__))

    cls = _root_class(a, b, cls)
    logger.debug("Comparing %s objects with %s", 'None' if cls is None else cls.__qualname__, policy)

    # Mismatches go into a private sink first so the caller's is only ever touched with a single complete record
    ctx = _Context(policy, {})
    try:
        equal = _compare_root(a, b, cls, ctx)
    except EqualityCheckingError:
        raise
    except Exception as e:
        raise EqualityCheckingError("Could not determine equality between objects\na: %s\nb: %s" %
            (limit_str(a), limit_str(b))) from e

    if equal:
        return True

    record = next(iter(ctx.sink.values()))
    if mismatch_sink is not None:
        mismatch_sink[record.path] = record
    if raise_err:
        raise EqualityError(record)
    return False


def find_mismatch(a: 'Any', b: 'Any', **kwargs) -> 'Optional[MismatchRecord]':
    """Returns the first divergence between `a` and `b`, or None if they are equal. Takes the same kwargs as compare()"""
    sink = {}
    compare(a, b, mismatch_sink=sink, **kwargs)
    return next(iter(sink.values()), None)


def assert_equal(a: 'Any', b: 'Any', **kwargs) -> None:
    """Raises an ``EqualityError`` (an AssertionError) if `a` and `b` differ. Takes the same kwargs as compare()"""
    compare(a, b, raise_err=True, **kwargs)


def _resolve_policy(policy, **kwargs):
    if policy is None:
        policy = get_default_policy()
    elif not isinstance(policy, ComparisonPolicy):
        raise TypeError("`policy` must be a ComparisonPolicy or None, not %s" % repr(type(policy).__name__))

    overrides = {k: v for k, v in kwargs.items() if v is not _UNSPECIFIED}
    return dataclasses.replace(policy, **overrides) if overrides else policy


def _root_class(a, b, cls):
    """Checks both objects are of the same type and returns it"""
    present = [x for x in (a, b) if x is not None]

    if cls is None:
        if len(present) == 2 and type(a) is not type(b):
            raise TypeMismatchError("Cannot compare objects of different types: %s and %s" %
                (repr(type(a).__name__), repr(type(b).__name__)))
        return type(present[0]) if present else None

    if not isinstance(cls, type):
        raise TypeError("`cls` must be a class or None, not %s" % repr(type(cls).__name__))
    for x in present:
        if not isinstance(x, cls):
            raise TypeMismatchError("Expected instances of %s, got an object of type %s: %s" %
                (repr(cls.__name__), repr(type(x).__name__), limit_str(x)))
    return cls


def _compare_root(a, b, cls, ctx):
    if a is b:
        return True

    # Plain scalars and collections at the root go through the same path as members would
    if classify(a, b) is not MemberKind.COMPLEX:
        return _compare_values('', a, b, cls, ctx.policy.depth, ctx)

    if not ctx.treat_null_and_empty_as_same and (a is None or b is None):
        return record_mismatch(ctx.sink, '', a, b, MismatchReason.UNEQUAL,
            "One object is None and null/empty are treated as different")
    return _compare_object('', a, b, cls, ctx.policy.depth, ctx)


def _compare_object(path, a, b, cls, depth, ctx):
    """Compares every member of two instances of `cls` (either may be None), stopping at the first difference"""
    policy = ctx.policy
    for member in members(cls, policy.excluded_origin, policy.excluded_names, instances=(a, b)):
        v1 = as_null(read_member(a, member))
        v2 = as_null(read_member(b, member))
        if not _compare_values(member_path(path, member.name), v1, v2, member.value_type, depth, ctx):
            return False
    return True


def _compare_values(path, v1, v2, declared_type, depth, ctx):
    """Classifies a pair of member values and compares them accordingly"""
    if v1 is v2:
        return True

    kind = classify(v1, v2)
    if kind is MemberKind.SCALAR:
        return _compare_scalars(path, v1, v2, declared_type, ctx)

    if not ctx.treat_null_and_empty_as_same and (v1 is None or v2 is None):
        return record_mismatch(ctx.sink, path, v1, v2, MismatchReason.UNEQUAL,
            "One value is None and null/empty are treated as different")

    if kind is MemberKind.COLLECTION:
        return compare_collections(path, v1, v2, element_type_of(declared_type), ctx.treat_null_and_empty_as_same,
            depth, ctx.sink, partial(_compare_element, ctx=ctx))

    # Nested complex value
    if depth == 0:
        logger.debug("Depth exhausted, skipping nested member %r", path)
        return True

    if ctx.treat_null_and_empty_as_same:
        if v1 is None:
            v1 = default_of(_fill_type(declared_type, v2))
        elif v2 is None:
            v2 = default_of(_fill_type(declared_type, v1))

    nested_cls = _nested_class(v1, v2, declared_type)
    if nested_cls is None:
        return record_mismatch(ctx.sink, path, v1, v2, MismatchReason.UNEQUAL,
            "Values are of different types: %s and %s" % (repr(type(v1).__name__), repr(type(v2).__name__)))
    return _compare_object(path, v1, v2, nested_cls, depth - 1, ctx)


def _compare_element(path, e1, e2, element_type, depth, ctx):
    """Compares one pair of collection elements, `depth` being the depth of the collection holding them"""
    if e1 is e2:
        return True

    kind = classify(e1, e2)
    if kind is MemberKind.SCALAR:
        return _compare_scalars(path, e1, e2, element_type, ctx)

    if depth == 0:
        logger.debug("Depth exhausted, skipping element %r", path)
        return True

    if not ctx.treat_null_and_empty_as_same and (e1 is None or e2 is None):
        return record_mismatch(ctx.sink, path, e1, e2, MismatchReason.UNEQUAL,
            "One element is None and null/empty are treated as different")

    if kind is MemberKind.COLLECTION:
        return compare_collections(path, e1, e2, element_type_of(element_type), ctx.treat_null_and_empty_as_same,
            depth - 1, ctx.sink, partial(_compare_element, ctx=ctx))

    # The element type comes from the first element, or failing that from the declared element type
    item_type = type(e1) if e1 is not None else concrete_class(element_type)
    if item_type is None:
        logger.debug("Could not determine the type of element %r, skipping", path)
        return True
    if e2 is not None and not isinstance(e2, item_type):
        return record_mismatch(ctx.sink, path, e1, e2, MismatchReason.UNEQUAL,
            "Elements are of different types: %s and %s" % (repr(type(e1).__name__), repr(type(e2).__name__)))
    return _compare_object(path, e1, e2, item_type, depth - 1, ctx)


def _compare_scalars(path, v1, v2, declared_type, ctx):
    # A missing scalar stands in for its type's default value ('' for str, 0 for numbers, etc.)
    if ctx.treat_null_and_empty_as_same:
        if v1 is None:
            v1 = default_like(v2, _fill_type(declared_type, v2))
        elif v2 is None:
            v2 = default_like(v1, _fill_type(declared_type, v1))

    if not scalars_equal(v1, v2):
        return record_mismatch(ctx.sink, path, v1, v2, MismatchReason.UNEQUAL)
    return True


def _fill_type(declared_type, other):
    """The type to build a default from: the declared type if `other` fits it, otherwise the type of `other`"""
    declared = concrete_class(declared_type)
    if declared is not None and isinstance(other, declared):
        return declared
    return type(other)


def _nested_class(v1, v2, declared_type):
    if type(v1) is type(v2):
        return type(v1)
    declared = concrete_class(declared_type)
    if declared is not None and isinstance(v1, declared) and isinstance(v2, declared):
        return declared
    return None
