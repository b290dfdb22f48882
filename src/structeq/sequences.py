"""
Compares two collections

Lengths are always checked first, and a length mismatch short-circuits before any element is looked at. After that,
collections made up entirely of scalars are compared in one go (order-sensitive, except for sets), and anything else is
walked in lock-step with each element pair handed back to the engine.
"""

import logging
import numpy as np
from collections import abc
from .classify import arrays_equal, both_numeric, is_directly_comparable, scalars_equal
from .errors import limit_str
from .report import MismatchReason, index_path, record_mismatch
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Callable, MutableMapping, Optional
    from .report import MismatchRecord

    # (path, element_a, element_b, element_type, depth) -> bool
    DescendFunc = Callable[[str, Any, Any, Any, int], bool]


logger = logging.getLogger(__name__)


def compare_collections(path: str, c1: 'Any', c2: 'Any', element_type: 'Any', treat_null_and_empty_as_same: bool,
    depth: int, sink: 'MutableMapping[str, MismatchRecord]', descend: 'DescendFunc') -> bool:
    """Compares two collections, either of which may be None

    Args:
        path (str): path of the collection from the root object
        c1 (Any): first collection, or None
        c2 (Any): second collection, or None
        element_type (Any): declared element type if known, passed on to `descend`
        treat_null_and_empty_as_same (bool): if True, None and an empty collection are equal
        depth (int): the depth the collection itself sits at. Non-scalar elements are only descended into if this is
            not 0, and are descended into at `depth - 1`
        sink (MutableMapping[str, MismatchRecord]): where to record the first mismatch
        descend (DescendFunc): compares a single pair of elements

    Returns:
        bool: True if no difference was found
    """
    c1, n1 = _measure(c1)
    c2, n2 = _measure(c2)

    # Both empty (or missing)
    if not n1 and not n2:
        if treat_null_and_empty_as_same or (c1 is not None and c2 is not None):
            return True
        return record_mismatch(sink, path, n1, n2, MismatchReason.COLLECTION_LENGTH_MISMATCH,
            "One collection is missing and null/empty are treated as different")

    if n1 != n2:
        return record_mismatch(sink, path, n1, n2, MismatchReason.COLLECTION_LENGTH_MISMATCH,
            "Collections had different lengths: %s != %s" % (_len_str(n1), _len_str(n2)))

    # Numeric/text numpy arrays can be checked all at once
    if _plain_array(c1) and _plain_array(c2):
        return _compare_arrays(path, c1, c2, sink)

    if isinstance(c1, abc.Mapping) and isinstance(c2, abc.Mapping):
        return _compare_mappings(path, c1, c2, element_type, depth, sink, descend)

    if _all_scalars(c1) and _all_scalars(c2):
        if isinstance(c1, abc.Set) and isinstance(c2, abc.Set):
            return _compare_scalar_sets(path, c1, c2, sink)
        return _compare_scalar_sequences(path, c1, c2, sink)

    # Complex elements, walk both in lock-step
    for i, (e1, e2) in enumerate(zip(c1, c2)):
        if not descend(index_path(path, i), e1, e2, element_type, depth):
            return False
    return True


def _compare_scalar_sequences(path, c1, c2, sink):
    for i, (e1, e2) in enumerate(zip(c1, c2)):
        if not scalars_equal(e1, e2):
            return record_mismatch(sink, path, c1, c2, MismatchReason.COLLECTION_ELEMENT_DIFFERS,
                "Values at index %d differ: %s != %s" % (i, limit_str(e1), limit_str(e2)))
    return True


def _compare_scalar_sets(path, c1, c2, sink):
    if set(c1) == set(c2):
        return True
    only_a, only_b = set(c1) - set(c2), set(c2) - set(c1)
    return record_mismatch(sink, path, c1, c2, MismatchReason.COLLECTION_ELEMENT_DIFFERS,
        "Sets differ. Only in a: %s, only in b: %s" % (limit_str(only_a), limit_str(only_b)))


def _compare_arrays(path, c1, c2, sink):
    if arrays_equal(c1, c2):
        return True

    if c1.shape != c2.shape:
        message = "Arrays had different shapes: %s != %s" % (c1.shape, c2.shape)
    else:
        differs = c1 != c2
        if both_numeric(c1, c2):
            differs &= ~(np.isnan(c1) & np.isnan(c2))
        idx = tuple(int(i) for i in np.argwhere(differs)[0])
        message = "Arrays first differ at index %s: %s != %s" % (idx, limit_str(c1[idx]), limit_str(c2[idx]))
    return record_mismatch(sink, path, c1, c2, MismatchReason.COLLECTION_ELEMENT_DIFFERS, message)


def _compare_mappings(path, c1, c2, element_type, depth, sink, descend):
    if c1.keys() != c2.keys():
        only_a = [k for k in c1 if k not in c2]
        only_b = [k for k in c2 if k not in c1]
        return record_mismatch(sink, path, c1, c2, MismatchReason.COLLECTION_ELEMENT_DIFFERS,
            "Mappings had different keys. Only in a: %s, only in b: %s" % (limit_str(only_a), limit_str(only_b)))

    for k in c1:
        if not descend(index_path(path, k), c1[k], c2[k], element_type, depth):
            return False
    return True


def _measure(c: 'Any') -> 'tuple[Any, Optional[int]]':
    """Returns (collection, length), materializing one-shot iterables. Collections that can't be read are absent"""
    if c is None:
        return None, None
    try:
        if not isinstance(c, (np.ndarray, abc.Mapping, abc.Set, abc.Sequence)):
            c = list(c)
        return c, len(c)
    except Exception as e:
        logger.debug("Could not measure collection of type %s, treating as absent: %r", type(c).__name__, e)
        return None, None


def _plain_array(c):
    return isinstance(c, np.ndarray) and c.dtype != object


def _all_scalars(c):
    return all(e is None or is_directly_comparable(e) for e in c)


def _len_str(n):
    return 'absent' if n is None else str(n)
