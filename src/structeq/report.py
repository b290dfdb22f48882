"""
Mismatch records and the path keys they are stored under
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, MutableMapping, Optional


logger = logging.getLogger(__name__)


class MismatchReason(Enum):
    UNEQUAL = 'Unequal'
    COLLECTION_LENGTH_MISMATCH = 'CollectionLengthMismatch'
    COLLECTION_ELEMENT_DIFFERS = 'CollectionElementDiffers'


@dataclass(frozen=True)
class MismatchRecord:
    """The first divergence found between two objects

    Attributes:
        path (str): dotted/indexed path from the root object to the diverging value, '' for the root itself
        value_a (Any): the value on the `a` side (after any null/empty substitution). Lengths for length mismatches
        value_b (Any): the value on the `b` side
        reason (MismatchReason): why the values were considered different
        detail (Optional[str]): extra human-readable info, eg: the first differing index in a collection
    """
    path: str
    value_a: 'Any'
    value_b: 'Any'
    reason: MismatchReason
    detail: 'Optional[str]' = None


def member_path(parent: str, name: str) -> str:
    return name if not parent else parent + '.' + name


def index_path(parent: str, index: 'Any') -> str:
    return '%s[%s]' % (parent, repr(index) if not isinstance(index, int) else index)


def record_mismatch(sink: 'MutableMapping[str, MismatchRecord]', path: str, value_a: 'Any', value_b: 'Any',
    reason: MismatchReason, detail: 'Optional[str]' = None) -> bool:
    """Stores a mismatch in `sink` and returns False, so handlers can ``return record_mismatch(...)``"""
    record = MismatchRecord(path, value_a, value_b, reason, detail)
    logger.debug("Mismatch at %r (%s): %r / %r", path, reason.value, value_a, value_b)
    sink[path] = record
    return False
