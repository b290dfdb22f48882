"""
Reads member values off of instances

Reading a member must never make a comparison fail: properties are free to raise (eg: a stream that has already been
closed), and anything they raise is logged and treated as the member being absent.
"""

import logging
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any
    from .introspection import MemberDescriptor


logger = logging.getLogger(__name__)


class _Absent:
    """Marker for a member value that could not be read, or that was read off of a missing instance"""
    def __repr__(self):
        return '<absent>'

    def __bool__(self):
        return False


ABSENT = _Absent()


def read_member(instance: 'Any', member: 'MemberDescriptor') -> 'Any':
    """Returns the value of `member` on `instance`, or ``ABSENT`` if `instance` is None or the read raised"""
    if instance is None:
        return ABSENT
    try:
        return getattr(instance, member.name)
    except Exception as e:
        logger.debug("Could not read member %r of %s object, treating as absent: %r",
            member.name, type(instance).__name__, e)
        return ABSENT


def as_null(value: 'Any') -> 'Any':
    """Absent values are handled exactly like None from here on"""
    return None if value is ABSENT else value
