"""
Errors raised by the comparison engine

There are two separate families here. An ``EqualityError`` means the objects were compared successfully and found to
differ, and is only ever raised when the caller asked for it. An ``EqualityCheckingError`` means the comparison itself
could not be carried out, and is always raised.
"""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any
    from .report import MismatchRecord


_MAX_STR_LEN = 1000


def limit_str(a: 'Any', limit: int = _MAX_STR_LEN) -> str:
    """repr() of `a`, cut down to at most `limit` characters"""
    a_str = repr(a)
    return a_str if len(a_str) < limit else (a_str[:limit] + '...')


class EqualityError(AssertionError):
    """Error raised whenever a comparison finds a divergence and `raise_err=True` (or from ``assert_equal``)"""

    def __init__(self, record: 'MismatchRecord'):
        self.record = record
        message = "Values are not equal" if record.detail is None else record.detail
        super().__init__("Objects differ at %s (%s)\na: %s\nb: %s\nMessage: %s" %
            (repr(record.path) if record.path else 'the root object', record.reason.value,
             limit_str(record.value_a), limit_str(record.value_b), message))


class EqualityCheckingError(Exception):
    """Error raised whenever there is an unexpected problem attempting to check equality between two objects"""


class DefaultConstructionError(EqualityCheckingError):
    """A default-valued instance of a type was needed to stand in for a missing value, but could not be built"""

    def __init__(self, tp: 'Any', message: 'str | None' = None):
        self.type = tp
        name = tp.__name__ if isinstance(tp, type) else repr(tp)
        super().__init__("Could not construct a default value of type %s%s" %
            (repr(name), '' if message is None else ': ' + message))


class TypeMismatchError(EqualityCheckingError, TypeError):
    """The two top-level objects are not instances of the same type"""
