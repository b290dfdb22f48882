"""
Comparison policy and the process-wide defaults used when ``compare()`` kwargs are left unspecified
"""

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Optional


@dataclass(frozen=True)
class ComparisonPolicy:
    """
    Args:
        treat_null_and_empty_as_same (bool): if True, then None, an empty collection and a default value are all
            considered equal to one another. Defaults to True.
        depth (int): how many levels of nested objects to descend into. Negative means unbounded, 0 means only the
            immediate scalar and collection members. Defaults to -1.
        excluded_origin (Optional[type]): if not None, members declared on this class are never compared. Useful for
            housekeeping state on a common base class. Defaults to None.
        excluded_names (tuple[str, ...]): member names that are never compared. Defaults to ``('has_errors',)``.
    """
    treat_null_and_empty_as_same: bool = True
    depth: int = -1
    excluded_origin: 'Optional[type]' = None
    excluded_names: 'tuple[str, ...]' = ('has_errors',)

    def __post_init__(self):
        if not isinstance(self.treat_null_and_empty_as_same, bool):
            raise TypeError("`treat_null_and_empty_as_same` must be bool, not %s"
                % repr(type(self.treat_null_and_empty_as_same).__name__))
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise TypeError("`depth` must be int, not %s" % repr(type(self.depth).__name__))
        if self.excluded_origin is not None and not isinstance(self.excluded_origin, type):
            raise TypeError("`excluded_origin` must be a class or None, not %s"
                % repr(type(self.excluded_origin).__name__))

        # Accept any iterable of names, but always store a tuple so policies stay hashable
        names = self.excluded_names
        if isinstance(names, str) or not isinstance(names, Iterable):
            raise TypeError("`excluded_names` must be an iterable of str, not %s" % repr(type(names).__name__))
        names = tuple(names)
        if not all(isinstance(n, str) for n in names):
            raise TypeError("`excluded_names` must only contain str objects")
        object.__setattr__(self, 'excluded_names', names)


_DEFAULT_POLICY = ComparisonPolicy()


def get_default_policy() -> ComparisonPolicy:
    return _DEFAULT_POLICY


# Context manager to return _DEFAULT_POLICY back to what it was
class comparison_defaults:
    """Temporarily changes the defaults used for any ``compare()`` kwargs that aren't explicitly passed

    Usage::

        with comparison_defaults(treat_null_and_empty_as_same=False, depth=2):
            assert_equal(a, b)
    """
    def __init__(self, **overrides):
        self.overrides = overrides
        self._prev = None

    def __enter__(self):
        global _DEFAULT_POLICY
        self._prev = _DEFAULT_POLICY
        _DEFAULT_POLICY = dataclasses.replace(self._prev, **self.overrides)
        return _DEFAULT_POLICY

    def __exit__(self, *args):
        global _DEFAULT_POLICY
        _DEFAULT_POLICY = self._prev
