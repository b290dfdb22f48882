from .classify import MemberKind, register_scalar, unregister_scalar
from .defaults import default_of, register_default
from .equality import assert_equal, compare, find_mismatch
from .errors import DefaultConstructionError, EqualityCheckingError, EqualityError, TypeMismatchError
from .introspection import MemberDescriptor, members
from .policy import ComparisonPolicy, comparison_defaults, get_default_policy
from .report import MismatchReason, MismatchRecord

__all__ = ['compare', 'find_mismatch', 'assert_equal', 'ComparisonPolicy', 'comparison_defaults', 'get_default_policy',
    'MismatchReason', 'MismatchRecord', 'EqualityError', 'EqualityCheckingError', 'DefaultConstructionError',
    'TypeMismatchError', 'MemberDescriptor', 'members', 'MemberKind', 'register_scalar', 'unregister_scalar',
    'default_of', 'register_default']
