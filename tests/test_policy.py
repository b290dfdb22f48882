"""
Tests for the structeq.policy file.
"""

import pytest
from structeq.policy import ComparisonPolicy, comparison_defaults, get_default_policy


def test_defaults():
    policy = ComparisonPolicy()
    assert policy.treat_null_and_empty_as_same is True
    assert policy.depth == -1
    assert policy.excluded_origin is None
    assert policy.excluded_names == ('has_errors',)
    assert get_default_policy() == policy


def test_validation():
    with pytest.raises(TypeError):
        ComparisonPolicy(treat_null_and_empty_as_same=1)
    with pytest.raises(TypeError):
        ComparisonPolicy(depth=False)
    with pytest.raises(TypeError):
        ComparisonPolicy(depth=1.5)
    with pytest.raises(TypeError):
        ComparisonPolicy(excluded_origin=object())
    with pytest.raises(TypeError):
        ComparisonPolicy(excluded_names='has_errors')
    with pytest.raises(TypeError):
        ComparisonPolicy(excluded_names=[1, 2])

    assert ComparisonPolicy(excluded_names=['a', 'b']).excluded_names == ('a', 'b')
    assert hash(ComparisonPolicy(excluded_names=['a'])) == hash(ComparisonPolicy(excluded_names=('a',)))


def test_comparison_defaults():
    """Defaults are swapped out inside the context manager and always put back, even on errors"""
    original = get_default_policy()

    with comparison_defaults(depth=2) as outer:
        assert get_default_policy() is outer and outer.depth == 2
        with comparison_defaults(treat_null_and_empty_as_same=False) as inner:
            assert inner.depth == 2 and inner.treat_null_and_empty_as_same is False
        assert get_default_policy() is outer
    assert get_default_policy() is original

    with pytest.raises(ValueError):
        with comparison_defaults(depth=5):
            raise ValueError()
    assert get_default_policy() is original

    with pytest.raises(TypeError):
        with comparison_defaults(depth='deep'):
            pass
    assert get_default_policy() is original
