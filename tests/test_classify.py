"""
Tests for the structeq.classify file.
"""

import datetime
import numpy as np
import uuid
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import total_ordering
from pathlib import Path
from structeq.classify import (MemberKind, arrays_equal, classify, is_collection, is_directly_comparable, kind_of, register_scalar,
    scalars_equal, unregister_scalar)


class _Color(Enum):
    RED = 1
    BLUE = 2


@dataclass
class _Point:
    x: int = 0
    y: int = 0


@total_ordering
class _Version:
    def __init__(self, n):
        self.n = n

    def __eq__(self, other):
        return self.n == other.n

    def __lt__(self, other):
        return self.n < other.n


def test_scalars():
    """Everything with a built-in notion of equality is a scalar"""
    vals = [0, -3, 1.5, complex(1, 2), True, Decimal('1.1'), Fraction(1, 3), 'apples', '', b'bytes', bytearray(b'a'),
        datetime.date(2020, 1, 1), datetime.datetime(2020, 1, 1, 5), datetime.time(3), datetime.timedelta(days=2),
        _Color.RED, uuid.uuid4(), Path('a/b'), int, Ellipsis, NotImplemented, np.float32(2), np.int64(-1),
        np.bool_(True), np.array(5), _Version(3)]

    for v in vals:
        assert kind_of(v) is MemberKind.SCALAR, "Expected %r to be a scalar" % (v,)
        assert is_directly_comparable(v)
        assert not is_collection(v)


def test_collections():
    vals = [[], [1, 2], (), {1}, frozenset(), {'a': 1}, {}.keys(), range(3), iter([]), (x for x in []),
        np.array([1, 2]), np.zeros((2, 2))]

    for v in vals:
        assert kind_of(v) is MemberKind.COLLECTION, "Expected %r to be a collection" % (v,)
        assert is_collection(v)


def test_complex():
    for v in [_Point(), object()]:
        assert kind_of(v) is MemberKind.COMPLEX


def test_none():
    assert not is_directly_comparable(None)
    assert not is_collection(None)


def test_classify_pairs():
    """The side that isn't None decides, and a scalar on either side wins"""
    assert classify(1, None) is MemberKind.SCALAR
    assert classify(None, 'a') is MemberKind.SCALAR
    assert classify(None, [1]) is MemberKind.COLLECTION
    assert classify([1], 'a') is MemberKind.SCALAR
    assert classify(_Point(), None) is MemberKind.COMPLEX
    assert classify(_Point(), [1]) is MemberKind.COLLECTION


def test_register_scalar():
    assert kind_of(_Point()) is MemberKind.COMPLEX
    register_scalar(_Point)
    try:
        assert kind_of(_Point(1, 2)) is MemberKind.SCALAR
    finally:
        unregister_scalar(_Point)
    assert kind_of(_Point()) is MemberKind.COMPLEX


def test_scalars_equal():
    assert scalars_equal(1, 1.0)
    assert scalars_equal(np.int32(4), 4)
    assert scalars_equal(np.array(2.0), np.float64(2))
    assert scalars_equal(True, np.bool_(True))
    assert scalars_equal('a', 'a')

    assert not scalars_equal(True, 1)
    assert not scalars_equal(0, False)
    assert not scalars_equal(np.bool_(False), 0)
    assert not scalars_equal('a', b'a')
    assert not scalars_equal(_Color.RED, 1)


def test_nan_equal():
    assert scalars_equal(float('nan'), float('nan'))
    assert scalars_equal(np.float32('nan'), float('nan'))
    assert scalars_equal(complex('nan'), complex('nan'))
    assert scalars_equal(np.array(np.nan), np.array(np.nan))
    assert not scalars_equal(float('nan'), 1.0)

    assert arrays_equal(np.array([1.0, np.nan]), np.array([1.0, np.nan]))
    assert arrays_equal(np.array([1, 2]), np.array([1.0, 2.0]))
    assert arrays_equal(np.array(['a', 'b']), np.array(['a', 'b']))
    assert not arrays_equal(np.array([np.nan, 1.0]), np.array([1.0, np.nan]))
    assert not arrays_equal(np.array([1.0]), np.array([1.0, 1.0]))
