"""
Tests for the structeq.introspection and structeq.extraction files.
"""

import pytest
from dataclasses import dataclass, field, InitVar
from typing import ClassVar, Optional
from structeq.extraction import ABSENT, as_null, read_member
from structeq.introspection import MemberDescriptor, members


class _Base:
    has_errors: bool = False
    created: str = ''
    _hidden: int = 0


@dataclass
class _Item(_Base):
    name: str = ''
    count: Optional[int] = None
    tags: list[str] = field(default_factory=list)
    registry: ClassVar[dict] = {}
    seed: InitVar[int] = 0
    _private: int = 0

    @property
    def label(self) -> str:
        return '%s (%d)' % (self.name, self.count or 0)

    @property
    def _secret(self):
        return 1


@dataclass
class _Renamed(_Item):
    created: int = 0


class _Slotted:
    __slots__ = ('a', 'b', '_c')

    def __init__(self, a, b):
        self.a, self.b, self._c = a, b, None


class _Plain:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


class _Sized(_Plain):
    @property
    def size(self) -> int:
        return len(vars(self))


class _Faulty:
    @property
    def broken(self) -> int:
        raise RuntimeError("Already faulted")


def _names(ms):
    return [m.name for m in ms]


def test_member_order():
    """Base class annotations first, then subclass annotations, then properties. Private and class vars never show"""
    assert _names(members(_Item)) == ['has_errors', 'created', 'name', 'count', 'tags', 'label']


def test_member_details():
    found = {m.name: m for m in members(_Item)}
    assert found['has_errors'] == MemberDescriptor('has_errors', _Base, bool)
    assert found['count'].origin is _Item
    assert found['count'].value_type == Optional[int]
    assert found['tags'].value_type == list[str]
    assert found['label'].is_property and found['label'].value_type is str


def test_redeclared_member():
    """Re-declaring a member keeps its place but changes where it comes from"""
    ms = members(_Renamed)
    assert _names(ms) == ['has_errors', 'created', 'name', 'count', 'tags', 'label']
    assert ms[1].origin is _Renamed and ms[1].value_type is int


def test_exclusions():
    assert _names(members(_Item, excluded_origin=_Base)) == ['name', 'count', 'tags', 'label']
    assert _names(members(_Item, excluded_names=['has_errors', 'label'])) == ['created', 'name', 'count', 'tags']
    assert _names(members(_Renamed, excluded_origin=_Base)) == ['created', 'name', 'count', 'tags', 'label']


def test_stable():
    assert members(_Item) == members(_Item)


def test_fallbacks():
    assert _names(members(_Slotted)) == ['a', 'b']
    assert _names(members(_Plain, instances=[_Plain(x=1, _y=2), None, _Plain(z=3, x=4)])) == ['x', 'z']
    assert members(_Plain) == ()
    assert members(object) == ()


def test_properties_with_attributes():
    """Attributes stored on instances are still members when the class only declares properties"""
    ms = members(_Sized, instances=[_Sized(x=1), _Sized(y=2)])
    assert _names(ms) == ['x', 'y', 'size']
    assert ms[0].origin is _Sized and not ms[0].is_property
    assert ms[2].is_property and ms[2].value_type is int
    assert _names(members(_Sized)) == ['size']


def test_not_a_class():
    with pytest.raises(TypeError):
        members(_Item())


def test_read_member():
    item = _Item('pen', 3)
    found = {m.name: m for m in members(_Item)}
    assert read_member(item, found['name']) == 'pen'
    assert read_member(item, found['label']) == 'pen (3)'
    assert read_member(None, found['name']) is ABSENT


def test_read_failures():
    """Reading a member that raises gives ABSENT, which is handled just like None"""
    broken = members(_Faulty)[0]
    assert read_member(_Faulty(), broken) is ABSENT
    assert read_member(_Item(), MemberDescriptor('missing', _Item)) is ABSENT

    assert as_null(ABSENT) is None
    assert as_null(0) == 0
    assert not ABSENT
    assert repr(ABSENT) == '<absent>'
