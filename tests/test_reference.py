import pytest

from mysteryengine.reference import Reference


class Target:
    def __init__(self, name):
        self.name = name

    def greet(self):
        return "hello " + self.name


def test_empty_by_default():
    ref = Reference()
    assert ref.get() is None
    assert not ref


def test_constructed_with_target():
    target = Target("a")
    ref = Reference(target)
    assert ref.get() is target
    assert bool(ref) is True


def test_attribute_access_forwards():
    ref = Reference(Target("world"))
    assert ref.name == "world"
    assert ref.greet() == "hello world"


def test_bind_rebinds():
    first, second = Target("first"), Target("second")
    ref = Reference(first)
    ref.bind(second)
    assert ref.get() is second
    assert ref.name == "second"


def test_reset_empties():
    ref = Reference(Target("x"))
    ref.reset()
    assert ref.get() is None
    assert not ref


def test_access_through_empty_reference_raises():
    ref = Reference()
    with pytest.raises(AttributeError):
        getattr(ref, "name")
    assert ref.get() is None
    assert bool(ref) is False


def test_missing_attribute_on_target_raises():
    target = Target("x")
    ref = Reference(target)
    with pytest.raises(AttributeError):
        getattr(ref, "missing")
    assert ref.get() is target
    assert ref.name == "x"


def test_reference_sees_later_changes_of_target():
    target = Target("before")
    ref = Reference(target)
    target.name = "after"
    assert ref.name == "after"