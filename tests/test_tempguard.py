import types

import pytest

from mysteryengine.tempguard import TempGuard


class Holder:
    def __init__(self, value):
        self.value = value


def test_set_changes_value_inside_block():
    holder = Holder("old")
    with TempGuard(holder, "value") as guard:
        guard.set("new")
        assert holder.value == "new"


def test_value_restored_after_block():
    holder = Holder(1)
    with TempGuard(holder, "value") as guard:
        guard.set(2)
        guard.set(3)
    assert holder.value == 1


def test_value_restored_after_exception():
    holder = Holder("keep")
    with pytest.raises(RuntimeError):
        with TempGuard(holder, "value") as guard:
            guard.set("temporary")
            raise RuntimeError("boom")
    assert holder.value == "keep"


def test_saved_holds_original():
    holder = Holder([1, 2])
    guard = TempGuard(holder, "value")
    guard.set([])
    assert guard.saved == [1, 2]
    guard.restore()
    assert holder.value == [1, 2]


def test_works_on_module_like_namespace():
    ns = types.SimpleNamespace(on_idle=len)
    with TempGuard(ns, "on_idle") as guard:
        guard.set(str)
        assert ns.on_idle is str
    assert ns.on_idle is len


def test_missing_attribute_raises():
    with pytest.raises(AttributeError):
        TempGuard(Holder(0), "absent")


def test_nested_guards_unwind_in_order():
    holder = Holder("a")
    with TempGuard(holder, "value") as outer:
        outer.set("b")
        with TempGuard(holder, "value") as inner:
            inner.set("c")
            assert holder.value == "c"
        assert holder.value == "b"
    assert holder.value == "a"