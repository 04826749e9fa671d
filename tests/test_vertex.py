import pytest

from mysteryengine.vertex import Vertex, VertexAttribute


def test_attribute_locations():
    assert VertexAttribute(0) is VertexAttribute.POSITION
    assert VertexAttribute(1) is VertexAttribute.TEX_COORD
    assert VertexAttribute(2) is VertexAttribute.COLOR
    assert VertexAttribute(3) is VertexAttribute.NORMAL
    assert [int(a) for a in VertexAttribute] == [0, 1, 2, 3]
    with pytest.raises(ValueError):
        VertexAttribute(4)


def test_default_vertex_is_all_zero():
    v = Vertex()
    assert v.position == (0.0, 0.0, 0.0)
    assert v.normal == (0.0, 0.0, 0.0)
    assert v.tex_coord == (0.0, 0.0)
    assert v.color == (0.0, 0.0, 0.0, 0.0)


def test_position_only_is_white():
    v = Vertex((1, 2, 3))
    assert v.position == (1.0, 2.0, 3.0)
    assert v.color == (1.0, 1.0, 1.0, 1.0)
    assert v.normal == (0.0, 0.0, 0.0)
    assert v.tex_coord == (0.0, 0.0)


def test_explicit_colour_kept():
    v = Vertex((0, 0, 0), color=(0.5, 0.25, 0.0, 1.0))
    assert v.color == (0.5, 0.25, 0.0, 1.0)


def test_all_fields():
    v = Vertex((1, 1, 1), normal=(0, 0, 1), tex_coord=(0.5, 0.5), color=(1, 0, 0, 1))
    assert v.normal == (0.0, 0.0, 1.0)
    assert v.tex_coord == (0.5, 0.5)
    assert v.color == (1.0, 0.0, 0.0, 1.0)


def test_equality():
    assert Vertex((1, 2, 3), tex_coord=(0, 1)) == Vertex((1.0, 2.0, 3.0), tex_coord=(0.0, 1.0))
    assert not Vertex((1, 2, 3)) == Vertex((1, 2, 4))


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Vertex((1, 2))
    with pytest.raises(ValueError):
        Vertex((1, 2, 3), tex_coord=(1, 2, 3))


def test_vertex_is_immutable():
    v = Vertex((1, 2, 3))
    with pytest.raises(AttributeError):
        v.position = (0.0, 0.0, 0.0)
    assert v.position == (1.0, 2.0, 3.0)