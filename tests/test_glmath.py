import math

import numpy as np
import pytest

from mysteryengine import glmath


def _apply(m, p):
    return m @ np.array([*p, 1.0])


def test_vec3_components():
    assert glmath.vec3(1, 2, 3).tolist() == [1.0, 2.0, 3.0]


def test_identity_leaves_points_alone():
    p = np.array([4.0, -2.0, 7.5, 1.0])
    assert np.allclose(glmath.identity() @ p, p)


def test_translate_moves_point():
    v = (1.5, -2.0, 3.0)
    p = (4.0, 5.0, 6.0)
    out = _apply(glmath.translate(v), p)
    assert np.allclose(out[:3], np.add(p, v))
    assert out[3] == pytest.approx(1.0)


def test_scale_multiplies_components():
    v = (2.0, 3.0, 0.5)
    p = (4.0, 5.0, 6.0)
    out = _apply(glmath.scale(v), p)
    assert np.allclose(out[:3], np.multiply(p, v))


def test_rotate_is_orthonormal():
    r = glmath.rotate(0.7, (1.0, 2.0, -0.5))
    assert np.allclose(r.T @ r, glmath.identity())
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_rotate_keeps_axis_fixed():
    axis = (0.3, -1.0, 2.0)
    r = glmath.rotate(1.2, axis)
    out = _apply(r, axis)
    assert np.allclose(out[:3], axis)


def test_rotate_back_and_forth_is_identity():
    axis = (1.0, 1.0, 0.0)
    product = glmath.rotate(0.9, axis) @ glmath.rotate(-0.9, axis)
    assert np.allclose(product, glmath.identity())


def test_rotate_quarter_turn_about_z():
    out = _apply(glmath.rotate(math.pi / 2, (0.0, 0.0, 1.0)), (1.0, 0.0, 0.0))
    assert np.allclose(out, [0.0, 1.0, 0.0, 1.0])


def test_rotate_axis_length_does_not_matter():
    assert np.allclose(glmath.rotate(0.4, (0.0, 0.0, 5.0)), glmath.rotate(0.4, (0.0, 0.0, 1.0)))


def test_rotate_zero_axis_raises():
    with pytest.raises(ValueError):
        glmath.rotate(1.0, (0.0, 0.0, 0.0))


def test_ortho_maps_box_corners_symmetrically():
    l, r, b, t, n, f = -3.0, 5.0, -1.0, 2.0, 0.5, 20.0
    m = glmath.ortho(l, r, b, t, n, f)
    low = _apply(m, (l, b, -n))
    high = _apply(m, (r, t, -f))
    assert np.allclose(low[:3], -high[:3])
    assert np.allclose(high[:3], np.ones(3))


def test_ortho_maps_box_center_to_origin():
    l, r, b, t, n, f = -3.0, 5.0, -1.0, 2.0, 0.5, 20.0
    m = glmath.ortho(l, r, b, t, n, f)
    center = _apply(m, ((l + r) / 2, (b + t) / 2, -(n + f) / 2))
    assert np.allclose(center[:3], np.zeros(3))


def test_perspective_near_and_far_planes_are_opposite():
    n, f = 0.25, 128.0
    m = glmath.perspective(math.radians(45.0), 1.5, n, f)
    near = _apply(m, (0.0, 0.0, -n))
    far = _apply(m, (0.0, 0.0, -f))
    assert near[3] == pytest.approx(n)
    assert far[3] == pytest.approx(f)
    assert near[2] / near[3] == pytest.approx(-(far[2] / far[3]))


def test_perspective_respects_aspect_ratio():
    aspect = 1.75
    m = glmath.perspective(math.radians(60.0), aspect, 0.1, 100.0)
    out = _apply(m, (aspect * 2.0, 2.0, -10.0))
    assert out[0] / out[3] == pytest.approx(out[1] / out[3])