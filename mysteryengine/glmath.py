"""4x4 matrix helpers for 3D transforms.

Matrices act on column vectors (``matrix @ point``) and are indexed
``[row, column]``. Clip space follows the OpenGL convention: right-handed
eye space looking down -z, with depth mapped to [-1, 1].
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Return a three-component float vector."""
    return np.array([x, y, z], dtype=float)


def identity() -> np.ndarray:
    """Return the 4x4 identity matrix."""
    return np.eye(4)


def translate(v: Sequence[float]) -> np.ndarray:
    """Return a matrix that moves points by ``v``."""
    m = np.eye(4)
    m[:3, 3] = np.asarray(v, dtype=float)
    return m


def scale(v: Sequence[float]) -> np.ndarray:
    """Return a matrix that scales each axis by the matching component of ``v``."""
    m = np.eye(4)
    m[0, 0], m[1, 1], m[2, 2] = (float(c) for c in v)
    return m


def rotate(angle: float, axis: Sequence[float]) -> np.ndarray:
    """Return a matrix rotating by ``angle`` radians about ``axis`` (right-handed)."""
    a = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(a)
    if norm == 0.0:
        raise ValueError("rotation axis must not be zero")
    x, y, z = a / norm
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    m = np.eye(4)
    m[:3, :3] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return m


def ortho(left: float, right: float, bottom: float, top: float, near: float, far: float) -> np.ndarray:
    """Return an orthographic projection of the given view box."""
    m = np.eye(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a perspective projection; ``fovy`` is the vertical field of view in radians."""
    tan_half = math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[3, 2] = -1.0
    m[2, 3] = -(2.0 * far * near) / (far - near)
    return m