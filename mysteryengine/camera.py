"""A camera with orthographic, perspective or oblique projection."""

from __future__ import annotations

import enum
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from mysteryengine import glmath
from mysteryengine.transforms import Rotatable, Translatable

_HALF_SQRT2 = 0.70710678118654752440


class CameraType(enum.Enum):
    """The projection a camera uses."""

    ORTHOGRAPHIC = 0
    PERSPECTIVE = 1
    OBLIQUE = 2


def _ndc(value: Sequence[float]) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (4,):
        raise ValueError(f"expected four components, got {value!r}")
    return arr


def _dehomogenize(v: np.ndarray) -> np.ndarray:
    return v[:3] / v[3]


class Camera(Rotatable, Translatable):
    """A positioned, rotated camera whose matrices are rebuilt lazily.

    Rotation x is the pitch (clamped to [0, 180] when the view matrix is
    built), rotation y and z turn about the z axis. The projection parameters
    share storage the way the projection kinds overlap: the field of view and
    the view width live in one slot, the aspect ratio and the view height in
    another.
    """

    def __init__(self) -> None:
        super().__init__()
        self._type: Optional[CameraType] = None
        self._pv_changed = False
        self._p_needs_update = False
        # [fov | dim_x, aspect_ratio | dim_y, sheer_x, sheer_y]
        self._params = [0.0, 0.0, 0.0, 0.0]
        self._z_near = 0.0
        self._z_far = 0.0
        self._mat_p = glmath.identity()
        self._mat_v = glmath.identity()
        self._mat_pv = glmath.identity()

    # -- projection parameters -------------------------------------------

    @property
    def z_far(self) -> float:
        """Distance of the far clipping plane."""
        return self._z_far

    @z_far.setter
    def z_far(self, z: float) -> None:
        self._z_far = float(z)
        self._p_needs_update = True

    @property
    def z_near(self) -> float:
        """Distance of the near clipping plane."""
        return self._z_near

    @z_near.setter
    def z_near(self, z: float) -> None:
        self._z_near = float(z)
        self._p_needs_update = True

    @property
    def camera_type(self) -> Optional[CameraType]:
        """The projection kind, or ``None`` before one has been chosen."""
        return self._type

    @camera_type.setter
    def camera_type(self, value: CameraType) -> None:
        kind = CameraType(value)
        if kind is CameraType.ORTHOGRAPHIC:
            self._params[0], self._params[1] = 8.0, 3.0
        elif kind is CameraType.PERSPECTIVE:
            self._params[0], self._params[1] = 45.0, 1.0
        else:
            self._params[:] = [8.0, 6.0, _HALF_SQRT2, _HALF_SQRT2]
        self._z_far = 128.0
        self._z_near = 0.25
        self._type = kind
        self._p_needs_update = True

    @property
    def fov(self) -> float:
        """Vertical field of view in degrees, kept within [1, 179]."""
        return self._params[0]

    @fov.setter
    def fov(self, degree: float) -> None:
        self._params[0] = min(max(float(degree), 1.0), 179.0)
        self._p_needs_update = True

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height for the perspective projection."""
        return self._params[1]

    @aspect_ratio.setter
    def aspect_ratio(self, ratio: float) -> None:
        self._params[1] = float(ratio)
        self._p_needs_update = True

    def set_dim(self, x: float, y: float) -> None:
        """Set the full width and height of the orthographic or oblique view."""
        self._params[0] = float(x)
        self._params[1] = float(y)
        self._p_needs_update = True

    @property
    def dim_x(self) -> float:
        """Full view width."""
        return self._params[0]

    @property
    def dim_y(self) -> float:
        """Full view height."""
        return self._params[1]

    def set_sheer(self, a: float, b: float) -> None:
        """Set the oblique shear factors along x and y."""
        self._params[2] = float(a)
        self._params[3] = float(b)
        self._p_needs_update = True

    @property
    def sheer_x(self) -> float:
        """Oblique shear along x."""
        return self._params[2]

    @property
    def sheer_y(self) -> float:
        """Oblique shear along y."""
        return self._params[3]

    # -- matrices ----------------------------------------------------------

    @property
    def mat_p(self) -> np.ndarray:
        """The projection matrix."""
        if self._p_needs_update:
            self._update_mat_p()
        return self._mat_p.copy()

    @property
    def mat_v(self) -> np.ndarray:
        """The view matrix."""
        if self.position_changed or self.rotation_changed:
            self._update_mat_v()
        return self._mat_v.copy()

    @property
    def mat_pv(self) -> np.ndarray:
        """Projection times view."""
        self._ensure_mat_pv_updated()
        return self._mat_pv.copy()

    def _ensure_mat_pv_updated(self) -> None:
        if self._p_needs_update:
            self._update_mat_p()
        if self.position_changed or self.rotation_changed:
            self._update_mat_v()
        if self._pv_changed:
            self._mat_pv = self._mat_p @ self._mat_v
            self._pv_changed = False

    def _update_mat_v(self) -> None:
        rotation = self._rotation.copy()
        rotation[0] = min(max(rotation[0], 0.0), 180.0)
        self._rotation = rotation
        rx, ry, rz = rotation
        z_axis = (0.0, 0.0, 1.0)
        self._mat_v = (
            glmath.rotate(math.radians(-ry), z_axis)
            @ glmath.rotate(math.radians(-rx), (1.0, 0.0, 0.0))
            @ glmath.rotate(math.radians(-rz), z_axis)
            @ glmath.translate(-self._position)
        )
        self.position_changed = False
        self.rotation_changed = False
        self._pv_changed = True

    def _update_mat_p(self) -> None:
        kind = self._type
        if kind is CameraType.ORTHOGRAPHIC:
            x = self._params[0] * 0.5
            y = self._params[1] * 0.5
            self._mat_p = glmath.ortho(-x, x, -y, y, self._z_near, self._z_far)
        elif kind is CameraType.PERSPECTIVE:
            self._mat_p = glmath.perspective(
                math.radians(self._params[0]), self._params[1], self._z_near, self._z_far
            )
        elif kind is CameraType.OBLIQUE:
            x = self._params[0] * 0.5
            y = self._params[1] * 0.5
            shear = glmath.identity()
            shear[0, 2] = -self._params[2]
            shear[1, 2] = -self._params[3]
            self._mat_p = glmath.ortho(-x, x, -y, y, self._z_near, self._z_far) @ shear
        self._p_needs_update = False
        self._pv_changed = True

    # -- picking -------------------------------------------------------------

    def _require_type(self) -> CameraType:
        if self._type is None:
            raise ValueError("camera type is not set")
        return self._type

    def _view_axes(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        iv = np.linalg.inv(self.mat_v)
        forward = _dehomogenize(iv @ np.array([0.0, 0.0, -1.0, 1.0]))
        right = _dehomogenize(iv @ np.array([1.0, 0.0, 0.0, 1.0]))
        up = _dehomogenize(iv @ np.array([0.0, 1.0, 0.0, 1.0]))
        return forward, right, up

    def point_from_ndc_to_world(self, ndc: Sequence[float]) -> np.ndarray:
        """Map a point in normalised device coordinates back to world space."""
        return _dehomogenize(np.linalg.inv(self.mat_pv) @ _ndc(ndc))

    def direction_from_ndc_to_world(self, ndc: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(direction, start)`` of the world-space ray through ``ndc``.

        The direction is not normalised. Raises ValueError if no camera type is set.
        """
        kind = self._require_type()
        ndc = _ndc(ndc)
        if kind is CameraType.PERSPECTIVE:
            target = _dehomogenize(np.linalg.inv(self.mat_pv) @ ndc)
            return target - self.position, self.position
        if kind is CameraType.ORTHOGRAPHIC:
            forward, right, up = self._view_axes()
            direction = forward
        else:
            far_point = _dehomogenize(np.linalg.inv(self.mat_p) @ np.array([0.0, 0.0, 1.0, 1.0]))
            direction = far_point - self.position
            _, right, up = self._view_axes()
        half = self._params[0] / 2.0
        start = self.position + right * ndc[0] * half + up * ndc[1] * half
        return direction, start

    def direction_from_ndc_to_camera(self, ndc: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(direction, start)`` of the ray through ``ndc`` in camera coordinates.

        Camera coordinates here have y pointing forward. Raises ValueError if
        no camera type is set.
        """
        kind = self._require_type()
        ndc = _ndc(ndc)
        if kind is CameraType.PERSPECTIVE:
            ret = _dehomogenize(np.linalg.inv(self.mat_p) @ ndc)
            return np.array([ret[0], -ret[2], ret[1]]), np.zeros(3)
        half = self._params[0] / 2.0
        start = np.array([ndc[0] * half, ndc[1] * half, 0.0])
        if kind is CameraType.ORTHOGRAPHIC:
            return np.array([0.0, 1.0, 0.0]), start
        return np.array([-self._params[2], 1.0, -self._params[3]]), start