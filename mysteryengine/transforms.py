"""Mixins for objects that can be moved, rotated, scaled or given an origin.

Each mixin keeps a ``*_changed`` flag that is set on every modification; the
code that consumes the transform clears it once it has used the new value.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def _vec3(value) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected three components, got {value!r}")
    return arr


class Originable:
    """Has an origin point, initially (0, 0, 0)."""

    def __init__(self) -> None:
        super().__init__()
        self._origin = np.zeros(3)
        self.origin_changed = True

    @property
    def origin(self) -> np.ndarray:
        """A copy of the origin."""
        return self._origin.copy()

    @origin.setter
    def origin(self, value) -> None:
        self._origin = _vec3(value)
        self.origin_changed = True


class Rotatable:
    """Has a rotation in degrees about x, y and z, initially zero."""

    def __init__(self) -> None:
        super().__init__()
        self._rotation = np.zeros(3)
        self.rotation_changed = True

    @property
    def rotation(self) -> np.ndarray:
        """A copy of the rotation angles in degrees."""
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value) -> None:
        self._rotation = _vec3(value)
        self.rotation_changed = True

    def rotate(self, drx: float, dry: float, drz: float) -> None:
        """Add the given angles to the rotation."""
        self._rotation = self._rotation + (drx, dry, drz)
        self.rotation_changed = True

    def normalize_rotation(self) -> None:
        """Bring every angle into [0, 360)."""
        wrapped = np.mod(self._rotation, 360.0)
        self._rotation = np.where(wrapped >= 360.0, wrapped - 360.0, wrapped)


class Scalable:
    """Has a per-axis scale, initially (1, 1, 1)."""

    def __init__(self) -> None:
        super().__init__()
        self._scale = np.ones(3)
        self.scale_changed = True

    @property
    def scaling(self) -> np.ndarray:
        """A copy of the scale factors."""
        return self._scale.copy()

    @scaling.setter
    def scaling(self, value) -> None:
        if np.ndim(value) == 0:
            self._scale = np.full(3, float(value))
        else:
            self._scale = _vec3(value)
        self.scale_changed = True

    def scale(self, *args: float) -> None:
        """Multiply the scale by one uniform factor or by three per-axis factors."""
        if len(args) == 1:
            factors = np.full(3, float(args[0]))
        elif len(args) == 3:
            factors = np.array(args, dtype=float)
        else:
            raise TypeError(f"scale() takes 1 or 3 factors, got {len(args)}")
        self._scale = self._scale * factors
        self.scale_changed = True


class Translatable:
    """Has a position, initially (0, 0, 0)."""

    def __init__(self) -> None:
        super().__init__()
        self._position = np.zeros(3)
        self.position_changed = True

    @property
    def position(self) -> np.ndarray:
        """A copy of the position."""
        return self._position.copy()

    @position.setter
    def position(self, value) -> None:
        self._position = _vec3(value)
        self.position_changed = True

    def place(
        self,
        *,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None,
    ) -> None:
        """Set only the given coordinates, leaving the others as they are."""
        if x is None and y is None and z is None:
            raise TypeError("place() needs at least one of x, y, z")
        pos = self._position.copy()
        for axis, value in enumerate((x, y, z)):
            if value is not None:
                pos[axis] = float(value)
        self._position = pos
        self.position_changed = True

    def translate(self, dpx: float, dpy: float, dpz: float) -> None:
        """Move by the given offsets."""
        self._position = self._position + (dpx, dpy, dpz)
        self.position_changed = True