"""Base class for drawable, transformable 3D objects."""

from __future__ import annotations

import abc
import math
from typing import Dict, Tuple

import numpy as np

from mysteryengine import glmath
from mysteryengine.transforms import Rotatable, Scalable, Translatable


class Model(Rotatable, Scalable, Translatable, abc.ABC):
    """A drawable object with position, rotation and scale.

    Subclasses implement :meth:`draw`. The other hooks keep their values on
    the model so that subclasses can read them when drawing. Models are not
    copyable.
    """

    def __init__(self) -> None:
        super().__init__()
        self._waiting_for_quit = False
        self._mat_m = glmath.identity()
        self._color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
        self._outline_enabled = False
        self._parameters: Dict[int, float] = {}
        self._elapsed = 0.0

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def setup(self) -> bool:
        """Prepare the model for drawing; return whether it is usable."""
        return True

    def clear(self) -> None:
        """Release whatever :meth:`setup` acquired and forget stored settings."""
        self._parameters.clear()
        self._elapsed = 0.0

    def update(self, dt: float) -> None:
        """Advance the model by ``dt`` seconds."""
        self._elapsed += dt

    @abc.abstractmethod
    def draw(self, camera, shader) -> None:
        """Draw the model seen through ``camera`` with ``shader``."""

    def set_color(self, r: float, g: float, b: float, a: float) -> None:
        """Tint the model."""
        self._color = (float(r), float(g), float(b), float(a))

    def set_outline_enabled(self, enabled: bool) -> None:
        """Turn an outline on or off."""
        self._outline_enabled = bool(enabled)

    @property
    def color(self) -> Tuple[float, float, float, float]:
        """The last tint set with :meth:`set_color`."""
        return self._color

    @property
    def outline_enabled(self) -> bool:
        """Whether an outline has been requested."""
        return self._outline_enabled

    @property
    def elapsed(self) -> float:
        """Seconds accumulated by :meth:`update` since the last :meth:`clear`."""
        return self._elapsed

    def mark_waiting_for_quit(self) -> None:
        """Flag the model for removal."""
        self._waiting_for_quit = True

    @property
    def waiting_for_quit(self) -> bool:
        """Whether the model has been flagged for removal."""
        return self._waiting_for_quit

    def set_parameter(self, code: int, val: float) -> None:
        """Set a model-specific parameter identified by ``code``."""
        self._parameters[int(code)] = float(val)

    def parameter(self, code: int, default: float = 0.0) -> float:
        """The value last set for ``code``, or ``default``."""
        return self._parameters.get(int(code), default)

    def compute_matrix_default(self) -> None:
        """Rebuild the model matrix: translate, then rotate z·x·y, then scale."""
        rx, ry, rz = self._rotation
        rotation = (
            glmath.rotate(math.radians(rz), (0.0, 0.0, 1.0))
            @ glmath.rotate(math.radians(rx), (1.0, 0.0, 0.0))
            @ glmath.rotate(math.radians(ry), (0.0, 1.0, 0.0))
        )
        self._mat_m = glmath.translate(self._position) @ rotation @ glmath.scale(self._scale)

    @property
    def model_matrix(self) -> np.ndarray:
        """A copy of the last computed model matrix."""
        return self._mat_m.copy()