"""The common vertex type and the attribute slots it is bound to."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


class VertexAttribute(enum.IntEnum):
    """Attribute locations shared by shaders and vertex buffers."""

    POSITION = 0
    TEX_COORD = 1
    COLOR = 2
    NORMAL = 3


def _components(value: Optional[Sequence[float]], size: int, default: float) -> Tuple[float, ...]:
    if value is None:
        return (default,) * size
    result = tuple(float(v) for v in value)
    if len(result) != size:
        raise ValueError(f"expected {size} components, got {len(result)}")
    return result


@dataclass(frozen=True, init=False)
class Vertex:
    """A vertex with position, texture coordinate, colour and normal.

    A vertex made without arguments is all zeros; one made with a position
    but no colour is white.
    """

    position: Tuple[float, float, float]
    tex_coord: Tuple[float, float]
    color: Tuple[float, float, float, float]
    normal: Tuple[float, float, float]

    def __init__(
        self,
        position: Optional[Sequence[float]] = None,
        normal: Optional[Sequence[float]] = None,
        tex_coord: Optional[Sequence[float]] = None,
        color: Optional[Sequence[float]] = None,
    ) -> None:
        if color is None and position is None:
            color_default = 0.0
        else:
            color_default = 1.0
        object.__setattr__(self, "position", _components(position, 3, 0.0))
        object.__setattr__(self, "normal", _components(normal, 3, 0.0))
        object.__setattr__(self, "tex_coord", _components(tex_coord, 2, 0.0))
        object.__setattr__(self, "color", _components(color, 4, color_default))