# ##### BEGIN GPL LICENSE BLOCK #####
#
#  This program is free software; you can redistribute it and/or
#  modify it under the terms of the GNU General Public License
#  as published by the Free Software Foundation; either version 2
#  of the License, or (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software Foundation,
#  Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
#
# ##### END GPL LICENSE BLOCK #####

import dataclasses
from typing import Protocol

from .datas import WorldPoint
from .errors import InvalidViewport


@dataclasses.dataclass(frozen=True)
class ViewportTransform:
    """Pan and zoom of the canvas stage: screen = world * scale + translation."""

    tx: float
    ty: float
    scale_x: float
    scale_y: float


class Viewport(Protocol):
    def get_transform(self) -> ViewportTransform: ...

    def snap(self, x: float, y: float) -> tuple[float, float]: ...


def to_world(
    viewport: Viewport, screen_x: float, screen_y: float, offset: float = 0
) -> WorldPoint:
    """Map a screen point to world space and shift it by `offset` on both axes.
    The transform is queried on every call, pan and zoom may change during a slow batch.
    """
    try:
        t = viewport.get_transform()
    except Exception as e:
        raise InvalidViewport(f"viewport transform unavailable: {e}") from e
    if t is None:
        raise InvalidViewport("viewport transform unavailable")
    if t.scale_x == 0 or t.scale_y == 0:
        raise InvalidViewport(f"viewport scale is zero ({t.scale_x}, {t.scale_y})")

    x = (screen_x - t.tx) / t.scale_x
    y = (screen_y - t.ty) / t.scale_y
    return WorldPoint(x + offset, y + offset)


class StaticViewport:
    """Viewport with a fixed transform and a square grid."""

    def __init__(self, tx=0.0, ty=0.0, scale=1.0, grid_size=100):
        self.transform = ViewportTransform(tx, ty, scale, scale)
        self.grid_size = grid_size

    def get_transform(self) -> ViewportTransform:
        return self.transform

    def pan(self, tx: float, ty: float):
        self.transform = dataclasses.replace(self.transform, tx=tx, ty=ty)

    def zoom(self, scale: float):
        self.transform = dataclasses.replace(self.transform, scale_x=scale, scale_y=scale)

    def snap(self, x: float, y: float) -> tuple[float, float]:
        """Snap to the nearest grid vertex. Grid size 0 disables snapping."""
        if not self.grid_size:
            return x, y
        size = self.grid_size
        return round(x / size) * size, round(y / size) * size
