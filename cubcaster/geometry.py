"""Shared constants, value types and small geometric helpers."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

TILE_SIZE = 1024
SCALE = 0.02
SCALE_SIZE = 20.4

WINDOW_WIDTH = 1500
WINDOW_HEIGHT = 1000

P_RAD = 4
ROT_SPEED = 10
MOVE_SPEED = 220

NUM_RAYS = WINDOW_WIDTH
FOV = 1.0471975512

NO_HIT = sys.float_info.max

SOLID_CELLS = frozenset("1C")

BLACK = 0x000000FF
WHITE = 0xFFFFFFFF
RED = 0xFF0000FF
LIME = 0x00FF00FF
BLUE = 0x0000FFFF
YELLOW = 0xFFFF00FF
CYAN = 0x00FFFFFF
MAGENTA = 0xFF00FFFF
GREY = 0x808080FF
DARK_GREY = 0x404040FF
LIGHT_GREY = 0xC0C0C0FF


@dataclass(frozen=True)
class Colour:
    """An RGB colour as given in a scene file."""

    red: int
    green: int
    blue: int

    def rgba(self) -> int:
        """Pack the colour as 0xRRGGBBAA with full opacity."""
        r = self.red & 0xFF
        g = self.green & 0xFF
        b = self.blue & 0xFF
        return (r << 24) | (g << 16) | (b << 8) | 0xFF


@dataclass(frozen=True)
class Ray:
    """A cast ray: offset from the player to the hit point and its heading.

    ``direct`` is -1 or 1 depending on which way the ray travels along the
    axis it was stepped on; ``is_vertical`` tells whether it hit a vertical
    grid line.
    """

    dx: float
    dy: float
    angle: float
    is_vertical: bool
    direct: int

    @property
    def length(self) -> float:
        return ray_distance(self.dx, self.dy)


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


@dataclass(frozen=True)
class GameMap:
    """A rectangular grid of map cells, one string per row."""

    layout: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "layout", tuple(self.layout))

    @property
    def height(self) -> int:
        return len(self.layout)

    @property
    def width(self) -> int:
        return len(self.layout[0]) if self.layout else 0

    @property
    def pixel_width(self) -> int:
        return self.width * TILE_SIZE

    @property
    def pixel_height(self) -> int:
        return self.height * TILE_SIZE

    def cell(self, row: int, col: int) -> str:
        """Return the character at ``row``, ``col``; IndexError if outside."""
        if not (0 <= row < self.height) or not (0 <= col < len(self.layout[row])):
            raise IndexError(f"cell ({row}, {col}) is outside the map")
        return self.layout[row][col]

    def is_solid(self, x: float, y: float) -> bool:
        """Tell whether the world point (x, y) lies in a wall tile.

        Points outside the map are not solid.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return False
        row = _trunc_div(int(y), TILE_SIZE)
        col = _trunc_div(int(x), TILE_SIZE)
        if row < 0 or col < 0 or row >= self.height or col >= self.width:
            return False
        if col >= len(self.layout[row]):
            return False
        return self.layout[row][col] in SOLID_CELLS


def deg_to_rad(deg: float) -> float:
    return deg * (math.pi / 180)


def rad_to_deg(rad: float) -> float:
    return rad * (180 / math.pi)


def normalize_angle(angle: float) -> float:
    """Bring an angle into the range [0, 2*pi)."""
    res = math.fmod(angle, 2 * math.pi)
    if res < 0:
        res += 2 * math.pi
    return res


def ray_distance(dx: float, dy: float) -> float:
    return math.sqrt(dx * dx + dy * dy)


def closer_ray(vertical: Ray, horizontal: Ray) -> Ray:
    """Return the shorter of two rays, preferring the horizontal on a tie."""
    hyp_ver = vertical.dx * vertical.dx + vertical.dy * vertical.dy
    hyp_hor = horizontal.dx * horizontal.dx + horizontal.dy * horizontal.dy
    if hyp_ver < hyp_hor:
        return vertical
    return horizontal


def swap_bytes(value: int) -> int:
    """Reverse the byte order of a 32-bit value."""
    return int.from_bytes((value & 0xFFFFFFFF).to_bytes(4, "little"), "big")