"""Drawing the textured wall columns and simple shapes into a frame."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

import numpy as np

from .geometry import (
    TILE_SIZE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Colour,
    Ray,
    ray_distance,
)
from .raycast import Player

WALL_SCALE = TILE_SIZE * (TILE_SIZE + TILE_SIZE // 3)

_INT32_MIN = -(2**31)


@dataclass(frozen=True, eq=False)
class Texture:
    """A wall texture: row-major pixels packed as 0xRRGGBBAA."""

    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        data = np.asarray(self.pixels, dtype=np.uint32).ravel()
        if data.size != self.width * self.height:
            raise ValueError("pixel count does not match texture size")
        object.__setattr__(self, "pixels", data)

    @property
    def size(self) -> int:
        return self.width * self.height


class Frame:
    """An image of 0xRRGGBBAA pixels, indexed as pixels[y, x]."""

    def __init__(self, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint32)

    def put(self, x: int, y: int, colour: int) -> None:
        """Set one pixel; IndexError when (x, y) is outside the frame."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        self.pixels[y, x] = colour & 0xFFFFFFFF

    def clear(self) -> None:
        self.pixels.fill(0)


def wall_top_pixel(height: float) -> float:
    """Screen row where a wall slice of the given height starts."""
    top = WINDOW_HEIGHT // 2 - height / 2
    return max(top, 0)


def texture_offset_x(hit_x: float, hit_y: float, is_vertical: bool, texture: Texture) -> int:
    """Texture column for a wall hit point."""
    value = hit_y if is_vertical else hit_x
    if not math.isfinite(value) or abs(value) >= 2**31:
        raw = _INT32_MIN
    else:
        raw = int(value)
    return (raw & 0xFFFFFFFF) % texture.width


def wall_height(ray: Ray, player_angle: float) -> float:
    """Projected height of the wall a ray meets, corrected for fish-eye."""
    corrected = ray_distance(ray.dx, ray.dy) * math.cos(ray.angle - player_angle)
    if corrected == 0:
        return math.inf
    return WALL_SCALE / corrected


def texture_for_ray(ray: Ray, textures: Mapping[str, Texture]) -> Texture:
    """Pick the NO, SO, WE or EA texture for the side a ray hit."""
    if ray.direct == -1:
        key = "WE" if ray.is_vertical else "NO"
    elif ray.direct == 1:
        key = "EA" if ray.is_vertical else "SO"
    else:
        raise ValueError(f"invalid ray direction {ray.direct}")
    return textures[key]


def _paint_column(
    frame: Frame, x: int, height: float, bottom: float, texture: Texture, offset_x: int
) -> int:
    if not 0 <= x < frame.width:
        return 0
    y_start = int(wall_top_pixel(height))
    y_end = math.floor(bottom)
    if y_end < y_start:
        return 0
    ys = np.arange(y_start, y_end + 1)
    dist = np.trunc(ys - WINDOW_HEIGHT // 2 + height / 2)
    offset_y = np.trunc(dist * texture.height / height)
    index = texture.width * offset_y + offset_x % texture.width
    bad = ~((index >= 0) & (index < texture.size))
    if bad.any():
        stop = int(np.argmax(bad))
        ys = ys[:stop]
        index = index[:stop]
    keep = (ys >= 0) & (ys < frame.height)
    ys = ys[keep]
    index = index[keep].astype(np.int64)
    frame.pixels[ys, x] = texture.pixels[index]
    return int(ys.size)


def render_column(
    frame: Frame, x: int, ray: Ray, player: Player, textures: Mapping[str, Texture]
) -> int:
    """Draw the textured wall slice for one ray; return the pixels drawn."""
    height = wall_height(ray, player.angle)
    texture = texture_for_ray(ray, textures)
    if not (math.isfinite(height) and height > 0):
        return 0
    offset = texture_offset_x(player.x + ray.dx, player.y + ray.dy, ray.is_vertical, texture)
    bottom = min(WINDOW_HEIGHT // 2 + height / 2, WINDOW_HEIGHT)
    return _paint_column(frame, x, height, bottom, texture, offset)


def render_walls(
    frame: Frame, rays: Iterable[Ray], player: Player, textures: Mapping[str, Texture]
) -> None:
    """Clear the frame and draw one wall column per ray."""
    frame.clear()
    for x, ray in enumerate(rays):
        render_column(frame, x, ray, player, textures)


def draw_floor_ceiling(frame: Frame, floor: Colour, ceiling: Colour) -> None:
    """Fill the upper half with the ceiling colour and the lower with the floor."""
    half = frame.height // 2
    frame.pixels[:half] = ceiling.rgba()
    frame.pixels[half : 2 * half] = floor.rgba()


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def draw_line(
    frame: Frame, p1: Sequence[float], p2: Sequence[float], colour: int
) -> int:
    """Draw a fading line from p1 to p2; return the number of pixels drawn.

    Each pixel takes the colour lowered by 2 from the previous one; drawing
    stops once twice the colour is a multiple of 255.
    """
    x1, y1 = p1
    x2, y2 = p2
    dx = abs(x1 - x2) or 1
    dy = abs(y1 - y2) or 1
    steps = dx if dx > dy else dy
    x_inc = (x2 - x1) / steps
    y_inc = (y2 - y1) / steps
    x, y = float(x1), float(y1)
    current = _to_int32(colour)
    drawn = 0
    step = 0
    while (
        step <= steps
        and x < frame.width
        and y < frame.height
        and _to_int32(current * 2) % 255
    ):
        if 0 <= x < frame.width and 0 <= y < frame.height:
            current = _to_int32(current - 2)
            frame.put(int(x), int(y), current)
            drawn += 1
        x += x_inc
        y += y_inc
        step += 1
    return drawn


def draw_circle(frame: Frame, cx: int, cy: int, radius: int, colour: int) -> None:
    """Fill a disc, clipped to the frame."""
    for x in range(cx - radius, cx + radius):
        for y in range(cy - radius, cy + radius):
            inside = (x - cx) ** 2 + (y - cy) ** 2 < radius**2
            if inside and 0 <= x < frame.width and 0 <= y < frame.height:
                frame.put(x, y, colour)


def draw_square(frame: Frame, x: int, y: int, side: int, colour: int) -> None:
    """Fill a square of side + 1 pixels.

    ``x`` gives the first row and ``y`` the first column.  Pixels outside
    the frame raise IndexError.
    """
    for row in range(int(x), int(x + side) + 1):
        for col in range(int(y), int(y + side) + 1):
            frame.put(col, row, colour)