"""Player state, movement with collision, and grid ray casting."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .geometry import (
    FOV,
    MOVE_SPEED,
    NO_HIT,
    NUM_RAYS,
    P_RAD,
    ROT_SPEED,
    SCALE,
    SCALE_SIZE,
    SOLID_CELLS,
    TILE_SIZE,
    GameMap,
    Ray,
    closer_ray,
    deg_to_rad,
    normalize_angle,
)

_START_ANGLES = {"N": 270, "W": 180, "S": 90, "E": 0}
_COLLISION_REACH = P_RAD - 2


@dataclass(frozen=True)
class Player:
    """The player's position in world units and viewing angle in radians."""

    x: float
    y: float
    angle: float
    radius: int = P_RAD

    def moved(self, game_map: GameMap, walk_direction: int, rotation: float) -> "Player":
        """Return the player after one step of input.

        ``walk_direction`` is 1 (forward), -1 (back), 2 or -2 (strafe right or
        left) or 0; ``rotation`` is an angle in radians, scaled by the
        rotation speed.  The position only changes when the new spot is free.
        """
        angle = self.angle + rotation * ROT_SPEED
        sideways = 0.0
        if abs(walk_direction) == 2:
            walk_direction //= 2
            sideways = deg_to_rad(90)
        step = walk_direction * MOVE_SPEED
        new_x = self.x + math.cos(angle + sideways) * step
        new_y = self.y + math.sin(angle + sideways) * step
        if blocked(game_map, new_x, new_y):
            return replace(self, angle=angle)
        return replace(self, x=new_x, y=new_y, angle=angle)


def find_player(game_map: GameMap) -> Player:
    """Locate the start cell (N, S, W or E) and build the player there."""
    found = None
    for row, line in enumerate(game_map.layout):
        for col, char in enumerate(line[: game_map.width]):
            if char in _START_ANGLES:
                found = Player(
                    x=float(col * TILE_SIZE + TILE_SIZE // 2),
                    y=float(row * TILE_SIZE + TILE_SIZE // 2),
                    angle=deg_to_rad(_START_ANGLES[char]),
                )
                break
    if found is None:
        raise ValueError("the map has no player start")
    return found


def blocked(game_map: GameMap, x: float, y: float) -> bool:
    """Tell whether a player standing at (x, y) would touch a wall.

    Points whose surroundings fall outside the map count as blocked.
    """
    if not (math.isfinite(x) and math.isfinite(y)):
        return True
    sx = int(int(x) * SCALE)
    sy = int(int(y) * SCALE)
    for i in range(sy - _COLLISION_REACH, sy + _COLLISION_REACH + 1):
        row = int(i / SCALE_SIZE)
        for j in range(sx - _COLLISION_REACH, sx + _COLLISION_REACH + 1):
            col = int(j / SCALE_SIZE)
            if row < 0 or row >= game_map.height or col < 0:
                return True
            line = game_map.layout[row]
            if col >= len(line) or line[col] in SOLID_CELLS:
                return True
    return False


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _edge_step(direct: int) -> int:
    return -1 if direct == -1 else 0


def _inside(game_map: GameMap, x: float, y: float) -> bool:
    return 0 <= x <= game_map.pixel_width and 0 <= y <= game_map.pixel_height


def vertical_ray(player: Player, game_map: GameMap, angle: float) -> Ray:
    """Step a ray across vertical grid lines until it meets a wall."""
    direct = 1
    boundary = (math.floor(player.x / TILE_SIZE) + 1) * TILE_SIZE
    if math.pi / 2 < angle < math.pi * 1.5:
        direct = -1
        boundary = math.floor(player.x / TILE_SIZE) * TILE_SIZE
    slope = math.tan(angle)
    dx = boundary - player.x
    while _inside(game_map, player.x + dx, player.y + dx * slope):
        if game_map.is_solid(player.x + dx + _edge_step(direct), player.y + dx * slope):
            return Ray(dx, dx * slope, angle, True, direct)
        dx += float(TILE_SIZE) * direct
    return Ray(NO_HIT, NO_HIT, angle, True, direct)


def horizontal_ray(player: Player, game_map: GameMap, angle: float) -> Ray:
    """Step a ray across horizontal grid lines until it meets a wall."""
    direct = -1
    boundary = math.floor(player.y / TILE_SIZE) * TILE_SIZE
    if angle < math.pi:
        direct = 1
        boundary = (math.floor(player.y / TILE_SIZE) + 1) * TILE_SIZE
    slope = math.tan(angle)
    dy = boundary - player.y
    while _inside(game_map, player.x + _div(dy, slope), player.y + dy):
        if game_map.is_solid(player.x + _div(dy, slope), player.y + dy + _edge_step(direct)):
            return Ray(_div(dy, slope), dy, angle, False, direct)
        dy += float(TILE_SIZE) * direct
    return Ray(NO_HIT, NO_HIT, angle, False, direct)


def cast_rays(player: Player, game_map: GameMap) -> list[Ray]:
    """Cast one ray per screen column across the field of view."""
    rays = []
    angle = player.angle - FOV / 2
    for _ in range(NUM_RAYS):
        heading = normalize_angle(angle)
        horizontal = horizontal_ray(player, game_map, heading)
        vertical = vertical_ray(player, game_map, heading)
        rays.append(closer_ray(vertical, horizontal))
        angle += FOV / NUM_RAYS
    return rays