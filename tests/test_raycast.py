import math

import pytest

from cubcaster.geometry import (
    FOV,
    MOVE_SPEED,
    NO_HIT,
    NUM_RAYS,
    ROT_SPEED,
    TILE_SIZE,
    GameMap,
    deg_to_rad,
    normalize_angle,
)
from cubcaster.raycast import (
    Player,
    blocked,
    cast_rays,
    find_player,
    horizontal_ray,
    vertical_ray,
)

BOX = GameMap(("111", "1N1", "111"))
ROOM = GameMap(("11111", "10001", "10E01", "10001", "11111"))
CENTRE = TILE_SIZE * 1.5
HALF = TILE_SIZE / 2


def test_find_player_position_and_angle():
    player = find_player(BOX)
    assert player.x == CENTRE
    assert player.y == CENTRE
    assert player.angle == pytest.approx(deg_to_rad(270))


@pytest.mark.parametrize("char,deg", [("N", 270), ("W", 180), ("S", 90), ("E", 0)])
def test_find_player_start_angles(char, deg):
    player = find_player(GameMap(("111", f"1{char}1", "111")))
    assert player.angle == pytest.approx(deg_to_rad(deg))


def test_find_player_missing():
    with pytest.raises(ValueError):
        find_player(GameMap(("111", "101", "111")))


def test_vertical_ray_east():
    player = Player(CENTRE, CENTRE, 0.0)
    ray = vertical_ray(player, BOX, 0.0)
    assert ray.dx == pytest.approx(HALF)
    assert ray.dy == pytest.approx(0.0)
    assert ray.is_vertical is True
    assert ray.direct == 1


def test_vertical_ray_west():
    player = Player(CENTRE, CENTRE, 0.0)
    ray = vertical_ray(player, BOX, math.pi)
    assert ray.dx == pytest.approx(-HALF)
    assert ray.dy == pytest.approx(0.0, abs=1e-9)
    assert ray.direct == -1


def test_horizontal_ray_south():
    player = Player(CENTRE, CENTRE, 0.0)
    ray = horizontal_ray(player, BOX, math.pi / 2)
    assert ray.dy == pytest.approx(HALF)
    assert ray.dx == pytest.approx(0.0, abs=1e-9)
    assert ray.is_vertical is False
    assert ray.direct == 1


def test_horizontal_ray_parallel_misses():
    player = Player(CENTRE, CENTRE, 0.0)
    ray = horizontal_ray(player, BOX, 0.0)
    assert ray.dx == NO_HIT
    assert ray.dy == NO_HIT


def test_cast_rays_count_and_bounds():
    player = Player(CENTRE, CENTRE, 0.0)
    rays = cast_rays(player, BOX)
    assert len(rays) == NUM_RAYS
    assert rays[0].angle == pytest.approx(normalize_angle(-FOV / 2))
    assert all(HALF - 1 <= ray.length < TILE_SIZE for ray in rays)


def test_cast_rays_picks_closer():
    player = Player(CENTRE, CENTRE, 0.0)
    for ray in cast_rays(player, BOX)[::100]:
        other_v = vertical_ray(player, BOX, ray.angle)
        other_h = horizontal_ray(player, BOX, ray.angle)
        assert ray.length <= min(other_v.length, other_h.length)


def test_blocked_cases():
    assert blocked(BOX, CENTRE, CENTRE) is False
    assert blocked(BOX, HALF, HALF) is True
    assert blocked(BOX, -5000, 0) is True


def test_move_forward():
    player = Player(TILE_SIZE * 2.5, TILE_SIZE * 2.5, 0.0)
    moved = player.moved(ROOM, 1, 0.0)
    assert moved.x == pytest.approx(player.x + MOVE_SPEED)
    assert moved.y == pytest.approx(player.y)


def test_strafe_right():
    player = Player(TILE_SIZE * 2.5, TILE_SIZE * 2.5, 0.0)
    moved = player.moved(ROOM, 2, 0.0)
    assert moved.y == pytest.approx(player.y + MOVE_SPEED)
    assert moved.x == pytest.approx(player.x)


def test_rotation_scaled():
    player = Player(TILE_SIZE * 2.5, TILE_SIZE * 2.5, 0.0)
    turned = player.moved(ROOM, 0, deg_to_rad(1))
    assert turned.angle == pytest.approx(deg_to_rad(1) * ROT_SPEED)
    assert (turned.x, turned.y) == (player.x, player.y)


def test_walls_stop_movement():
    player = Player(CENTRE, CENTRE, 0.0)
    for _ in range(10):
        player = player.moved(BOX, 1, 0.0)
    assert CENTRE < player.x < 2 * TILE_SIZE