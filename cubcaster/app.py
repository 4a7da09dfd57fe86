"""The game window: start-up checks, texture loading, input and the main loop."""

from __future__ import annotations

import os
import sys
from typing import Mapping, Optional, Sequence, Union

import numpy as np
import pygame

from .geometry import WINDOW_HEIGHT, WINDOW_WIDTH, deg_to_rad
from .raycast import Player, cast_rays, find_player
from .render import Frame, Texture, draw_floor_ceiling, render_walls
from .scene import Scene, SceneError, load_scene

RED_ESCAPE = "\033[31m"
RESET_ESCAPE = "\033[0m"
WINDOW_TITLE = "CUB_3D"
FRAME_RATE = 60

_TEXTURE_KEYS = ("NO", "SO", "WE", "EA")


def check_extension(path: str) -> str:
    """Return ``path`` when it names a ``.cub`` file; SceneError otherwise."""
    if len(path) < 4 or path[-4:] != ".cub":
        raise SceneError("Invalid file extension")
    return path


def load_texture(path: Union[str, os.PathLike]) -> Texture:
    """Load a PNG image as a texture of 0xRRGGBBAA pixels.

    Raises OSError when the image cannot be read.
    """
    try:
        surface = pygame.image.load(os.fspath(path))
    except (pygame.error, OSError) as exc:
        raise OSError(f"failed to load png: {path}") from exc
    width, height = surface.get_size()
    raw = pygame.image.tostring(surface, "RGBA")
    pixels = np.frombuffer(raw, dtype=">u4").astype(np.uint32)
    return Texture(width, height, pixels)


def key_intent(pressed) -> tuple[bool, int, float]:
    """Turn a key state into (quit, walk_direction, rotation).

    ``pressed`` is indexed by pygame key codes.  Later keys win over earlier
    ones: S over W, A over S, D over A, and LEFT over RIGHT.
    """
    quit_requested = bool(pressed[pygame.K_ESCAPE])
    walk = 0
    for key, direction in (
        (pygame.K_w, 1),
        (pygame.K_s, -1),
        (pygame.K_a, -2),
        (pygame.K_d, 2),
    ):
        if pressed[key]:
            walk = direction
    rotation = 0.0
    if pressed[pygame.K_RIGHT]:
        rotation = deg_to_rad(1)
    if pressed[pygame.K_LEFT]:
        rotation = deg_to_rad(-1)
    return quit_requested, walk, rotation


def _rgb_array(pixels: np.ndarray) -> np.ndarray:
    channels = [(pixels >> shift) & 0xFF for shift in (24, 16, 8)]
    return np.stack(channels, axis=-1).astype(np.uint8)


class Game:
    """A running scene: the player, the last cast rays and the images drawn."""

    def __init__(self, scene: Scene, textures: Mapping[str, Texture]) -> None:
        missing = [key for key in _TEXTURE_KEYS if key not in textures]
        if missing:
            raise KeyError(f"missing textures: {', '.join(missing)}")
        self.scene = scene
        self.textures = dict(textures)
        self.game_map = scene.game_map
        self.background = Frame(WINDOW_WIDTH, WINDOW_HEIGHT)
        draw_floor_ceiling(self.background, scene.floor, scene.ceiling)
        self.walls = Frame(WINDOW_WIDTH, WINDOW_HEIGHT)
        self.player: Player = find_player(self.game_map)
        self.rays = []
        self.step(0, 0.0)

    def step(self, walk_direction: int, rotation: float) -> Player:
        """Apply one step of input, recast the rays and redraw the walls."""
        self.player = self.player.moved(self.game_map, walk_direction, rotation)
        self.rays = cast_rays(self.player, self.game_map)
        render_walls(self.walls, self.rays, self.player, self.textures)
        return self.player

    def render(self) -> np.ndarray:
        """Compose the walls over the floor and ceiling; pixels[y, x] as 0xRRGGBBAA."""
        walls = self.walls.pixels
        opaque = (walls & 0xFF) != 0
        return np.where(opaque, walls, self.background.pixels).astype(np.uint32)

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
            pygame.display.set_caption(WINDOW_TITLE)
            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                quit_requested, walk, rotation = key_intent(pygame.key.get_pressed())
                if quit_requested:
                    running = False
                if walk != 0 or rotation != 0:
                    self.step(walk, rotation)
                surface = pygame.surfarray.make_surface(
                    _rgb_array(self.render()).swapaxes(0, 1)
                )
                screen.blit(surface, (0, 0))
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            pygame.quit()


def _report(message: str) -> None:
    sys.stderr.write(f"{RED_ESCAPE}Error\n{message}\n{RESET_ESCAPE}")
    sys.stderr.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on a scene file; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        _report("Invalid number of arguments")
        return 1
    try:
        path = check_extension(args[0])
        scene = load_scene(path)
    except SceneError as exc:
        _report(str(exc))
        return 1
    try:
        textures = {
            "EA": load_texture(scene.east),
            "NO": load_texture(scene.north),
            "SO": load_texture(scene.south),
            "WE": load_texture(scene.west),
        }
    except OSError:
        sys.stderr.write("Error\nfailed to load png\n")
        return 1
    Game(scene, textures).run()
    # The program always ends with a failure status once its window closes.
    return 1


if __name__ == "__main__":
    sys.exit(main())