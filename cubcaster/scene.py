"""Reading and checking scene description files.

A scene file starts with six header lines, four wall texture paths
(``NO``, ``SO``, ``WE``, ``EA``) and two colours (``F`` for the floor, ``C``
for the ceiling), followed by the map grid.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from itertools import dropwhile, islice
from typing import Iterable, Sequence, Union

from .geometry import Colour, GameMap
from .textutils import (
    ColourRangeError,
    is_blank,
    parse_colour_component,
    read_raw_lines,
    split_fields,
    strip_chars,
)

HEADER_LINES = 6
OPEN_CELL = "$"

_DIRECTIONS = ("NO", "SO", "WE", "EA")
_COLOUR_IDS = ("F", "C")
_PLAYER_CELLS = frozenset("NSWE")
_EDGE_FORBIDDEN = frozenset("0NSWE")
_MAP_CELLS = frozenset("$01NSEW")


class SceneError(ValueError):
    """Raised when a scene file is malformed."""


@dataclass(frozen=True)
class Scene:
    """A fully validated scene: texture paths, colours and padded map."""

    north: str
    south: str
    west: str
    east: str
    floor: Colour
    ceiling: Colour
    layout: tuple[str, ...]

    @property
    def width(self) -> int:
        return len(self.layout[0]) if self.layout else 0

    @property
    def height(self) -> int:
        return len(self.layout)

    @property
    def game_map(self) -> GameMap:
        return GameMap(self.layout)


def _first_char(line: str) -> str:
    return line.lstrip(" ")[:1]


def _two_chars(line: str) -> str:
    return line.lstrip(" ")[:2]


def read_scene_lines(path: Union[str, os.PathLike]) -> list[str]:
    """Read a scene file into lines without their newlines.

    The file must not be empty and must not end with a newline.
    """
    try:
        raw = read_raw_lines(path)
    except OSError as exc:
        raise SceneError("Open failure") from exc
    if not raw:
        raise SceneError("Empty file")
    if raw[-1].endswith("\n"):
        raise SceneError("Invalid map")
    return [line.split("\n", 1)[0] for line in raw]


def select_header(lines: Iterable[str]) -> list[str]:
    """Return the first six non-blank lines, checking they form a header."""
    header = list(islice((line for line in lines if not is_blank(line)), HEADER_LINES))
    colour_count = sum(1 for line in header if _first_char(line) in _COLOUR_IDS)
    direction_count = sum(
        1 for line in header if _two_chars(strip_chars(line, " ")) in _DIRECTIONS
    )
    if colour_count != 2 or direction_count != 4:
        raise SceneError("Invalid top map")
    return header


def split_header(header: Iterable[str]) -> tuple[list[str], list[str]]:
    """Separate header lines into texture lines and colour lines."""
    directions: list[str] = []
    colours: list[str] = []
    for line in header:
        if _two_chars(line) in _DIRECTIONS:
            directions.append(line)
        elif _first_char(line) in _COLOUR_IDS:
            colours.append(line)
    return directions, colours


def validate_directions(directions: Iterable[str]) -> dict[str, str]:
    """Check texture lines and map each identifier to its path."""
    paths: dict[str, str] = {}
    for line in directions:
        fields = split_fields(line, " ")
        trimmed = strip_chars(line, " ")
        if len(trimmed) < 3 or trimmed[2] != " " or len(fields) != 2:
            raise SceneError("Invalid directions")
        key = fields[0] if fields[0] in ("NO", "SO", "WE") else "EA"
        paths[key] = fields[1]
    return paths


def validate_colour(text: str) -> Colour:
    """Check one colour line such as ``F 220,100,0`` and return its colour."""
    trimmed = strip_chars(text, " ")
    body = strip_chars(trimmed[1:], " ")
    if body.count(",") != 2:
        raise SceneError("Invalid color")
    values = []
    for part in split_fields(body, ","):
        if not all("0" <= ch <= "9" for ch in part):
            raise SceneError("Invalid color")
        try:
            values.append(parse_colour_component(part))
        except ColourRangeError as exc:
            raise SceneError("Invalid color") from exc
    if len(values) != 3:
        raise SceneError("Invalid color")
    return Colour(*values)


def validate_colours(colours: Iterable[str]) -> dict[str, Colour]:
    """Check colour lines and map each identifier (``F`` or ``C``) to its colour."""
    trimmed = [strip_chars(line, " ") for line in colours]
    if any(len(line) < 2 or line[1] != " " for line in trimmed):
        raise SceneError("Invalid colors")
    return {line[0]: validate_colour(line) for line in trimmed}


def map_lines(lines: Sequence[str]) -> list[str]:
    """Return the map part of a scene: what follows the header.

    Empty lines right after the header are skipped; an empty line inside
    the map is an error.
    """
    start = len(lines)
    seen = 0
    for index, line in enumerate(lines):
        if not is_blank(line):
            seen += 1
            if seen == HEADER_LINES:
                start = index + 1
                break
    layout = list(dropwhile(lambda line: line == "", lines[start:]))
    if any(line == "" for line in layout):
        raise SceneError("Invalid map")
    return layout


def validate_map(layout: Sequence[str]) -> None:
    """Check the map's border rows and the ends of every row."""
    if not layout:
        raise SceneError("Invalid map")
    if _EDGE_FORBIDDEN & set(layout[0]) or _EDGE_FORBIDDEN & set(layout[-1]):
        raise SceneError("Invalid map")
    for line in layout:
        if not line:
            raise SceneError("Invalid map")
        if line[0] in _EDGE_FORBIDDEN or line[-1] in _EDGE_FORBIDDEN:
            raise SceneError("Invalid character")


def pad_layout(layout: Sequence[str]) -> list[str]:
    """Mark spaces as open cells and pad every row to the longest one."""
    width = max((len(line) for line in layout), default=0)
    return [line.replace(" ", OPEN_CELL).ljust(width, OPEN_CELL) for line in layout]


def _touches_open(layout: Sequence[str], row: int, col: int) -> bool:
    for r, c in ((row, col + 1), (row, col - 1), (row + 1, col), (row - 1, col)):
        if not (0 <= r < len(layout) and 0 <= c < len(layout[r])):
            return True
        if layout[r][c] == OPEN_CELL:
            return True
    return False


def _cells(layout: Sequence[str]):
    for row, line in enumerate(layout):
        for col, char in enumerate(line):
            yield row, col, char


def check_layout(layout: Sequence[str]) -> tuple[int, int]:
    """Check a padded map and return the (row, col) of the player start."""
    for row, col, char in _cells(layout):
        if char == "0" and _touches_open(layout, row, col):
            raise SceneError("Invalid map - adjacent to '0' is a space")

    players = []
    for row, col, char in _cells(layout):
        if char not in _MAP_CELLS:
            raise SceneError("Invalid character in map")
        if char in _PLAYER_CELLS:
            players.append((row, col))
    if len(players) != 1:
        raise SceneError("Invalid map - player position")

    for row, col in players:
        if _touches_open(layout, row, col):
            raise SceneError("Space is not surrounded by '1'")
    return players[0]


def parse_scene(lines: Iterable[str]) -> Scene:
    """Validate scene lines (without newlines) and build a Scene."""
    lines = list(lines)
    header = select_header(lines)
    directions, colours = split_header(header)
    layout = map_lines(lines)
    paths = validate_directions(directions)
    palette = validate_colours(colours)
    validate_map(layout)
    padded = pad_layout(layout)
    check_layout(padded)
    if any(key not in paths for key in _DIRECTIONS):
        raise SceneError("Invalid directions")
    if any(key not in palette for key in _COLOUR_IDS):
        raise SceneError("Invalid colors")
    return Scene(
        north=paths["NO"],
        south=paths["SO"],
        west=paths["WE"],
        east=paths["EA"],
        floor=palette["F"],
        ceiling=palette["C"],
        layout=tuple(padded),
    )


def load_scene(path: Union[str, os.PathLike]) -> Scene:
    """Read and validate a scene file."""
    return parse_scene(read_scene_lines(path))