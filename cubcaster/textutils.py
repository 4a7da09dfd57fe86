"""Small text helpers used when reading and checking scene files."""

from __future__ import annotations

import os
from typing import Optional, Union

_LEADING_WHITESPACE = " \t\n\v\f\r"
_MAX_COMPONENT = 255


class ColourRangeError(ValueError):
    """Raised when a colour component goes beyond 255."""


def parse_colour_component(text: str) -> int:
    """Read a leading integer the way a scene colour component is read.

    Leading whitespace is skipped, one optional sign is accepted and digits
    are consumed until the first non-digit.  Text with no digits gives 0.
    Raises ColourRangeError as soon as the magnitude exceeds 255.
    """
    pos = 0
    length = len(text)
    while pos < length and text[pos] in _LEADING_WHITESPACE:
        pos += 1
    sign = 1
    if pos < length and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    value = 0
    while pos < length and "0" <= text[pos] <= "9":
        value = value * 10 + (ord(text[pos]) - ord("0"))
        if value > _MAX_COMPONENT:
            raise ColourRangeError("Invalid color")
        pos += 1
    return value * sign


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [part for part in text.split(sep) if part]


def strip_chars(text: str, chars: Optional[str]) -> str:
    """Remove any of ``chars`` from both ends of ``text``.

    With ``chars`` of None or empty the text is returned unchanged.
    """
    if not chars:
        return text
    return text.strip(chars)


def is_blank(line: str) -> bool:
    """Tell whether a line holds nothing but space characters."""
    return line.strip(" ") == ""


def read_raw_lines(path: Union[str, os.PathLike]) -> list[str]:
    """Read a file as lines, each keeping its trailing newline.

    The last line has no newline when the file does not end with one.
    An empty file gives an empty list.
    """
    with open(path, "rb") as handle:
        content = handle.read().decode("utf-8", errors="surrogateescape")
    if not content:
        return []
    pieces = content.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines