"""Reading XPM images into flat 0xRRGGBB pixel data."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterator

from .colors import NONE_COLOR, lookup_color
from .errors import CubError

TRANSPARENT = 0xFF000000

_QUOTED = re.compile(r'"([^"]*)"')
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_HEX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_MAX_NAME = 63


@dataclass(frozen=True)
class XpmImage:
    """A decoded image; ``pixels`` holds ``width * height`` colours, row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]


def _find_unquoted(text: str, token: str) -> int:
    """Position of ``token`` outside double-quoted strings, or -1."""
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def _blank_comments(text: str, opener: str, closer: str) -> str:
    while (start := _find_unquoted(text, opener)) != -1:
        end = text.find(closer, start + len(opener))
        stop = len(text) if end == -1 else end + len(closer)
        text = text[:start] + " " * (stop - start) + text[stop:]
    return text


def strip_comments(text: str) -> str:
    """Blank out ``/* */`` and ``//`` comments that lie outside quoted strings.

    Comments are replaced by spaces, so the text keeps its length.
    """
    text = _blank_comments(text, "/*", "*/")
    return _blank_comments(text, "//", "\n")


def split_words(text: str) -> list[str]:
    """Split on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _hex_color(digits: str) -> int:
    match = _HEX.match(digits)
    value = int(match.group(2), 16) if match.group(2) else 0
    if match.group(1) == "-":
        value = -value
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def _text_color(name: str, extra: str | None) -> int:
    if name.startswith("#"):
        return _hex_color(name[1:])
    if extra is not None:
        name = f"{name} {extra}"[:_MAX_NAME]
    value = lookup_color(name)
    return 0 if value is None else value


def _next_string(strings: Iterator[str], what: str) -> str:
    line = next(strings, None)
    if line is None:
        raise CubError(f"Invalid xpm {what}")
    return line


def parse_xpm(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    strings = iter(_QUOTED.findall(strip_comments(text)))
    header = split_words(_next_string(strings, "header"))
    if len(header) < 4:
        raise CubError("Invalid xpm header")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise CubError("Invalid xpm header")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_string(strings, "colour table")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise CubError("Invalid xpm colour table") from None
        if index + 1 >= len(words):
            raise CubError("Invalid xpm colour table")
        extra = words[index + 2] if index + 2 < len(words) else None
        color = _text_color(words[index + 1], extra)
        key = line[:cpp]
        # Short keys are overwritten by later entries; long keys keep the first.
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    pixels: list[int] = []
    for _ in range(height):
        line = _next_string(strings, "pixel data")
        for x in range(width):
            color = palette.get(line[cpp * x : cpp * (x + 1)], 0)
            pixels.append(TRANSPARENT if color == NONE_COLOR else color)
    return XpmImage(width=width, height=height, pixels=tuple(pixels))


def load_xpm(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, encoding="latin-1", newline="") as fh:
            text = fh.read()
    except OSError as exc:
        raise CubError("Cannot open xpm file") from exc
    return parse_xpm(text)