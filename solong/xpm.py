"""Reading XPM images into plain pixel arrays."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from solong.colors import lookup_color
from solong.textutil import atoi

__all__ = [
    "XpmError",
    "XpmImage",
    "str_to_words",
    "find_substring",
    "find_unquoted",
    "strip_comments",
    "text_to_rgb",
    "parse_xpm_lines",
    "parse_xpm_text",
    "parse_xpm_file",
]

TRANSPARENT = 0xFF000000
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: 32-bit 0xAARRGGBB pixels stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def str_to_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def find_substring(text: str, find: str, limit: int) -> int:
    """Return the index of find in text, or -1.

    When find is longer than limit the search fails at once.
    """
    if not find:
        raise ValueError("search string must not be empty")
    if len(find) > limit:
        return -1
    return text.find(find)


def find_unquoted(text: str, find: str, limit: int) -> int:
    """Like find_substring, but ignore matches inside double quotes."""
    if not find:
        raise ValueError("search string must not be empty")
    if len(find) > limit:
        return -1
    quoted = False
    for pos in range(len(text) - len(find) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(find, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C comments that lie outside quoted strings.

    Comment characters are replaced by spaces, so the length is unchanged.
    A line comment takes its terminating newline with it.
    """
    while (begin := find_unquoted(text, "/*", len(text))) != -1:
        end = text.find("*/", begin + 2)
        if end == -1:
            raise XpmError("unterminated comment")
        stop = end + 2
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    while (begin := find_unquoted(text, "//", len(text))) != -1:
        end = text.find("\n", begin + 2)
        stop = len(text) if end == -1 else end + 1
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def text_to_rgb(name: str, extra: str | None = None) -> int:
    """Turn an XPM colour specification into 0xRRGGBB.

    '#rrggbb' is read as hexadecimal. Otherwise the name, joined with extra
    when given, is looked up in the colour table; "none" gives -1 and
    unknown names give 0.
    """
    if name.startswith("#"):
        digits = _HEX_DIGITS.match(name, 1).group()
        return int(digits, 16) if digits else 0
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = str_to_words(line)
    if len(words) < 4:
        raise XpmError(f"malformed header: {line!r}")
    width, height, ncolors, cpp = (atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid header values: {line!r}")
    return width, height, ncolors, cpp


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    if len(line) < cpp:
        raise XpmError(f"colour line too short: {line!r}")
    words = str_to_words(line[cpp:])
    try:
        index = words.index("c")
    except ValueError:
        raise XpmError(f"colour line has no 'c' key: {line!r}") from None
    if index + 1 >= len(words):
        raise XpmError(f"colour line has no colour: {line!r}")
    extra = words[index + 2] if index + 2 < len(words) else None
    return line[:cpp], text_to_rgb(words[index + 1], extra)


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its XPM strings: header, colours, then rows.

    Strings beyond those the header asks for are ignored.
    """
    source = iter(lines)

    def next_line(what: str) -> str:
        line = next(source, None)
        if line is None:
            raise XpmError(f"missing {what}")
        return line

    width, height, ncolors, cpp = _parse_header(next_line("header"))

    # One- and two-character keys let a later definition replace an earlier
    # one; longer keys keep the first definition.
    later_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, rgb = _parse_color(next_line("colour definition"), cpp)
        if later_wins:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)

    pixels: list[int] = []
    for _ in range(height):
        line = next_line("pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        for start in range(0, width * cpp, cpp):
            color = palette.get(line[start:start + cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an image from the text of an XPM file."""
    return parse_xpm_lines(_quoted_strings(strip_comments(text)))


def parse_xpm_file(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)