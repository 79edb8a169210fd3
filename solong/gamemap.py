"""Loading and validating game maps."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

__all__ = [
    "MapError",
    "GameMap",
    "read_map_lines",
    "check_elements",
    "is_rectangular",
    "has_wall_contour",
    "flood_fill",
    "check_valid_path",
    "parse_map_text",
    "parse_map",
]

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
ENEMY = "A"

_ALLOWED = frozenset({WALL, FLOOR, PLAYER, EXIT, COLLECTIBLE, ENEMY})
_VISITED = "V"


class MapError(ValueError):
    """Raised when a map cannot be read or is not a playable map."""


@dataclass(frozen=True)
class GameMap:
    """A validated map; the player's start tile has been turned into floor."""

    rows: tuple[str, ...]
    player: tuple[int, int]
    collectibles: int

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def tile(self, x: int, y: int) -> str:
        """Return the character at column x, row y."""
        if not (0 <= y < len(self.rows) and 0 <= x < len(self.rows[y])):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self.rows[y][x]


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def read_map_lines(path: str | Path) -> list[str]:
    """Read a map file and return its lines without their newlines."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError("Failed to open map file.") from exc
    return _split_lines(text)


def check_elements(rows: Sequence[str]) -> tuple[tuple[int, int], int]:
    """Check the map's characters and counts.

    Returns the player's (x, y) position and the number of collectibles.
    """
    collectibles = 0
    exits = 0
    players: list[tuple[int, int]] = []
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell == COLLECTIBLE:
                collectibles += 1
            elif cell == PLAYER:
                players.append((x, y))
            elif cell == EXIT:
                exits += 1
            elif cell not in _ALLOWED:
                raise MapError(f"Invalid character in map: {cell}")
    if len(players) != 1:
        raise MapError("Map must contain exactly one player (P).")
    if exits != 1:
        raise MapError("Map must contain exactly one exit (E).")
    if collectibles < 1:
        raise MapError("Map must contain at least one collectible (C).")
    return players[-1], collectibles


def is_rectangular(rows: Sequence[str]) -> bool:
    """Tell whether the map has rows and all of them share one length."""
    if not rows:
        return False
    width = len(rows[0])
    return all(len(row) == width for row in rows)


def has_wall_contour(rows: Sequence[str]) -> bool:
    """Tell whether the map's outer border is made only of walls."""
    if not rows:
        return False
    width = len(rows[0])
    border = WALL * width
    if rows[0] != border or rows[-1][:width] != border:
        return False
    return all(
        len(row) >= width and width > 0 and row[0] == WALL and row[width - 1] == WALL
        for row in rows
    )


def flood_fill(rows: Sequence[str], start: tuple[int, int]) -> tuple[int, bool]:
    """Explore every tile reachable from start without crossing walls.

    Returns the number of collectibles reached and whether the exit was
    reached. The rows given are not modified.
    """
    grid = [list(row) for row in rows]
    height = len(grid)
    found = 0
    exit_found = False
    stack = [start]
    while stack:
        x, y = stack.pop()
        if not (0 <= y < height and 0 <= x < len(grid[y])):
            continue
        cell = grid[y][x]
        if cell in (WALL, _VISITED):
            continue
        if cell == COLLECTIBLE:
            found += 1
        elif cell == EXIT:
            exit_found = True
        grid[y][x] = _VISITED
        stack.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))
    return found, exit_found


def check_valid_path(
    rows: Sequence[str], start: tuple[int, int], collectibles: int
) -> None:
    """Raise MapError unless every collectible and the exit can be reached."""
    found, exit_found = flood_fill(rows, start)
    if found != collectibles:
        raise MapError("Invalid path: not all collectibles are reachable.")
    if not exit_found:
        raise MapError("Invalid path: exit is not reachable.")


def _validate(rows: list[str]) -> GameMap:
    if not rows:
        raise MapError("Map is empty.")
    player, collectibles = check_elements(rows)
    if not is_rectangular(rows):
        raise MapError("Map is not rectangular.")
    if not has_wall_contour(rows):
        raise MapError("Map is not surrounded by walls.")
    check_valid_path(rows, player, collectibles)
    x, y = player
    rows[y] = rows[y][:x] + FLOOR + rows[y][x + 1:]
    return GameMap(tuple(rows), player, collectibles)


def parse_map_text(text: str) -> GameMap:
    """Validate a map given as text and return it."""
    return _validate(_split_lines(text))


def parse_map(path: str | Path) -> GameMap:
    """Read and validate a map file."""
    return _validate(read_map_lines(path))