"""Loading and validating ``.ber`` map files."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

WALL = "1"
FLOOR = "0"
EXIT = "E"
PLAYER = "P"
COLLECTIBLE = "C"
VALID_TILES = frozenset({WALL, FLOOR, EXIT, PLAYER, COLLECTIBLE, "\n"})
_PASSABLE = frozenset({FLOOR, PLAYER, EXIT, COLLECTIBLE})
DEFAULT_MAPS_DIR = "maps"
_BLANK_LINE_MARK = "Q"


class MapError(ValueError):
    """Raised when a map file is missing, malformed or unplayable."""


@dataclass(frozen=True)
class Position:
    """A tile coordinate: ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass
class GameMap:
    """A validated map: its tile grid, the player's start and collectible count."""

    grid: list[list[str]]
    player: Position
    collectibles: int

    def tile(self, x: int, y: int) -> str:
        """Return the tile character at column ``x`` and row ``y``."""
        if not (0 <= y < len(self.grid) and 0 <= x < len(self.grid[y])):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self.grid[y][x]

    def width(self) -> int:
        """Number of columns."""
        return len(self.grid[0]) if self.grid else 0

    def height(self) -> int:
        """Number of rows."""
        return len(self.grid)


def has_ber_extension(name: str) -> bool:
    """True if ``name`` is longer than four characters and ends in ``.ber``."""
    return len(name) > 4 and name.endswith(".ber")


def read_map_text(name: str, maps_dir: str | Path = DEFAULT_MAPS_DIR) -> str:
    """Read a map from ``maps_dir`` and return its whole text.

    A line holding a single character (such as an empty line) is replaced by
    ``Q``, so that it later fails the tile check.
    """
    path = Path(maps_dir) / name
    try:
        text = path.read_text(encoding="latin-1")
    except OSError as exc:
        raise MapError("Error reading map!") from exc
    lines = re.findall(r"[^\n]*\n|[^\n]+", text)
    return "".join(_BLANK_LINE_MARK if len(line) == 1 else line for line in lines)


def count_items(text: str) -> int:
    """Check the tiles of a map text and return how many collectibles it holds.

    Every character must be a valid tile or a newline, and there must be one
    player, one exit and at least one collectible.
    """
    if any(ch not in VALID_TILES for ch in text):
        raise MapError("Invalid items found!")
    exits = text.count(EXIT)
    players = text.count(PLAYER)
    collectibles = text.count(COLLECTIBLE)
    if exits == 1 and players == 1 and collectibles >= 1:
        return collectibles
    raise MapError("Map must contain one P, one E and at least one C!")


def split_rows(text: str) -> list[str]:
    """Split a map text into its non-empty rows."""
    return [row for row in text.split("\n") if row]


def check_rectangular(rows: Sequence[str]) -> tuple[int, int]:
    """Return ``(width, height)`` of the rows, which must all be the same length."""
    if not rows:
        raise MapError("Map is empty!")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise MapError("Map is not rectangular!")
    return width, len(rows)


def check_walls(rows: Sequence[str]) -> None:
    """Raise unless the outer border of the map is made of walls."""
    width, _ = check_rectangular(rows)
    top, bottom = rows[0], rows[-1]
    border_ok = all(ch == WALL for ch in top + bottom) and all(
        row[0] == WALL and row[width - 1] == WALL for row in rows
    )
    if not border_ok:
        raise MapError("The map must be within walls!")


def find_player(rows: Sequence[str]) -> Position:
    """Return the position of the player's start tile."""
    for y, row in enumerate(rows):
        x = row.find(PLAYER)
        if x >= 0:
            return Position(x, y)
    raise MapError("Map has no player!")


def flood_fill(rows: Sequence[str], start: Position) -> tuple[int, int]:
    """Explore every tile reachable from ``start`` without crossing walls.

    Returns ``(exits, collectibles)`` reached. The rows are left unchanged.
    """
    exits = 0
    collectibles = 0
    seen: set[tuple[int, int]] = set()
    stack = [(start.x, start.y)]
    while stack:
        x, y = stack.pop()
        if (x, y) in seen or not (0 <= y < len(rows) and 0 <= x < len(rows[y])):
            continue
        tile = rows[y][x]
        if tile not in _PASSABLE:
            continue
        seen.add((x, y))
        if tile == EXIT:
            exits += 1
        elif tile == COLLECTIBLE:
            collectibles += 1
        stack.extend(((x - 1, y), (x, y - 1), (x + 1, y), (x, y + 1)))
    return exits, collectibles


def check_playable(rows: Sequence[str], start: Position, collectibles: int) -> None:
    """Raise unless the exit and every collectible can be reached from ``start``."""
    exits, reached = flood_fill(rows, start)
    if not (exits == 1 and reached == collectibles):
        raise MapError("The map is not playable!")


def parse_map(text: str) -> GameMap:
    """Validate a map text and build the map from it."""
    collectibles = count_items(text)
    rows = split_rows(text)
    check_rectangular(rows)
    check_walls(rows)
    player = find_player(rows)
    check_playable(rows, player, collectibles)
    return GameMap([list(row) for row in rows], player, collectibles)


def load_map(name: str, maps_dir: str | Path = DEFAULT_MAPS_DIR) -> GameMap:
    """Load and validate the map file ``name`` from ``maps_dir``."""
    if not has_ber_extension(name):
        raise MapError("Map format is not .ber")
    return parse_map(read_map_text(name, maps_dir))