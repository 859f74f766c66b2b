"""Game state: moving the player, collecting items, winning and animation."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum

from .mapfile import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap, Position

TEX_FLOOR = "floor"
TEX_WALL = "wall"
TEX_EXIT = "exit"
TEX_COLLECTIBLE = "collectible"
TEX_PLAYER = "player"
TEX_UP_HALF = "up_half"
TEX_UP_OPEN = "up_open"
TEX_DOWN_HALF = "down_half"
TEX_DOWN_OPEN = "down_open"
TEX_RIGHT_HALF = "right_half"
TEX_RIGHT_OPEN = "right_open"
TEX_LEFT_HALF = "left_half"
TEX_LEFT_OPEN = "left_open"

# Each animation frame is shown for this many redraws.
FRAME_HOLD = 5


class Direction(IntEnum):
    """The way the player last moved or tried to move."""

    UP = 1
    DOWN = 2
    RIGHT = 3
    LEFT = 4


class Key(IntEnum):
    """Key codes the game reacts to."""

    A = 0
    S = 1
    D = 2
    W = 13
    ESC = 53
    LEFT = 123
    RIGHT = 124
    DOWN = 125
    UP = 126


_KEY_DIRECTIONS = {
    Key.UP: Direction.UP,
    Key.W: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.S: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.A: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
    Key.D: Direction.RIGHT,
}

_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

ANIMATION_FRAMES: dict[Direction, tuple[str, ...]] = {
    Direction.UP: (TEX_PLAYER, TEX_UP_HALF, TEX_UP_OPEN, TEX_UP_HALF, TEX_UP_OPEN, TEX_UP_HALF),
    Direction.DOWN: (
        TEX_PLAYER, TEX_DOWN_HALF, TEX_DOWN_OPEN, TEX_DOWN_HALF, TEX_DOWN_OPEN, TEX_DOWN_HALF,
    ),
    Direction.RIGHT: (
        TEX_PLAYER, TEX_RIGHT_HALF, TEX_RIGHT_OPEN, TEX_RIGHT_HALF, TEX_RIGHT_OPEN, TEX_RIGHT_HALF,
    ),
    Direction.LEFT: (
        TEX_PLAYER, TEX_LEFT_HALF, TEX_LEFT_OPEN, TEX_LEFT_HALF, TEX_LEFT_OPEN, TEX_LEFT_HALF,
    ),
}

_TILE_TEXTURES = {
    FLOOR: TEX_FLOOR,
    PLAYER: TEX_FLOOR,
    WALL: TEX_WALL,
    EXIT: TEX_EXIT,
    COLLECTIBLE: TEX_COLLECTIBLE,
}


def direction_for_key(keycode: int) -> Direction | None:
    """Return the movement direction of a key code, or None if it is not a move key."""
    try:
        key = Key(keycode)
    except ValueError:
        return None
    return _KEY_DIRECTIONS.get(key)


@dataclass
class PlayerAnimation:
    """Cycles through a sequence of textures, holding each for a few redraws."""

    frames: tuple[str, ...]
    _tick: int = field(default=0, init=False, repr=False)

    def next_frame(self) -> str:
        """Return the texture to draw now and advance the animation."""
        frame = self.frames[(self._tick // FRAME_HOLD) % len(self.frames)]
        self._tick += 1
        return frame


@dataclass
class Game:
    """A game in progress on a validated map."""

    game_map: GameMap
    steps: int = 0
    direction: Direction = Direction.RIGHT
    running: bool = True
    player: Position = field(init=False)
    collectibles: int = field(init=False)
    animations: dict[Direction, PlayerAnimation] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.player = self.game_map.player
        self.collectibles = self.game_map.collectibles
        self.animations = {
            direction: PlayerAnimation(frames) for direction, frames in ANIMATION_FRAMES.items()
        }

    def move_to(self, x: int, y: int) -> bool:
        """Move the player to ``(x, y)`` unless a wall is there; return whether it moved."""
        try:
            tile = self.game_map.tile(x, y)
        except IndexError:
            return False
        if tile == WALL:
            return False
        if tile == COLLECTIBLE:
            self.collectibles -= 1
            self.game_map.grid[y][x] = FLOOR
        self.player = Position(x, y)
        self.steps += 1
        print(f"{self.steps} moves")
        if self.is_won():
            print("Congrats! You won!")
            self.running = False
        return True

    def handle_key(self, keycode: int) -> None:
        """React to a key: escape ends the game, movement keys move the player."""
        if not self.running:
            return
        if keycode == Key.ESC:
            self.running = False
            return
        direction = direction_for_key(keycode)
        if direction is None:
            return
        dx, dy = _OFFSETS[direction]
        self.move_to(self.player.x + dx, self.player.y + dy)
        self.direction = direction

    def tiles(self) -> Iterator[tuple[Position, str]]:
        """Yield the position and texture name of every map tile."""
        for y, row in enumerate(self.game_map.grid):
            for x, ch in enumerate(row):
                texture = _TILE_TEXTURES.get(ch)
                if texture is not None:
                    yield Position(x, y), texture

    def is_won(self) -> bool:
        """True once every collectible is taken and the player stands on the exit."""
        return (
            self.collectibles == 0
            and self.game_map.tile(self.player.x, self.player.y) == EXIT
        )