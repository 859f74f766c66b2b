"""Command line entry point and pygame window for the game."""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from pathlib import Path

import pygame

from .game import (
    TEX_COLLECTIBLE,
    TEX_DOWN_HALF,
    TEX_DOWN_OPEN,
    TEX_EXIT,
    TEX_FLOOR,
    TEX_LEFT_HALF,
    TEX_LEFT_OPEN,
    TEX_PLAYER,
    TEX_RIGHT_HALF,
    TEX_RIGHT_OPEN,
    TEX_UP_HALF,
    TEX_UP_OPEN,
    TEX_WALL,
    Game,
    Key,
)
from .mapfile import DEFAULT_MAPS_DIR, MapError, load_map
from .xpm import XpmError, XpmImage, read_xpm_file

TILE_SIZE = 32
DEFAULT_TEXTURE_DIR = "textures"
WINDOW_TITLE = "So_Long"
FRAMES_PER_SECOND = 60
STEPS_COLOR = (255, 255, 255)

BASE_TEXTURES = {
    TEX_FLOOR: "black.xpm",
    TEX_WALL: "wall.xpm",
    TEX_EXIT: "portal.xpm",
    TEX_COLLECTIBLE: "coll.xpm",
    TEX_PLAYER: "pacman.xpm",
}

BONUS_TEXTURES = {
    TEX_FLOOR: "black.xpm",
    TEX_WALL: "wall.xpm",
    TEX_EXIT: "portal.xpm",
    TEX_COLLECTIBLE: "coll.xpm",
    TEX_PLAYER: "pac_closed.xpm",
    TEX_UP_HALF: "pac_up_sem.xpm",
    TEX_UP_OPEN: "pac_up_open.xpm",
    TEX_DOWN_HALF: "pac_down_sem.xpm",
    TEX_DOWN_OPEN: "pac_down_open.xpm",
    TEX_RIGHT_HALF: "pac_right_sem.xpm",
    TEX_RIGHT_OPEN: "pac_right_open.xpm",
    TEX_LEFT_HALF: "pac_left_sem.xpm",
    TEX_LEFT_OPEN: "pac_left_open.xpm",
}

_PYGAME_KEYS = {
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
}


def build_parser() -> argparse.ArgumentParser:
    """Return the command line parser."""
    parser = argparse.ArgumentParser(prog="solong", description="Collect everything, then exit.")
    parser.add_argument("map_files", nargs="*", metavar="MAP", help="map file ending in .ber")
    parser.add_argument("--maps-dir", default=DEFAULT_MAPS_DIR, help="directory holding maps")
    parser.add_argument(
        "--textures-dir", default=DEFAULT_TEXTURE_DIR, help="directory holding XPM textures"
    )
    parser.add_argument(
        "--bonus", action="store_true", help="animate the player and show the step count"
    )
    return parser


def load_textures(texture_dir: str | Path = DEFAULT_TEXTURE_DIR, bonus: bool = False) -> dict[str, XpmImage]:
    """Read every texture the game needs from ``texture_dir``."""
    files = BONUS_TEXTURES if bonus else BASE_TEXTURES
    return {name: read_xpm_file(Path(texture_dir) / filename) for name, filename in files.items()}


def _to_surface(image: XpmImage) -> pygame.Surface:
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for index, value in enumerate(image.pixels):
        y, x = divmod(index, image.width)
        # The top byte holds transparency rather than opacity.
        alpha = 255 - ((value >> 24) & 0xFF)
        surface.set_at((x, y), ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, alpha))
    return surface


class Renderer:
    """Draws a game onto a surface."""

    def __init__(self, screen: pygame.Surface, textures: Mapping[str, XpmImage], bonus: bool = False):
        self.screen = screen
        self.bonus = bonus
        self._surfaces = {name: _to_surface(image) for name, image in textures.items()}
        self._font: pygame.font.Font | None = None

    def _blit(self, name: str, x: int, y: int) -> None:
        self.screen.blit(self._surfaces[name], (x * TILE_SIZE, y * TILE_SIZE))

    def _draw_steps(self, steps: int) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 20)
        text = self._font.render(str(steps), True, STEPS_COLOR)
        self.screen.blit(text, (TILE_SIZE // 2, TILE_SIZE // 2))

    def draw(self, game: Game) -> None:
        """Clear the screen and draw the map, the player and, in bonus mode, the steps."""
        self.screen.fill((0, 0, 0))
        for position, name in game.tiles():
            self._blit(name, position.x, position.y)
        if self.bonus:
            player_texture = game.animations[game.direction].next_frame()
        else:
            player_texture = TEX_PLAYER
        self._blit(player_texture, game.player.x, game.player.y)
        if self.bonus:
            self._draw_steps(game.steps)


def run(
    map_name: str,
    maps_dir: str | Path = DEFAULT_MAPS_DIR,
    texture_dir: str | Path = DEFAULT_TEXTURE_DIR,
    bonus: bool = False,
) -> None:
    """Load a map and play it in a window until the game ends or the window closes."""
    game_map = load_map(map_name, maps_dir)
    textures = load_textures(texture_dir, bonus)
    game = Game(game_map)
    pygame.init()
    try:
        screen = pygame.display.set_mode(
            (game_map.width() * TILE_SIZE, game_map.height() * TILE_SIZE)
        )
        pygame.display.set_caption(WINDOW_TITLE)
        renderer = Renderer(screen, textures, bonus)
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYUP:
                    key = _PYGAME_KEYS.get(event.key)
                    if key is not None:
                        game.handle_key(key)
            if not game.running:
                break
            renderer.draw(game)
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Run the game from the command line and return the exit status."""
    args = build_parser().parse_args(argv)
    if len(args.map_files) != 1:
        print("Error:\nWrong number of arguments!")
        return 1
    try:
        run(args.map_files[0], args.maps_dir, args.textures_dir, args.bonus)
    except MapError as exc:
        print(f"Error:\n{exc}")
        return 1
    except XpmError:
        print("Error loading images!")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())