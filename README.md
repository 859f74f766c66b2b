# solong

A small tile-based puzzle game. Guide the player around a walled map, pick up
every collectible and then reach the exit. Every move is counted and printed to
the terminal as `N moves`, and `Congrats! You won!` is printed when you win.

## Installing

```
pip install .
```

The game window is drawn with pygame.

## Playing

```
solong level.ber
```

The map name is looked up inside a `maps` directory relative to the current
directory and must end in `.ber`. Textures are XPM files read from a
`textures` directory. Both can be changed:

```
solong level.ber --maps-dir path/to/maps --textures-dir path/to/textures
```

Controls (acted on when the key is released):

- `W`/`A`/`S`/`D` or the arrow keys move the player
- `Esc` or closing the window quits

Pass `--bonus` for an animated player sprite that faces the direction of the
last move, and an on-screen move counter in the top-left corner. Run
`solong --help` for all options.

The command exits with status 0 after a game, and with status 1 (after printing
an `Error:` message) when the number of map arguments is not exactly one, when
the map is invalid, or when a texture cannot be loaded.

### Texture files

The textures directory must hold these XPM files:

- always: `black.xpm` (floor), `wall.xpm`, `portal.xpm` (exit), `coll.xpm`
  (collectible)
- normal mode: `pacman.xpm` (player)
- `--bonus` mode: `pac_closed.xpm`, and for each of `up`, `down`, `left` and
  `right` a `pac_<dir>_sem.xpm` and a `pac_<dir>_open.xpm`

Each tile is drawn 32×32 pixels.

## Map format

A map is a text file made of these characters:

| Char | Meaning     |
|------|-------------|
| `1`  | wall        |
| `0`  | floor       |
| `P`  | player start (exactly one) |
| `E`  | exit (exactly one)         |
| `C`  | collectible (at least one) |

The map has to be rectangular and fully surrounded by walls, and may not
contain empty lines or any other character. The exit and every collectible
must be reachable from the player's start. Example:

```
1111111
1P0C0E1
1111111
```

## Using it as a library

```python
from solong.mapfile import parse_map
from solong.game import Game, Key

game_map = parse_map("1111111\n1P0C0E1\n1111111\n")
game = Game(game_map)
for _ in range(4):
    game.handle_key(Key.D)
print(game.collectibles, game.is_won(), game.running)  # 0 True False
```

- `solong.mapfile.load_map(name, maps_dir)` reads and validates a map from
  disk; `parse_map(text)` validates map text. Both return a `GameMap` and raise
  `MapError` with a description when the map is invalid.
- `solong.game.Game` holds a game in progress: `move_to(x, y)`,
  `handle_key(keycode)`, `tiles()`, `is_won()`, plus `steps`, `player`,
  `collectibles`, `direction` and `running`.
- `solong.xpm.read_xpm_file(path)` and `parse_xpm_text(text)` decode an XPM
  image into an `XpmImage` (with `pixel(x, y)`), raising `XpmError` on bad data.
- `solong.colors.lookup_color(name)` resolves X11 colour names to `0xRRGGBB`.
- `solong.app.run(map_name, maps_dir, texture_dir, bonus)` opens the window and
  plays a map.

## What it does not do

No maps or texture files come with the package; you provide the `.ber` maps
and the XPM images listed above. The XPM reader understands only colour
(`c`) definitions given as `#hex` values or X11 colour names.

## Tests

```
pip install .[test]
pytest
```