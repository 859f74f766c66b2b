import pytest

from solong.game import (
    ANIMATION_FRAMES,
    TEX_COLLECTIBLE,
    TEX_EXIT,
    TEX_FLOOR,
    TEX_PLAYER,
    TEX_RIGHT_HALF,
    TEX_WALL,
    Direction,
    Game,
    Key,
    PlayerAnimation,
    direction_for_key,
)
from solong.mapfile import Position, parse_map

CORRIDOR = "1111111\n1P0C0E1\n1111111\n"


def make_game(text=CORRIDOR):
    return Game(parse_map(text))


@pytest.mark.parametrize(
    "keycode, expected",
    [
        (Key.W, Direction.UP),
        (126, Direction.UP),
        (Key.S, Direction.DOWN),
        (Key.DOWN, Direction.DOWN),
        (Key.A, Direction.LEFT),
        (123, Direction.LEFT),
        (Key.D, Direction.RIGHT),
        (124, Direction.RIGHT),
        (Key.ESC, None),
        (999, None),
    ],
)
def test_direction_for_key(keycode, expected):
    assert direction_for_key(keycode) == expected


def test_new_game_starts_at_player():
    game = make_game()
    assert game.player == Position(1, 1)
    assert game.steps == 0
    assert game.direction == Direction.RIGHT
    assert game.running


def test_move_counts_steps_and_prints(capsys):
    game = make_game()
    game.handle_key(Key.RIGHT)
    assert game.player == Position(2, 1)
    assert game.steps == 1
    assert capsys.readouterr().out == "1 moves\n"


def test_wall_blocks_movement_but_sets_direction(capsys):
    game = make_game()
    game.handle_key(Key.W)
    assert game.player == Position(1, 1)
    assert game.steps == 0
    assert game.direction == Direction.UP
    assert capsys.readouterr().out == ""


def test_move_to_wall_returns_false():
    game = make_game()
    assert game.move_to(0, 1) is False
    assert game.move_to(2, 1) is True


def test_collecting_clears_tile():
    game = make_game()
    game.handle_key(Key.D)
    game.handle_key(Key.D)
    assert game.collectibles == 0
    assert game.game_map.tile(3, 1) == "0"


def test_reaching_exit_after_collecting_wins(capsys):
    game = make_game()
    for _ in range(4):
        game.handle_key(Key.RIGHT)
    assert game.is_won()
    assert not game.running
    assert game.steps == 4
    assert "Congrats! You won!" in capsys.readouterr().out


def test_exit_without_collectibles_does_not_win():
    game = make_game("11111\n1PEC1\n11111\n")
    game.handle_key(Key.RIGHT)
    assert game.player == Position(2, 1)
    assert not game.is_won()
    assert game.running


def test_escape_stops_game_and_ignores_later_keys():
    game = make_game()
    game.handle_key(Key.ESC)
    assert not game.running
    game.handle_key(Key.RIGHT)
    assert game.player == Position(1, 1)


def test_unknown_key_changes_nothing():
    game = make_game()
    game.handle_key(42)
    assert game.player == Position(1, 1)
    assert game.steps == 0


def test_tiles_cover_whole_map():
    game = make_game()
    tiles = dict(game.tiles())
    assert len(tiles) == game.game_map.width() * game.game_map.height()
    assert tiles[Position(0, 0)] == TEX_WALL
    assert tiles[Position(1, 1)] == TEX_FLOOR
    assert tiles[Position(3, 1)] == TEX_COLLECTIBLE
    assert tiles[Position(5, 1)] == TEX_EXIT


def test_animation_holds_each_frame_and_cycles():
    anim = PlayerAnimation(("a", "b", "c", "d", "e", "f"))
    frames = [anim.next_frame() for _ in range(31)]
    assert frames[:5] == ["a"] * 5
    assert frames[5:10] == ["b"] * 5
    assert frames[25:30] == ["f"] * 5
    assert frames[30] == "a"


def test_animation_frames_start_closed():
    assert all(frames[0] == TEX_PLAYER for frames in ANIMATION_FRAMES.values())
    assert ANIMATION_FRAMES[Direction.RIGHT][1] == TEX_RIGHT_HALF


def test_each_direction_has_own_animation():
    game = make_game()
    game.animations[Direction.RIGHT].next_frame()
    assert game.animations[Direction.UP].next_frame() == TEX_PLAYER
    assert game.animations[Direction.RIGHT] is not game.animations[Direction.UP]