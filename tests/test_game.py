from dataclasses import replace

import pytest

from polytris_board import create_empty_board
from polytris_config import COLS, ROWS
from polytris_game import COMMANDS, Game
from polytris_session import ghost_piece

from conftest import BAR3, DOT, piece


class FakeTimer:
    def __init__(self):
        self.interval_ms = 0
        self.generation = None
        self.arms = []

    def arm(self, interval_ms, generation):
        self.interval_ms = interval_ms
        self.generation = generation
        self.arms.append((interval_ms, generation))

    def cancel(self):
        self.interval_ms = 0
        self.generation = None

    @property
    def armed(self):
        return self.interval_ms > 0


@pytest.fixture
def clock():
    return [0]


@pytest.fixture
def game(clock):
    return Game(seed=42, timer=FakeTimer(), now=lambda: clock[0], level_up_ms=1000)


def test_start_arms_level_one_timer(game):
    assert game.timer.arms == [(800, game.generation)]
    assert not game.game_over
    assert game.score == 0 and game.level == 1 and game.lines == 0
    assert game.current is not None and game.next is not None


def test_gravity_tick_moves_piece(game):
    y = game.current.y
    game.on_gravity(game.generation)
    assert game.current.y == y + 1


def test_stale_tick_is_ignored(game):
    old = game.generation
    game.reset()
    state = game.state
    game.on_gravity(old)
    assert game.state is state
    assert game.generation == old + 1
    assert game.timer.generation == game.generation


def test_reset_builds_new_round(game):
    game.state = replace(game.state, score=900, lines=12)
    first_protos = game.protos
    game.reset()
    assert game.score == 0 and game.lines == 0
    assert game.protos != first_protos
    assert not any(v for row in game.board for v in row)


def test_level_up_rearms_timer_and_shows_banner(game, clock):
    board = create_empty_board()
    board[ROWS - 1] = [1] * (COLS - 1) + [0]
    game.state = replace(game.state, board=board, lines=4,
                         current=piece(DOT, COLS - 1, 0), next=piece(DOT, 4, 0))
    clock[0] = 5000
    game.hard_drop()
    assert game.level == 2
    assert game.timer.interval_ms == 700
    assert game.level_up_visible()
    clock[0] = 6000
    assert not game.level_up_visible()


def test_game_over_cancels_timer_and_ignores_commands(game):
    board = create_empty_board()
    for c in range(3, 7):
        board[0][c] = 2
    game.state = replace(game.state, board=board,
                         current=piece(DOT, 0, ROWS - 1), next=piece(BAR3, 3, 0))
    game.on_gravity(game.generation)
    assert game.game_over
    assert not game.timer.armed
    frozen = game.state
    for cmd in COMMANDS[:-1]:
        game.dispatch(cmd)
    game.on_gravity(game.generation)
    assert game.state is frozen
    game.dispatch("reset")
    assert not game.game_over
    assert game.timer.armed


def test_display_board_overlays_active_piece(game):
    shown = game.display_board()
    cur = game.current
    cells = [(cur.x + x, cur.y + y) for y, row in enumerate(cur.shape) for x, v in enumerate(row) if v]
    for x, y in cells:
        assert shown[y][x] == cur.type
    assert not any(v for row in game.board for v in row)


def test_ghost_rests_on_floor(game):
    g = game.ghost()
    assert g.x == game.current.x
    assert g.y >= game.current.y


def test_unknown_command_raises(game):
    with pytest.raises(ValueError):
        game.dispatch("hold")


class CountingLock:
    def __init__(self, inner):
        self.inner = inner
        self.entered = 0

    def __enter__(self):
        self.entered += 1
        return self.inner.__enter__()

    def __exit__(self, *exc):
        return self.inner.__exit__(*exc)


def test_outputs_read_state_once_under_lock(game):
    lock = CountingLock(game._lock)
    game._lock = lock
    snap = game.snapshot()
    assert snap is game.state
    assert lock.entered == 1
    shown = game.display_board()
    assert lock.entered == 2
    assert shown == game.display_board()
    lock.entered = 0
    assert game.score == snap.score
    assert game.ghost() == ghost_piece(snap)
    assert lock.entered == 2


def test_snapshot_is_stable_across_later_commands(game):
    snap = game.snapshot()
    game.hard_drop()
    assert game.snapshot() is not snap
    assert snap.current is not None
    assert not any(v for row in snap.board for v in row)
