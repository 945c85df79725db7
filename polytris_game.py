"""
Session owner: holds the one live SessionState, the gravity timer and the
level-up banner deadline. Everything the event loop does goes through here.
"""
from __future__ import annotations
import logging
import random
import threading
from typing import Callable, Dict, List, Optional

import pygame

from polytris_board import Board, display_board
from polytris_config import CONFIG
from polytris_piece import Piece, PieceProto
from polytris_session import (
    SessionState, ghost_piece, hard_drop, move_down, move_horizontal, new_session, rotate, tick,
)

logger = logging.getLogger(__name__)

GRAVITY_EVENT = pygame.event.custom_type()

COMMANDS = ("move_left", "move_right", "soft_drop", "rotate", "hard_drop", "reset")


class GravityTimer:
    """pygame timer posting GRAVITY_EVENT tagged with the session generation."""
    def __init__(self):
        self.interval_ms = 0
        self.generation = None

    def arm(self, interval_ms: int, generation: int):
        # set_timer replaces any timer already running for this event type
        pygame.time.set_timer(pygame.event.Event(GRAVITY_EVENT, generation=generation), interval_ms)
        self.interval_ms = interval_ms
        self.generation = generation

    def cancel(self):
        pygame.time.set_timer(GRAVITY_EVENT, 0)
        self.interval_ms = 0
        self.generation = None

    @property
    def armed(self) -> bool:
        return self.interval_ms > 0


class Game:
    def __init__(self, seed: Optional[int] = None, timer=None,
                 now: Callable[[], int] = pygame.time.get_ticks, level_up_ms: Optional[int] = None):
        self._lock = threading.RLock()
        self._rng = random.Random(CONFIG["SEED"] if seed is None else seed)
        self.timer = timer if timer is not None else GravityTimer()
        self.now = now
        self.level_up_ms = CONFIG["LEVEL_UP_MS"] if level_up_ms is None else level_up_ms
        self.generation = 0
        self.state: Optional[SessionState] = None
        self.level_up_until = 0
        self.reset()

    # ---------- lifecycle ----------
    def reset(self):
        """Tear down the current round and start a brand new one."""
        with self._lock:
            self.timer.cancel()
            self.generation += 1
            self.state = new_session(rng=self._rng)
            self.level_up_until = 0
            self._sync_timer()

    def _sync_timer(self):
        if self.state.game_over:
            if self.timer.armed:
                self.timer.cancel()
            return
        speed = self.state.speed_ms
        if not self.timer.armed or self.timer.interval_ms != speed or self.timer.generation != self.generation:
            self.timer.arm(speed, self.generation)

    def _apply(self, transition, *args):
        with self._lock:
            before = self.state
            after = transition(before, *args)
            if after is before:
                return
            self.state = after
            if after.level > before.level:
                self.level_up_until = self.now() + self.level_up_ms
            self._sync_timer()

    # ---------- inputs ----------
    def on_gravity(self, generation: Optional[int] = None):
        """Handle a timer tick; ticks from an earlier round are dropped."""
        with self._lock:
            if generation is not None and generation != self.generation:
                logger.debug("dropping stale tick from generation %s", generation)
                return
            self._apply(tick)

    def move_left(self):
        self._apply(move_horizontal, -1)

    def move_right(self):
        self._apply(move_horizontal, 1)

    def soft_drop(self):
        self._apply(move_down)

    def rotate(self):
        self._apply(rotate)

    def hard_drop(self):
        self._apply(hard_drop)

    def dispatch(self, command: str):
        if command not in COMMANDS:
            raise ValueError(f"unknown command {command!r}")
        getattr(self, command)()

    # ---------- outputs ----------
    def snapshot(self) -> SessionState:
        """The live state, read once under the lock; safe to render from."""
        with self._lock:
            return self.state

    @property
    def board(self) -> Board:
        return self.snapshot().board

    def display_board(self) -> Board:
        state = self.snapshot()
        return display_board(state.board, state.current)

    @property
    def current(self) -> Optional[Piece]:
        return self.snapshot().current

    @property
    def next(self) -> Optional[Piece]:
        return self.snapshot().next

    def ghost(self) -> Optional[Piece]:
        return ghost_piece(self.snapshot())

    @property
    def protos(self) -> List[PieceProto]:
        return list(self.snapshot().protos)

    @property
    def colors(self) -> Dict[int, pygame.Color]:
        return self.snapshot().colors

    @property
    def score(self) -> int:
        return self.snapshot().score

    @property
    def level(self) -> int:
        return self.snapshot().level

    @property
    def lines(self) -> int:
        return self.snapshot().lines

    @property
    def game_over(self) -> bool:
        return self.snapshot().game_over

    def level_up_visible(self) -> bool:
        return self.now() < self.level_up_until
