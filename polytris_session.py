"""
Game session: state aggregate and pure transitions.

A SessionState is never modified in place. Every transition takes a state and
returns the next one (or the same object when the command is rejected), so a
caller can hold on to an old state while computing a new one.

Game over is detected at spawn time: when the promoted "next" piece already
overlaps the stack, the session stops and both piece slots become None.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

import pygame

from polytris_board import Board, clear_lines, collide, create_empty_board, drop_distance, merge
from polytris_colors import assign_colors
from polytris_config import (
    COLS, LINES_PER_LEVEL, ROWS, SCORE_TABLE, SHAPE_TYPE_COUNT, SPEED_TABLE, validate_config,
)
from polytris_piece import Piece, PieceProto, create_piece
from polytris_shapes import generate_shape_prototypes

logger = logging.getLogger(__name__)


def line_score(lines: int, level: int) -> int:
    return SCORE_TABLE.get(lines, 0) * level


def level_for_lines(lines: int) -> int:
    return lines // LINES_PER_LEVEL + 1


def speed_for_level(level: int, table=SPEED_TABLE) -> int:
    """Gravity period in ms; levels past the table use its fastest entry."""
    for lv, ms in table:
        if lv == level:
            return ms
    return min(ms for _, ms in table)


@dataclass(frozen=True)
class SessionState:
    board: Board
    current: Optional[Piece]
    next: Optional[Piece]
    protos: Tuple[PieceProto, ...]
    colors: Dict[int, pygame.Color] = field(repr=False)
    rng: random.Random = field(repr=False, compare=False)
    score: int = 0
    lines: int = 0
    game_over: bool = False

    @property
    def level(self) -> int:
        return level_for_lines(self.lines)

    @property
    def speed_ms(self) -> int:
        return speed_for_level(self.level)

    @property
    def playing(self) -> bool:
        return not self.game_over and self.current is not None


def new_session(seed: Optional[int] = None, rng: Optional[random.Random] = None,
                rows: int = ROWS, cols: int = COLS, type_count: int = SHAPE_TYPE_COUNT) -> SessionState:
    """Fresh board, fresh catalog, fresh colours, two spawned pieces."""
    validate_config(cols=cols, rows=rows, type_count=type_count)
    rng = rng or random.Random(seed)
    protos = tuple(generate_shape_prototypes(rng, type_count))
    colors = assign_colors((p.type for p in protos), rng)
    board = create_empty_board(rows, cols)
    current = create_piece(protos, rng, cols)
    nxt = create_piece(protos, rng, cols)
    state = SessionState(board, current, nxt, protos, colors, rng)
    if collide(board, current):
        logger.info("session cannot start: first piece blocked")
        return replace(state, current=None, next=None, game_over=True)
    logger.info("session started with %d piece types", len(protos))
    return state


def lock(state: SessionState, piece: Piece) -> SessionState:
    """Write *piece* into the board, score cleared lines, promote the next piece."""
    board, cleared = clear_lines(merge(state.board, piece))
    score = state.score + line_score(cleared, state.level)
    lines = state.lines + cleared
    if cleared:
        logger.debug("cleared %d line(s) at level %d", cleared, state.level)
    if level_for_lines(lines) > state.level:
        logger.info("level up: %d", level_for_lines(lines))

    current = state.next if state.next is not None else create_piece(state.protos, state.rng, len(board[0]))
    nxt = create_piece(state.protos, state.rng, len(board[0]))
    if collide(board, current):
        logger.info("game over: score=%d lines=%d", score, lines)
        return replace(state, board=board, current=None, next=None,
                       score=score, lines=lines, game_over=True)
    return replace(state, board=board, current=current, next=nxt, score=score, lines=lines)


def _shift(state: SessionState, dx: int, dy: int) -> SessionState:
    if not state.playing or collide(state.board, state.current, dx, dy):
        return state
    return replace(state, current=state.current.moved(dx, dy))


def move_horizontal(state: SessionState, direction: int) -> SessionState:
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or +1, got {direction}")
    return _shift(state, direction, 0)


def move_down(state: SessionState) -> SessionState:
    return _shift(state, 0, 1)


def rotate(state: SessionState) -> SessionState:
    """Clockwise rotation in place; rejected if the rotated shape does not fit."""
    if not state.playing:
        return state
    turned = state.current.rotated()
    if collide(state.board, state.current, 0, 0, turned.shape):
        return state
    return replace(state, current=turned)


def tick(state: SessionState) -> SessionState:
    """One gravity step: fall a row, or lock when resting."""
    if not state.playing:
        return state
    if not collide(state.board, state.current, 0, 1):
        return replace(state, current=state.current.moved(0, 1))
    return lock(state, state.current)


def hard_drop(state: SessionState) -> SessionState:
    if not state.playing:
        return state
    piece = state.current
    return lock(state, piece.moved(0, drop_distance(state.board, piece)))


def ghost_piece(state: SessionState) -> Optional[Piece]:
    """Where the active piece would come to rest; None when not playing."""
    if not state.playing:
        return None
    piece = state.current
    return piece.moved(0, drop_distance(state.board, piece))
