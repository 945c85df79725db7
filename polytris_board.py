"""Board helpers: create, collide, merge, clear lines, ghost"""
from typing import List, Optional, Tuple

from polytris_config import COLS, ROWS
from polytris_geometry import Shape, filled_cells
from polytris_piece import Piece

# ROWS x COLS of type ids, 0 = empty
Board = List[List[int]]


def create_empty_board(rows: int = ROWS, cols: int = COLS) -> Board:
    return [[0] * cols for _ in range(rows)]


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def collide(board: Board, piece: Piece, dx: int = 0, dy: int = 0,
            shape: Optional[Shape] = None) -> bool:
    """Return True if *piece* shifted by (dx, dy) hits a wall, the floor or a block.

    Cells above the top row never collide, which lets pieces spawn partly
    hidden. *shape* tests a rotation without building a new piece.
    """
    rows, cols = len(board), len(board[0])
    ox, oy = piece.x + dx, piece.y + dy
    for x, y in filled_cells(piece.shape if shape is None else shape):
        bx, by = ox + x, oy + y
        if bx < 0 or bx >= cols or by >= rows:
            return True
        if by >= 0 and board[by][bx]:
            return True
    return False


def merge(board: Board, piece: Piece) -> Board:
    """Return a copy of *board* with the piece written in (no collision check)."""
    out = copy_board(board)
    for x, y in filled_cells(piece.shape):
        by = piece.y + y
        if by >= 0:
            out[by][piece.x + x] = piece.type
    return out


def clear_lines(board: Board) -> Tuple[Board, int]:
    """Drop every full row, pad with empty rows on top. Input is left untouched."""
    kept = [row[:] for row in board if not all(row)]
    cleared = len(board) - len(kept)
    cols = len(board[0])
    return [[0] * cols for _ in range(cleared)] + kept, cleared


def drop_distance(board: Board, piece: Piece) -> int:
    """Rows the piece can still fall before it rests."""
    d = 0
    while not collide(board, piece, 0, d + 1):
        d += 1
    return d


def display_board(board: Board, piece: Optional[Piece]) -> Board:
    """Board copy with the active piece painted in, for rendering only."""
    out = copy_board(board)
    if piece is None:
        return out
    rows, cols = len(board), len(board[0])
    for x, y in filled_cells(piece.shape):
        bx, by = piece.x + x, piece.y + y
        if 0 <= by < rows and 0 <= bx < cols:
            out[by][bx] = piece.type
    return out
