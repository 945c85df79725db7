import random

import pytest

from polytris_board import create_empty_board
from polytris_piece import Piece, PieceProto
from polytris_session import SessionState

# Hand-built shapes; the generator would never hand these out
BAR3 = [[1, 1, 1], [0, 0, 0], [0, 0, 0]]
POLE3 = [[1, 0, 0], [1, 0, 0], [1, 0, 0]]
DOT = [[1, 0, 0], [0, 0, 0], [0, 0, 0]]


def piece(shape, x=0, y=0, t=1):
    return Piece(t, [row[:] for row in shape], x, y)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_state(rng):
    def factory(board=None, current=None, nxt=None, lines=0, score=0):
        protos = (PieceProto(1, DOT),)
        return SessionState(
            board=board if board is not None else create_empty_board(),
            current=current if current is not None else piece(DOT, 4, 0),
            next=nxt if nxt is not None else piece(DOT, 4, 0),
            protos=protos,
            colors={},
            rng=rng,
            score=score,
            lines=lines,
        )
    return factory


def is_connected(shape):
    """True if the filled cells form one 4-connected component."""
    cells = {(x, y) for y, row in enumerate(shape) for x, v in enumerate(row) if v}
    if not cells:
        return False
    start = next(iter(cells))
    seen = {start}
    stack = [start]
    while stack:
        x, y = stack.pop()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            n = (x + dx, y + dy)
            if n in cells and n not in seen:
                seen.add(n)
                stack.append(n)
    return len(seen) == len(cells)
