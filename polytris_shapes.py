"""
Procedural polyomino generator.

Each round gets its own catalog of connected shapes grown cell by cell inside
an N x N frame. Any candidate that matches one of the seven classic
tetrominoes under some rotation is thrown away, so every round plays with
pieces nobody has seen in ordinary Tetris.
"""
from __future__ import annotations
import logging
import random
from typing import List, Optional, Tuple

from polytris_config import (
    MAX_BLOCKS_PER_SHAPE, MAX_SHAPE_ATTEMPTS, MAX_SHAPE_SIZE,
    MIN_BLOCKS_PER_SHAPE, MIN_SHAPE_SIZE, SHAPE_TYPE_COUNT,
)
from polytris_geometry import Shape, block_count, copy_shape, normalize, rotate_cw, shapes_equal
from polytris_piece import PieceProto

logger = logging.getLogger(__name__)

TETROMINOES = {
    "I": [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]],
    "J": [[1,0,0],[1,1,1],[0,0,0]],
    "L": [[0,0,1],[1,1,1],[0,0,0]],
    "O": [[1,1],[1,1]],
    "S": [[0,1,1],[1,1,0],[0,0,0]],
    "T": [[0,1,0],[1,1,1],[0,0,0]],
    "Z": [[1,1,0],[0,1,1],[0,0,0]],
}
FORBIDDEN: Tuple[Shape, ...] = tuple(normalize(s) for s in TETROMINOES.values())

# Connected 5-cell "S" pentomino; returned when the retry budget runs out
FALLBACK_SHAPE: Shape = [
    [1, 1, 0],
    [0, 1, 0],
    [0, 1, 1],
]

NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def is_forbidden_tetromino(shape: Shape) -> bool:
    """True if any of the four rotations of *shape* crops to a classic tetromino."""
    cur = shape
    for _ in range(4):
        norm = normalize(cur)
        if any(shapes_equal(norm, f) for f in FORBIDDEN):
            return True
        cur = rotate_cw(cur)
    return False


def generate_connected_shape(size: int, min_blocks: int, max_blocks: int,
                             rng: random.Random) -> Shape:
    """Grow one connected shape in a size x size frame.

    The block target is drawn from [min_blocks, max_blocks] clamped to the frame.
    Growth stops at the target or when no filled cell has an empty neighbour,
    so the result may hold fewer blocks than requested; callers check.
    """
    most = size * size
    lo = max(1, min(min_blocks, most))
    hi = max(lo, min(max_blocks, most))
    target = rng.randint(lo, hi)

    shape = [[0] * size for _ in range(size)]
    sx, sy = rng.randrange(size), rng.randrange(size)
    shape[sy][sx] = 1
    filled = 1
    frontier = [(sx, sy)]

    while filled < target and frontier:
        idx = rng.randrange(len(frontier))
        x, y = frontier[idx]
        empty = [(x + dx, y + dy) for dx, dy in NEIGHBOURS
                 if 0 <= x + dx < size and 0 <= y + dy < size and not shape[y + dy][x + dx]]
        if not empty:
            frontier.pop(idx)
            continue
        nx, ny = rng.choice(empty)
        shape[ny][nx] = 1
        filled += 1
        frontier.append((nx, ny))
    return shape


def generate_legal_shape_random_size(rng: random.Random,
                                     min_size: int = MIN_SHAPE_SIZE, max_size: int = MAX_SHAPE_SIZE,
                                     min_blocks: int = MIN_BLOCKS_PER_SHAPE,
                                     max_blocks: int = MAX_BLOCKS_PER_SHAPE,
                                     max_attempts: int = MAX_SHAPE_ATTEMPTS) -> Shape:
    """Return a connected, non-tetromino shape of random frame size.

    Under-filled and tetromino-equivalent candidates are discarded and a new
    size is drawn. After *max_attempts* discards a copy of FALLBACK_SHAPE is
    returned instead.
    """
    for _ in range(max_attempts):
        size = rng.randint(min_size, max_size)
        candidate = generate_connected_shape(size, min_blocks, max_blocks, rng)
        if block_count(candidate) < min(min_blocks, size * size):
            continue
        if is_forbidden_tetromino(candidate):
            continue
        return candidate
    logger.warning("no legal shape after %d attempts, using fallback", max_attempts)
    return copy_shape(FALLBACK_SHAPE)


def generate_shape_prototypes(rng: random.Random, count: int = SHAPE_TYPE_COUNT,
                              **bounds) -> List[PieceProto]:
    """Build this round's catalog, type ids 1..count."""
    protos = [PieceProto(i, generate_legal_shape_random_size(rng, **bounds))
              for i in range(1, count + 1)]
    logger.debug("generated %d prototypes: %s", len(protos),
                 [block_count(p.shape) for p in protos])
    return protos


def fallback_proto(rng: Optional[random.Random] = None) -> PieceProto:
    return PieceProto(1, generate_legal_shape_random_size(rng or random.Random()))
