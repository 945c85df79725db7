"""Piece model: catalog prototypes and the falling piece"""
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from polytris_config import COLS
from polytris_geometry import Shape, copy_shape, rotate_cw


@dataclass(frozen=True)
class PieceProto:
    """Immutable catalog entry; the shape is stored as a tuple of tuples."""
    type: int
    shape: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "shape", tuple(tuple(r) for r in self.shape))

    @property
    def size(self) -> int:
        return len(self.shape)


@dataclass
class Piece:
    type: int
    shape: Shape = field(repr=False)
    x: int
    y: int

    @property
    def size(self) -> int:
        return len(self.shape)

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.type, copy_shape(self.shape), self.x + dx, self.y + dy)

    def rotated(self) -> "Piece":
        return Piece(self.type, rotate_cw(self.shape), self.x, self.y)

    @staticmethod
    def spawn(proto: PieceProto, cols: int = COLS) -> "Piece":
        """Centre the frame on the board using its own side length; row 0."""
        return Piece(proto.type, copy_shape(proto.shape), cols // 2 - proto.size // 2, 0)


def create_piece(protos: Sequence[PieceProto], rng: Optional[random.Random] = None,
                 cols: int = COLS) -> Piece:
    """Spawn a piece from a uniformly chosen prototype.

    An empty catalog only happens before a session exists; in that case a
    one-off shape is generated on the spot.
    """
    rng = rng or random.Random()
    if protos:
        proto = rng.choice(protos)
    else:
        from polytris_shapes import fallback_proto
        proto = fallback_proto(rng)
    return Piece.spawn(proto, cols)
