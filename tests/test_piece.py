import random

from polytris_config import COLS, MAX_BLOCKS_PER_SHAPE, MIN_BLOCKS_PER_SHAPE
from polytris_geometry import block_count
from polytris_piece import Piece, PieceProto, create_piece
from polytris_shapes import is_forbidden_tetromino

from conftest import BAR3, POLE3, is_connected


def test_empty_catalog_spawns_a_legal_piece():
    p = create_piece((), random.Random(17))
    assert p.type == 1
    assert (p.x, p.y) == (COLS // 2 - p.size // 2, 0)
    assert all(len(row) == p.size for row in p.shape)
    assert is_connected(p.shape)
    assert MIN_BLOCKS_PER_SHAPE <= block_count(p.shape) <= MAX_BLOCKS_PER_SHAPE
    assert not is_forbidden_tetromino(p.shape)
    assert all(isinstance(row, list) for row in p.shape)


def test_spawned_shape_is_a_private_copy():
    proto = PieceProto(3, BAR3)
    a = create_piece([proto], random.Random(1))
    b = create_piece([proto], random.Random(1))
    a.shape[0][0] = 0
    assert b.shape[0][0] == 1
    assert proto.shape[0] == (1, 1, 1)


def test_pick_is_uniform_over_catalog():
    protos = [PieceProto(1, BAR3), PieceProto(2, POLE3)]
    rng = random.Random(5)
    seen = {create_piece(protos, rng).type for _ in range(50)}
    assert seen == {1, 2}


def test_spawn_centres_by_frame_size():
    four = [[0, 0, 0, 0], [1, 1, 1, 0], [0, 0, 1, 1], [0, 0, 0, 0]]
    assert Piece.spawn(PieceProto(1, four), cols=10).x == 3
    assert Piece.spawn(PieceProto(1, BAR3), cols=10).x == 4
    assert Piece.spawn(PieceProto(1, BAR3), cols=14).x == 6
