import random

from polytris_geometry import (
    block_count, copy_shape, filled_cells, normalize, rotate_cw, shapes_equal,
)

from conftest import is_connected


def test_rotate_cw_known_shape():
    m = [[1, 1, 0],
         [0, 1, 0],
         [0, 0, 0]]
    assert rotate_cw(m) == [[0, 0, 1],
                            [0, 1, 1],
                            [0, 0, 0]]


def test_rotate_formula_and_no_mutation():
    m = [[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 15, 16]]
    before = copy_shape(m)
    r = rotate_cw(m)
    n = len(m)
    for y in range(n):
        for x in range(n):
            assert r[y][x] == m[n - 1 - x][y]
    assert m == before
    assert r is not m


def test_four_rotations_are_identity():
    rnd = random.Random(7)
    for n in (2, 3, 4, 5):
        for _ in range(20):
            m = [[rnd.randint(0, 1) for _ in range(n)] for _ in range(n)]
            r = m
            for _ in range(4):
                r = rotate_cw(r)
            assert shapes_equal(r, m)


def test_normalize_crops_to_bounding_box():
    m = [[0, 0, 0, 0],
         [0, 1, 1, 0],
         [0, 0, 1, 0],
         [0, 0, 0, 0]]
    assert normalize(m) == [[1, 1], [0, 1]]


def test_normalize_empty_is_single_zero():
    assert normalize([[0, 0], [0, 0]]) == [[0]]


def test_shapes_equal_dimension_mismatch():
    assert not shapes_equal([[1, 1]], [[1], [1]])
    assert not shapes_equal([[1]], [[1], [1]])
    assert shapes_equal([[1, 0]], [(1, 0)])
    assert not shapes_equal([[1, 0]], [[1, 1]])


def test_cells_count_and_connectivity():
    m = [[1, 0, 1], [1, 0, 1], [0, 0, 0]]
    assert sorted(filled_cells(m)) == [(0, 0), (0, 1), (2, 0), (2, 1)]
    assert block_count(m) == 4
    assert not is_connected(m)
    m[0][1] = 1
    assert is_connected(m)
    assert not is_connected([[0]])
