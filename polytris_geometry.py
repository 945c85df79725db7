"""Shape matrix helpers: rotation, bounding-box crop, equality"""
from typing import Iterator, List, Tuple

Shape = List[List[int]]


def rotate_cw(m: Shape) -> Shape:
    """90° clockwise: result[y][x] = m[N-1-x][y]. Never mutates *m*."""
    return [list(row) for row in zip(*m[::-1])]


def copy_shape(m: Shape) -> Shape:
    return [list(row) for row in m]


def filled_cells(m: Shape) -> Iterator[Tuple[int, int]]:
    """Yield (x, y) of every filled cell in local coordinates."""
    for y, row in enumerate(m):
        for x, v in enumerate(row):
            if v:
                yield x, y


def normalize(m: Shape) -> Shape:
    """Crop to the tight bounding box of filled cells; empty -> [[0]]."""
    cells = list(filled_cells(m))
    if not cells:
        return [[0]]
    xs = [x for x, _ in cells]
    ys = [y for _, y in cells]
    return [row[min(xs):max(xs) + 1] for row in m[min(ys):max(ys) + 1]]


def shapes_equal(a: Shape, b: Shape) -> bool:
    if len(a) != len(b):
        return False
    for ra, rb in zip(a, b):
        if len(ra) != len(rb):
            return False
        if any(va != vb for va, vb in zip(ra, rb)):
            return False
    return True


def block_count(m: Shape) -> int:
    return sum(1 for _ in filled_cells(m))

