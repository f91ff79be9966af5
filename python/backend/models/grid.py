"""Row-major grid index helpers.

A cell of an N×N grid is addressed by a single ``int`` in ``[0, N²-1]``:
``row = index // N`` and ``col = index % N``.
"""

from __future__ import annotations

GridIndex = int

MIN_SIZE = 2


def check_size(size: int) -> None:
    if size < MIN_SIZE:
        raise ValueError(f"Grid size must be at least {MIN_SIZE}, got {size}.")


def check_index(index: GridIndex, size: int) -> None:
    if not 0 <= index < size * size:
        raise ValueError(
            f"Grid index {index} is outside a {size}×{size} grid "
            f"(0..{size * size - 1})."
        )


def empty_index(size: int) -> GridIndex:
    """The bottom-right cell, which never holds a tile in the solved picture."""
    return size * size - 1


def to_row_col(index: GridIndex, size: int) -> tuple[int, int]:
    return divmod(index, size)


def to_index(row: int, col: int, size: int) -> GridIndex:
    return row * size + col


def are_positions_adjacent(a: GridIndex, b: GridIndex, size: int) -> bool:
    """Return True if cells *a* and *b* share an edge.

    Diagonal neighbours are never adjacent.
    """
    check_index(a, size)
    check_index(b, size)
    ra, ca = to_row_col(a, size)
    rb, cb = to_row_col(b, size)
    return (ra == rb and abs(ca - cb) == 1) or (ca == cb and abs(ra - rb) == 1)

