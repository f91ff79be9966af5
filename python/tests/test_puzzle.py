"""Tile and puzzle state model."""

from __future__ import annotations

import pytest

from backend.models import InternalInconsistencyError, PuzzleState, Tile


def _pieces(size: int) -> list[tuple[int, str]]:
    return [(p, f"img-{p}") for p in range(size * size - 1)]


# -- construction -------------------------------------------------------------


def test_from_pieces_starts_unscrambled() -> None:
    puzzle = PuzzleState.from_pieces(_pieces(3), 3)

    assert len(puzzle.tiles) == 8
    assert puzzle.positions() == list(range(8))
    assert [t.image for t in puzzle.tiles] == [f"img-{p}" for p in range(8)]
    assert puzzle.empty_position() == 8
    assert puzzle.is_solved()


def test_from_pieces_accepts_any_order() -> None:
    puzzle = PuzzleState.from_pieces(reversed(_pieces(3)), 3)
    assert [t.correct_position for t in puzzle.tiles] == list(range(8))


@pytest.mark.parametrize(
    "pieces",
    [
        [(p, None) for p in range(7)],                # too few
        [(p, None) for p in range(7)] + [(8, None)],  # the empty cell
        [(p, None) for p in range(7)] + [(6, None)],  # duplicate
        [(p, None) for p in range(7)] + [(9, None)],  # off the grid
    ],
    ids=["too-few", "empty-cell", "duplicate", "off-grid"],
)
def test_from_pieces_rejects_bad_input(pieces: list) -> None:
    with pytest.raises(ValueError):
        PuzzleState.from_pieces(pieces, 3)


def test_duplicate_positions_are_inconsistent() -> None:
    tiles = [Tile(p) for p in range(8)]
    tiles[0].current_position = 1
    with pytest.raises(InternalInconsistencyError):
        PuzzleState(3, tiles)


def test_assign_rejects_overlapping_positions() -> None:
    puzzle = PuzzleState.numbered(3)
    with pytest.raises(InternalInconsistencyError):
        puzzle.assign([0, 0, 2, 3, 4, 5, 6, 7])

    assert puzzle.positions() == list(range(8))
    assert puzzle.empty_position() == 8


def test_place_onto_occupied_cell_leaves_state_untouched() -> None:
    puzzle = PuzzleState.numbered(3)
    puzzle.place(7, 8)

    with pytest.raises(InternalInconsistencyError):
        puzzle.place(3, 4)

    assert puzzle.tiles[3].current_position == 3
    assert puzzle.empty_position() == 7
    assert puzzle.tile_at(7) is None
    puzzle.place(6, 7)
    assert puzzle.empty_position() == 6


# -- tiles --------------------------------------------------------------------


def test_tile_correct_position_is_read_only() -> None:
    tile = Tile(4, "img")
    with pytest.raises(AttributeError):
        tile.correct_position = 5  # type: ignore[misc]
    with pytest.raises(AttributeError):
        tile.image = "other"  # type: ignore[misc]
    assert tile.current_position == 4
    assert tile.label == 5


# -- queries ------------------------------------------------------------------


def test_empty_position_follows_place() -> None:
    puzzle = PuzzleState.numbered(3)
    puzzle.place(5, 8)

    assert puzzle.empty_position() == 5
    assert puzzle.tile_at(8) is puzzle.tiles[5]
    assert puzzle.tile_at(5) is None
    assert not puzzle.is_solved()


def test_is_solved_is_idempotent() -> None:
    puzzle = PuzzleState.numbered(4)
    assert puzzle.is_solved() and puzzle.is_solved()
