"""Scrambling and the solvability check.

The 2×2 puzzle is small enough to enumerate: every placement of its three
tiles is checked against a breadth-first search over legal moves.
"""

from __future__ import annotations

import itertools
import random
from collections import deque

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import Solver
from backend.models import PuzzleState


# -- helpers ------------------------------------------------------------------


def _pieces(size: int) -> list[tuple[int, None]]:
    return [(p, None) for p in range(size * size - 1)]


def _state(size: int, positions: list[int]) -> PuzzleState:
    puzzle = PuzzleState.numbered(size)
    puzzle.assign(positions)
    return puzzle


def _reachable(size: int) -> set[tuple[int, ...]]:
    """Every tile placement reachable from the solved puzzle."""
    start = tuple(range(size * size - 1))
    seen = {start}
    queue = deque([start])
    while queue:
        positions = queue.popleft()
        for index in range(len(positions)):
            game = GamePlay.from_puzzle(_state(size, list(positions)))
            if game.attempt_move(index).applied:
                nxt = tuple(game.puzzle.positions())
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
    return seen


# -- solvability --------------------------------------------------------------


def test_solved_board_is_solvable() -> None:
    assert Solver.is_solvable(PuzzleState.numbered(4))


def test_single_swap_is_unsolvable() -> None:
    positions = list(range(8))
    positions[0], positions[1] = 1, 0
    assert not Solver.is_solvable(_state(3, positions))


def test_solvability_matches_exhaustive_search_2x2() -> None:
    reachable = _reachable(2)
    assert len(reachable) == 12  # half of the 4! placements

    for placement in itertools.permutations(range(4), 3):
        expected = placement in reachable
        assert Solver.is_solvable(_state(2, list(placement))) is expected


@pytest.mark.parametrize(
    "perm, parity",
    [([0, 1, 2], 0), ([1, 0, 2], 1), ([1, 2, 0], 0), ([3, 2, 1, 0], 0), ([1, 0, 3, 2, 4], 0)],
)
def test_permutation_parity(perm: list[int], parity: int) -> None:
    assert Solver.permutation_parity(perm) == parity


def test_moves_preserve_solvability() -> None:
    game = GamePlay(_pieces(4), 4, rng=random.Random(11))
    rng = random.Random(12)
    for _ in range(200):
        game.attempt_move(rng.randrange(15))
        assert Solver.is_solvable(game.puzzle)


# -- scrambling ---------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5])
@pytest.mark.parametrize("seed", range(10))
def test_scramble_is_solvable_with_empty_last(size: int, seed: int) -> None:
    puzzle = GameGenerator.generate(_pieces(size), size, rng=random.Random(seed))

    assert puzzle.empty_position() == size * size - 1
    assert sorted(puzzle.positions()) == list(range(size * size - 1))
    assert Solver.is_solvable(puzzle)


def test_raw_scramble_can_be_unsolvable() -> None:
    results = {
        Solver.is_solvable(
            GameGenerator.generate(
                _pieces(3), 3, rng=random.Random(seed), ensure_solvable=False
            )
        )
        for seed in range(60)
    }
    assert results == {True, False}


def test_scramble_is_repeatable_with_seed() -> None:
    a = GameGenerator.generate(_pieces(4), 4, rng=random.Random(99))
    b = GameGenerator.generate(_pieces(4), 4, rng=random.Random(99))
    assert a.positions() == b.positions()


def test_scramble_keeps_images_with_their_tiles() -> None:
    pieces = [(p, f"img-{p}") for p in range(8)]
    puzzle = GameGenerator.generate(pieces, 3, rng=random.Random(5))

    for tile in puzzle.tiles:
        assert tile.image == f"img-{tile.correct_position}"


def test_solved_helper_does_not_scramble() -> None:
    puzzle = GameGenerator.solved(_pieces(3), 3)
    assert puzzle.is_solved()
