from backend.models.difficulty import Difficulty
from backend.models.errors import (
    InternalInconsistencyError,
    InvalidImageError,
    InvalidTransitionError,
    PuzzleError,
)
from backend.models.grid import GridIndex, are_positions_adjacent
from backend.models.move import Direction, MoveResult, MoveStatus, RejectReason
from backend.models.puzzle import PuzzleState
from backend.models.tile import Tile

__all__ = [
    "Difficulty",
    "Direction",
    "GridIndex",
    "InternalInconsistencyError",
    "InvalidImageError",
    "InvalidTransitionError",
    "MoveResult",
    "MoveStatus",
    "PuzzleError",
    "PuzzleState",
    "RejectReason",
    "Tile",
    "are_positions_adjacent",
]
