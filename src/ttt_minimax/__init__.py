"""ttt_minimax package.

Board engine, symmetry canonicalization, player strategies and a memoized
minimax solver for 3x3 tic-tac-toe, plus a small terminal CLI.

Convenience imports are exposed for common workflows.
"""

from .board import (
    Board,
    BoardError,
    InvalidIndexError,
    NoOpenSpacesError,
    OccupiedCellError,
    Open,
    Player,
)
from .game import Game
from .solver import clear_cache, minimax_score, pick_optimal_move
from .strategies import PlayerKind, pick_move

__all__ = [
    "Board",
    "BoardError",
    "InvalidIndexError",
    "OccupiedCellError",
    "NoOpenSpacesError",
    "Open",
    "Player",
    "Game",
    "PlayerKind",
    "pick_move",
    "minimax_score",
    "pick_optimal_move",
    "clear_cache",
]
