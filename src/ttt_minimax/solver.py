"""
Exact game-theoretic solver (minimax with memoization).
Scoring:
- Scores are absolute: +10 means player 1 (X) wins under optimal play, -10
  means player 2 (O) wins, 0 is a forced draw.
- Player 1 maximizes, player 2 minimizes.
- Scores are memoized by canonical state key, so all eight symmetry images of
  a position share one entry. No pruning: the whole tree is explored once.
"""
import logging
from typing import Dict, Optional

from .board import Board, NoOpenSpacesError, Player

log = logging.getLogger(__name__)

WIN_SCORE = 10

MoveCache = Dict[str, int]

_CACHE: MoveCache = {}


def default_cache() -> MoveCache:
    """The process-wide cache used when no explicit cache is passed."""
    return _CACHE


def clear_cache() -> None:
    _CACHE.clear()


def terminal_score(board: Board) -> Optional[int]:
    winner = board.check_matches()
    if winner is Player.X:
        return WIN_SCORE
    if winner is Player.O:
        return -WIN_SCORE
    if board.is_full():
        return 0
    return None


def minimax_score(board: Board, first: bool, cache: Optional[MoveCache] = None) -> int:
    """Score `board` with player 1 to move if `first`, else player 2."""
    if cache is None:
        cache = _CACHE
    key = board.state_key()
    if key in cache:
        return cache[key]
    score = terminal_score(board)
    if score is None:
        scores = []
        for i in board.get_open_spaces():
            child = board.copy()
            child.set_cell(i, first)
            scores.append(minimax_score(child, not first, cache))
        score = max(scores) if first else min(scores)
    cache[key] = score
    return score


def move_scores(board: Board, first: bool, cache: Optional[MoveCache] = None) -> Dict[int, int]:
    """Score of the position after each open move, ascending by index."""
    if cache is None:
        cache = _CACHE
    scores: Dict[int, int] = {}
    for i in board.get_open_spaces():
        child = board.copy()
        child.set_cell(i, first)
        scores[i] = minimax_score(child, not first, cache)
    return scores


def better_of(a: int, b: int, first: bool) -> bool:
    return a > b if first else a < b


def pick_optimal_move(board: Board, first: bool, cache: Optional[MoveCache] = None) -> int:
    if cache is None:
        cache = _CACHE
    scores = move_scores(board, first, cache)
    if not scores:
        raise NoOpenSpacesError("no open spaces left")
    best: Optional[int] = None
    for i, s in scores.items():
        if best is None or better_of(s, scores[best], first):
            best = i
    log.debug("optimal move for %s: %d (score=%d, cache=%d)",
              Player.from_first(first).value, best, scores[best], len(cache))
    return best
