"""
Tactics: immediate wins and blocks found by scanning the eight lines.
Notes:
- A line is a candidate when two of its cells hold the same token and the
  third is open. Completing it is a win for that token's owner and a block
  for everybody else.
- Lines are scanned rows first, then columns, then the two diagonals.
"""
from typing import Iterator, List, Tuple

from .board import THREE_IN_A_ROW, Board, Player


def line_completions(board: Board, player: Player) -> Iterator[Tuple[int, bool]]:
    """Yield (open_index, completes_own_line) for every two-of-three line."""
    for line in THREE_IN_A_ROW:
        cells = [board.get_cell(i) for i in line]
        taken = [c for c in cells if c is not None]
        if len(taken) == 2 and taken[0] is taken[1]:
            yield line[cells.index(None)], taken[0] is player


def _unique(moves: List[int]) -> List[int]:
    return list(dict.fromkeys(moves))


def winning_moves(board: Board, player: Player) -> List[int]:
    return _unique([i for i, own in line_completions(board, player) if own])


def blocking_moves(board: Board, player: Player) -> List[int]:
    return _unique([i for i, own in line_completions(board, player) if not own])
