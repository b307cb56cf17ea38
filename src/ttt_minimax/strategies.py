"""
Player kinds and move selection.

Every kind is dispatched from `pick_move`; the set of kinds is closed.
"""
import random
from enum import Enum
from typing import Callable, Optional

from .board import Board, NoOpenSpacesError, Player
from .solver import MoveCache, pick_optimal_move
from .tactics import blocking_moves, winning_moves

AskFn = Callable[[Player], int]


class PlayerKind(Enum):
    HUMAN = "human"
    RANDOM = "random"
    FIND_WINNING = "win"
    BLOCK_LOSING = "block"
    OPTIMAL = "optimal"

    @property
    def is_human(self) -> bool:
        return self is PlayerKind.HUMAN

    @classmethod
    def from_difficulty(cls, level: int) -> "PlayerKind":
        levels = {1: cls.RANDOM, 2: cls.FIND_WINNING, 3: cls.BLOCK_LOSING, 4: cls.OPTIMAL}
        if level not in levels:
            raise ValueError(f"AI difficulty must be 1-4, got {level}")
        return levels[level]


def pick_random_move(board: Board, rng: Optional[random.Random] = None) -> int:
    open_spaces = board.get_open_spaces()
    if not open_spaces:
        raise NoOpenSpacesError("no open spaces left")
    return (rng or random).choice(open_spaces)


def pick_winning_move(board: Board, first: bool, rng: Optional[random.Random] = None) -> int:
    wins = winning_moves(board, Player.from_first(first))
    if wins:
        return wins[0]
    return pick_random_move(board, rng)


def pick_winning_or_blocking_move(board: Board, first: bool, rng: Optional[random.Random] = None) -> int:
    # win beats block beats random
    player = Player.from_first(first)
    for candidates in (winning_moves(board, player), blocking_moves(board, player)):
        if candidates:
            return candidates[0]
    return pick_random_move(board, rng)


def pick_move(
    board: Board,
    kind: PlayerKind,
    first: bool,
    rng: Optional[random.Random] = None,
    cache: Optional[MoveCache] = None,
    ask: Optional[AskFn] = None,
) -> int:
    if kind is PlayerKind.HUMAN:
        if ask is None:
            raise ValueError("human players need an input callback")
        return ask(Player.from_first(first))
    if kind is PlayerKind.RANDOM:
        return pick_random_move(board, rng)
    if kind is PlayerKind.FIND_WINNING:
        return pick_winning_move(board, first, rng)
    if kind is PlayerKind.BLOCK_LOSING:
        return pick_winning_or_blocking_move(board, first, rng)
    if kind is PlayerKind.OPTIMAL:
        return pick_optimal_move(board, first, cache)
    raise ValueError(f"Unknown player kind: {kind}")
