"""Turn-by-turn game loop on top of the board and strategy modules."""
import logging
import random
from typing import Callable, Optional

from .board import Board, BoardError, Player
from .solver import MoveCache
from .strategies import AskFn, PlayerKind, pick_move

log = logging.getLogger(__name__)


class Game:
    """A single board played between two player kinds, X moving first.

    Rejected moves (bad index, occupied cell) are reported through `out` and
    the same player is asked again; the engine never substitutes a move.
    """

    def __init__(
        self,
        p1: PlayerKind = PlayerKind.HUMAN,
        p2: PlayerKind = PlayerKind.HUMAN,
        rng: Optional[random.Random] = None,
        ask: Optional[AskFn] = None,
        out: Callable[[str], None] = print,
    ):
        self.board = Board()
        self.players = {Player.X: p1, Player.O: p2}
        self.rng = rng
        self.ask = ask
        self.out = out
        self.cache: MoveCache = {}
        self.p1_turn = True
        self.done = False
        self.winner: Optional[Player] = None

    @property
    def current(self) -> Player:
        return Player.from_first(self.p1_turn)

    def set_player(self, player: Player, kind: PlayerKind) -> None:
        self.players[player] = kind

    def render(self) -> None:
        self.out(str(self.board) + "\n")

    def play_turn(self) -> bool:
        """Ask the current player for a move and apply it.

        Returns False when the move was rejected; the turn does not pass.
        """
        if self.done:
            raise RuntimeError("game is over, reset() before playing again")
        player = self.current
        try:
            index = pick_move(self.board, self.players[player], self.p1_turn,
                              rng=self.rng, cache=self.cache, ask=self.ask)
            self.board.set_cell(index, self.p1_turn)
        except BoardError as e:
            self.out(str(e))
            return False
        log.debug("player %s took cell %d", player.value, index)

        self.winner = self.board.check_matches()
        if self.winner is not None or self.board.is_full():
            self.done = True
        self.p1_turn = not self.p1_turn
        return True

    def run(self) -> Optional[Player]:
        """Play until someone wins or the board fills; returns the winner."""
        while not self.done:
            self.render()
            self.play_turn()
        self.render()
        if self.winner is not None:
            self.out(f"Player {self.winner.value} wins!")
        else:
            self.out("draw!")
        return self.winner

    def reset(self) -> None:
        self.board.reset()
        self.p1_turn = True
        self.done = False
        self.winner = None
