from __future__ import annotations

import argparse
import logging
import os
import random
from typing import Callable, Optional

from .board import Board, BoardError, Player, is_valid_state
from .game import Game
from .solver import minimax_score, move_scores, terminal_score
from .strategies import PlayerKind, pick_move
from .symmetry import symmetry_info

KIND_CHOICES = [k.value for k in PlayerKind]
AI_CHOICES = [k.value for k in PlayerKind if not k.is_human]

ReadFn = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random players (default: $TTT_SEED if set)",
    )

    # interactive game
    p_play = sub.add_parser("play", help="Play a game in the terminal")
    p_play.add_argument(
        "--p1", choices=KIND_CHOICES, default=None, help="Player X kind (asked if omitted)"
    )
    p_play.add_argument(
        "--p2", choices=KIND_CHOICES, default=None, help="Player O kind (asked if omitted)"
    )
    p_play.add_argument(
        "--once", action="store_true", help="Play a single game without asking for a rematch"
    )

    board_help = "Board string: 9 chars of 0/1/2 (0=empty,1=X,2=O) or 1-9/X/O, e.g. 100020000"

    p_move = sub.add_parser("move", help="Show the move a strategy picks for side-to-move")
    p_move.add_argument("--board", required=True, help=board_help)
    p_move.add_argument(
        "--strategy", choices=AI_CHOICES, default=PlayerKind.OPTIMAL.value, help="AI strategy"
    )

    p_sol = sub.add_parser("solve", help="Minimax value and per-move scores for side-to-move")
    p_sol.add_argument("--board", required=True, help=board_help)

    p_sym = sub.add_parser("symmetry", help="Show the canonical state key and orbit size")
    p_sym.add_argument("--board", required=True, help=board_help)

    return p


def _resolve_seed(seed: Optional[int]) -> Optional[int]:
    if seed is not None:
        return seed
    env = os.getenv("TTT_SEED")
    return int(env) if env else None


def _set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    random.seed(seed)
    import numpy as np

    np.random.seed(seed)


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _parse_board(raw: str) -> Optional[Board]:
    try:
        board = Board.from_string(raw)
    except BoardError as e:
        logging.error("Invalid board string: %s", e)
        return None
    if not is_valid_state(board):
        logging.error("Board is not a valid reachable state.")
        return None
    return board


def ask_yes_no(msg: str, read: ReadFn = input) -> bool:
    while True:
        answer = read(f"{msg} Y/N: ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        print("Invalid input! ")


def ask_cell(player: Player, read: ReadFn = input) -> int:
    """Prompt until the answer is a number 1-9; occupancy is the board's job."""
    while True:
        raw = read(f"Player {player.value}, please select an empty cell 1-9: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= 9:
            return int(raw)


def ask_kind(player: Player, read: ReadFn = input) -> PlayerKind:
    if ask_yes_no(f"Player {player.value} human?", read):
        return PlayerKind.HUMAN
    while True:
        raw = read("Select AI difficulty (1-4): ").strip()
        if raw.isdigit():
            try:
                return PlayerKind.from_difficulty(int(raw))
            except ValueError:
                continue


def play(p1: Optional[str], p2: Optional[str], once: bool, rng: Optional[random.Random],
         read: ReadFn = input) -> int:
    game = Game(rng=rng, ask=lambda player: ask_cell(player, read))
    print("Welcome to Tic Tac Toe!\n")
    while True:
        for player, choice in ((Player.X, p1), (Player.O, p2)):
            kind = PlayerKind(choice) if choice else ask_kind(player, read)
            game.set_player(player, kind)
        game.run()
        if once or not ask_yes_no("Play again?", read):
            return 0
        game.reset()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("ttt-minimax"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        seed = _resolve_seed(ns.seed)
    except ValueError:
        logging.error("TTT_SEED must be an integer: %r", os.getenv("TTT_SEED"))
        return 2
    _set_global_seed(seed)
    rng = random.Random(seed) if seed is not None else None

    if ns.cmd == "play":
        try:
            return play(ns.p1, ns.p2, ns.once, rng)
        except EOFError:
            logging.info("Input closed, exiting.")
            return 0

    if ns.cmd in ("move", "solve", "symmetry"):
        board = _parse_board(ns.board)
        if board is None:
            return 2

        if ns.cmd == "symmetry":
            info = symmetry_info(board.state())
            logging.info(
                "canonical_form=%s orbit_size=%d op=%s",
                info['canonical_form'],
                info['orbit_size'],
                info['canonical_op'],
            )
            return 0

        to_move = board.to_move()
        if ns.cmd == "solve":
            value = minimax_score(board, to_move.is_first)
            over = terminal_score(board) is not None
            scores = {} if over else move_scores(board, to_move.is_first)
            logging.info("to_move=%s value=%d scores=%s", to_move.value, value, scores)
            return 0

        if board.check_matches() is not None or board.is_full():
            logging.error("Game is already over on this board.")
            return 2
        kind = PlayerKind(ns.strategy)
        index = pick_move(board, kind, to_move.is_first, rng=rng)
        logging.info("to_move=%s strategy=%s move=%d", to_move.value, kind.value, index)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
