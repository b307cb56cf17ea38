"""
Board engine: the 3x3 grid, move legality, terminal detection and symmetry.
Notes:
- A cell is exactly one of Open(index), Player.X or Player.O.
- Open cells carry their 1-based row-major label, so the board doubles as its
  own legal-move list (row = (index-1)//3, col = (index-1)%3).
- Player 1 is X and always moves first.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set, Union

import numpy as np

from .symmetry import canonical_key, transform_grid

THREE_IN_A_ROW = [
    (1, 2, 3), (4, 5, 6), (7, 8, 9),
    (1, 4, 7), (2, 5, 8), (3, 6, 9),
    (1, 5, 9), (3, 5, 7),
]


class BoardError(ValueError):
    """A rejected operation on an otherwise intact board."""


class InvalidIndexError(BoardError):
    pass


class OccupiedCellError(BoardError):
    pass


class NoOpenSpacesError(BoardError):
    pass


class Player(Enum):
    X = "X"
    O = "O"

    @classmethod
    def from_first(cls, first: bool) -> "Player":
        return cls.X if first else cls.O

    @property
    def is_first(self) -> bool:
        return self is Player.X

    @property
    def other(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    @property
    def code(self) -> int:
        return 1 if self is Player.X else 2

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Open:
    index: int

    def __str__(self) -> str:
        return str(self.index)


Cell = Union[Open, Player]

EMPTY: List[Cell] = [Open(i) for i in range(1, 10)]


def _check_index(i: int) -> None:
    if not 1 <= i <= 9:
        raise InvalidIndexError(f"Number selected must be between 1 and 9, got {i}")


class Board:
    """A 3x3 tic-tac-toe board, mutated in place by single-cell assignment.

    Transforms (flip_v, flip_h, transpose) return new boards.
    """

    def __init__(self, cells: Optional[Iterable[Cell]] = None):
        cells = list(EMPTY if cells is None else cells)
        if len(cells) != 9:
            raise BoardError(f"A board needs 9 cells, got {len(cells)}")
        labels = [c.index for c in cells if isinstance(c, Open)]
        if any(not 1 <= k <= 9 for k in labels) or len(set(labels)) != len(labels):
            raise BoardError(f"Open cells need distinct labels 1-9, got {labels}")
        self.grid = np.empty((3, 3), dtype=object)
        for i, cell in enumerate(cells):
            if not isinstance(cell, (Open, Player)):
                raise BoardError(f"Not a cell: {cell!r}")
            self.grid[i // 3, i % 3] = cell

    @classmethod
    def new(cls) -> "Board":
        return cls()

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> "Board":
        return cls(cells)

    @classmethod
    def from_string(cls, raw: str) -> "Board":
        """Parse a 9-char state string (0/1/2) or display string (1-9, X, O)."""
        raw = raw.strip()
        if len(raw) != 9:
            raise BoardError("Board string must be exactly 9 characters.")
        cells: List[Cell] = []
        if set(raw) <= set("012"):
            for i, ch in enumerate(raw):
                cells.append(Open(i + 1) if ch == "0" else Player.X if ch == "1" else Player.O)
            return cls(cells)
        for i, ch in enumerate(raw.upper()):
            if ch in ("X", "O"):
                cells.append(Player(ch))
            elif ch == str(i + 1):
                cells.append(Open(i + 1))
            else:
                raise BoardError(f"Unexpected character {ch!r} at position {i + 1}.")
        return cls(cells)

    def __iter__(self):
        return iter(self.grid.flat)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.tolist() == other.grid.tolist()

    def __repr__(self) -> str:
        return f"Board({self.state()!r})"

    def __str__(self) -> str:
        rows = ["|".join(str(c) for c in self.grid[r]) for r in range(3)]
        return "\n-+-+-\n".join(rows)

    def copy(self) -> "Board":
        return Board(self)

    def get_open_spaces(self) -> List[int]:
        return [i + 1 for i, c in enumerate(self) if isinstance(c, Open)]

    def is_full(self) -> bool:
        return len(self.get_open_spaces()) == 0

    def get_cell(self, i: int) -> Optional[Player]:
        _check_index(i)
        cell = self.grid[(i - 1) // 3, (i - 1) % 3]
        return cell if isinstance(cell, Player) else None

    def set_cell(self, i: int, first: bool) -> None:
        if self.get_cell(i) is not None:
            raise OccupiedCellError(f"cell {i} already occupied")
        self.grid[(i - 1) // 3, (i - 1) % 3] = Player.from_first(first)

    def reset(self) -> None:
        for i, cell in enumerate(EMPTY):
            self.grid[i // 3, i % 3] = cell

    def check_matches(self) -> Optional[Player]:
        g = self.grid

        def line(a: Cell, b: Cell, c: Cell) -> bool:
            return isinstance(a, Player) and a == b == c

        # diagonals share the center
        if line(g[0, 0], g[1, 1], g[2, 2]) or line(g[0, 2], g[1, 1], g[2, 0]):
            return g[1, 1]
        for i in range(3):
            # (i, i) lies on both row i and column i
            if line(*g[i, :]) or line(*g[:, i]):
                return g[i, i]
        return None

    def winners(self) -> Set[Player]:
        """Every player that holds at least one full line."""
        found = set()
        for a, b, c in THREE_IN_A_ROW:
            p = self.get_cell(a)
            if p is not None and p == self.get_cell(b) == self.get_cell(c):
                found.add(p)
        return found

    def counts(self):
        cells = list(self)
        return cells.count(Player.X), cells.count(Player.O)

    def to_move(self) -> Player:
        """Side to move, derived from piece counts (X starts)."""
        x, o = self.counts()
        if x == o:
            return Player.X
        if x == o + 1:
            return Player.O
        raise BoardError(f"Impossible piece counts: X={x} O={o}")

    def flip_v(self) -> "Board":
        return Board(transform_grid(self.grid, "vflip").flat)

    def flip_h(self) -> "Board":
        return Board(transform_grid(self.grid, "hflip").flat)

    def transpose(self) -> "Board":
        return Board(transform_grid(self.grid, "d1").flat)

    def codes(self) -> np.ndarray:
        flat = [c.code if isinstance(c, Player) else 0 for c in self]
        return np.array(flat, dtype=np.int8).reshape(3, 3)

    def state(self) -> str:
        """Genericized board: 0 open, 1 player 1, 2 player 2."""
        return "".join(str(v) for v in self.codes().flat)

    def state_key(self) -> str:
        return canonical_key(self.codes())


def is_valid_state(board: Board) -> bool:
    """True if the board can arise from legal play starting with X."""
    x, o = board.counts()
    if not (x == o or x == o + 1):
        return False
    w = board.winners()
    if len(w) > 1:
        return False
    if Player.X in w and x != o + 1:
        return False
    if Player.O in w and x != o:
        return False
    return True
