"""
Symmetry and canonicalization for Tic-Tac-Toe.
Notes:
- There are 8 symmetries (the dihedral group of the square). Collapsing them
  shrinks the minimax memo table roughly eightfold.
- The canonical key of a board is the lexicographically smallest 0/1/2 string
  among all of its symmetry images.
- Every transform is built from three primitives: vflip (reverse row order),
  hflip (reverse each row) and d1 (transpose).
"""
from functools import lru_cache
from typing import Dict, Tuple

import numpy as np

ALL_SYMS = ['id', 'vflip', 'hflip', 'rot90', 'rot180', 'rot270', 'd1', 'd2']


def transform_grid(grid: np.ndarray, kind: str) -> np.ndarray:
    g = np.asarray(grid)
    if g.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 grid, got shape {g.shape}")
    if kind == 'id':
        out = g
    elif kind == 'vflip':
        out = np.flipud(g)
    elif kind == 'hflip':
        out = np.fliplr(g)
    elif kind == 'rot90':
        out = np.flipud(g.T)
    elif kind == 'rot180':
        out = np.flipud(np.fliplr(g))
    elif kind == 'rot270':
        out = np.fliplr(g.T)
    elif kind == 'd1':
        out = g.T
    elif kind == 'd2':
        out = np.fliplr(np.flipud(g.T))
    else:
        raise ValueError(f"Unknown transformation: {kind}")
    return out.copy()


def serialize_grid(grid: np.ndarray) -> str:
    return ''.join(str(int(v)) for v in np.asarray(grid).flat)


def parse_state(state: str) -> np.ndarray:
    if len(state) != 9 or any(c not in "012" for c in state):
        raise ValueError(f"Invalid state string: {state!r}")
    return np.array([int(c) for c in state], dtype=np.int8).reshape(3, 3)


def canonical_key(codes: np.ndarray) -> str:
    return min(serialize_grid(transform_grid(codes, k)) for k in ALL_SYMS)


@lru_cache(maxsize=None)
def _symmetry_info_tuple(state: str) -> Tuple[str, str, int]:
    codes = parse_state(state)
    images = [(serialize_grid(transform_grid(codes, k)), k) for k in ALL_SYMS]
    images_sorted = sorted(images, key=lambda x: x[0])
    canonical_str, canonical_op = images_sorted[0]
    return canonical_str, canonical_op, len(set(s for s, _ in images))


def symmetry_info(state: str) -> Dict:
    canonical_str, canonical_op, orbit_size = _symmetry_info_tuple(state)
    return {
        'canonical_form': canonical_str,
        'canonical_op': canonical_op,
        'orbit_size': orbit_size,
    }
