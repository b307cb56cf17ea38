import numpy as np
import pytest

from ttt_minimax.board import Board
from ttt_minimax.symmetry import ALL_SYMS, canonical_key, parse_state, symmetry_info, transform_grid


def test_canonical_is_lexicographically_minimum():
    state = "102010200"
    codes = parse_state(state)
    images = ["".join(str(v) for v in transform_grid(codes, k).flat) for k in ALL_SYMS]
    assert canonical_key(codes) == min(images)
    assert symmetry_info(state)['canonical_form'] == min(images)


def test_all_symmetries_are_distinct_permutations():
    labels = np.arange(1, 10).reshape(3, 3)
    images = {tuple(transform_grid(labels, k).flat) for k in ALL_SYMS}
    assert len(images) == 8
    for img in images:
        assert sorted(img) == list(range(1, 10))


def test_unknown_transformation():
    with pytest.raises(ValueError):
        transform_grid(np.zeros((3, 3)), "rot45")


def test_corner_openings_share_a_key():
    keys = set()
    for corner in (1, 3, 7, 9):
        b = Board()
        b.set_cell(corner, True)
        keys.add(b.state_key())
    assert keys == {"000000001"}


def test_swapped_tokens_give_different_keys():
    a = Board.from_string("100020000")
    b = Board.from_string("200010000")
    assert a.state_key() != b.state_key()


def test_orbit_sizes():
    assert symmetry_info("000000000")['orbit_size'] == 1
    assert symmetry_info("000010000")['orbit_size'] == 1
    assert symmetry_info("100000000")['orbit_size'] == 4
    assert symmetry_info("120000000")['orbit_size'] == 8
    assert symmetry_info("100000000")['canonical_form'] == "000000001"


def test_symmetry_info_returns_fresh_dicts():
    info = symmetry_info("100000000")
    info['orbit_size'] = 99
    info['canonical_form'] = "bogus"
    again = symmetry_info("100000000")
    assert again['orbit_size'] == 4
    assert again['canonical_form'] == "000000001"
