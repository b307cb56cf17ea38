from ttt_minimax.board import Board
from ttt_minimax.solver import (
    WIN_SCORE,
    clear_cache,
    default_cache,
    minimax_score,
    move_scores,
    terminal_score,
)


def test_terminal_positions_values():
    # X three in a row
    assert minimax_score(Board.from_string("111220000"), False, {}) == WIN_SCORE
    # O three in a row
    assert minimax_score(Board.from_string("110222100"), True, {}) == -WIN_SCORE
    # full board, no winner
    draw = Board.from_string("112221121")
    assert draw.is_full() and draw.check_matches() is None
    assert minimax_score(draw, True, {}) == 0
    assert terminal_score(Board()) is None


def test_initial_state_is_draw_under_perfect_play():
    assert minimax_score(Board(), True, {}) == 0


def test_every_opening_move_draws():
    scores = move_scores(Board(), True, {})
    assert list(scores) == list(range(1, 10))
    assert set(scores.values()) == {0}


def test_cache_holds_one_entry_per_canonical_position():
    cache = {}
    minimax_score(Board(), True, cache)
    # 765 positions are reachable from the empty board up to symmetry
    assert len(cache) == 765
    assert cache[Board().state_key()] == 0


def test_cache_lookup_precedes_terminal_check():
    won = Board.from_string("111220000")
    cache = {won.state_key(): 3}
    assert minimax_score(won, False, cache) == 3


def test_minimax_does_not_mutate_board():
    b = Board.from_string("100020000")
    before = b.copy()
    minimax_score(b, True, {})
    assert b == before


def test_symmetric_positions_share_scores():
    cache = {}
    a = Board.from_string("120000000")
    b = a.transpose().flip_h()
    assert minimax_score(a, True, cache) == WIN_SCORE
    n = len(cache)
    assert minimax_score(b, True, cache) == WIN_SCORE
    assert len(cache) == n


def test_default_cache_is_used_and_clearable():
    clear_cache()
    assert default_cache() == {}
    assert minimax_score(Board.from_string("120000000"), True) == WIN_SCORE
    assert len(default_cache()) > 0
    clear_cache()
    assert default_cache() == {}
