import pytest

from ttt_minimax.board import Board, Player
from ttt_minimax.game import Game
from ttt_minimax.strategies import PlayerKind


def scripted(moves):
    it = iter(moves)
    return lambda player: next(it)


def test_scripted_win_for_x():
    out = []
    game = Game(ask=scripted([1, 4, 2, 5, 3]), out=out.append)
    assert game.run() is Player.X
    assert game.done
    assert out[-1] == "Player X wins!"


def test_scripted_draw():
    out = []
    game = Game(ask=scripted([1, 2, 3, 5, 4, 6, 8, 7, 9]), out=out.append)
    assert game.run() is None
    assert out[-1] == "draw!"
    assert game.board.is_full()


def test_occupied_move_keeps_turn():
    out = []
    game = Game(ask=scripted([5, 5, 1]), out=out.append)
    assert game.play_turn()
    assert game.current is Player.O
    assert not game.play_turn()
    assert game.current is Player.O
    assert "occupied" in out[-1]
    assert game.play_turn()
    assert game.board.get_cell(1) is Player.O
    assert game.current is Player.X


def test_invalid_index_is_rejected():
    out = []
    game = Game(ask=scripted([0, 10, 9]), out=out.append)
    assert not game.play_turn()
    assert not game.play_turn()
    assert game.play_turn()
    assert game.board.get_cell(9) is Player.X


def test_reset_for_rematch():
    game = Game(PlayerKind.OPTIMAL, PlayerKind.OPTIMAL, out=lambda s: None)
    game.run()
    with pytest.raises(RuntimeError):
        game.play_turn()
    game.reset()
    assert not game.done
    assert game.winner is None
    assert game.current is Player.X
    assert game.board.get_open_spaces() == list(range(1, 10))


def test_ai_opponent_blocks_threat():
    game = Game(PlayerKind.HUMAN, PlayerKind.BLOCK_LOSING, ask=scripted([2]), out=lambda s: None)
    game.board = Board.from_string("100020000")
    game.p1_turn = True
    assert game.play_turn()  # X takes 2, threatening 3
    assert game.play_turn()
    assert game.board.get_cell(3) is Player.O
