import pytest

from mastermind.codes import CodeSpace, GameConfig
from mastermind.errors import InvalidCodeError
from mastermind.game import MastermindGame, play_out
from mastermind.strategy import strategy_for, zero_step


@pytest.fixture
def space():
    return CodeSpace.from_config(GameConfig.standard(4, 3))


@pytest.fixture
def game(space):
    return MastermindGame(space, seed=0)


def test_reset_with_random_key_starts_with_full_set(game, space):
    game.reset()
    assert game.remaining_candidates == len(space)
    assert game.history == []
    assert not game.solved


def test_step_reduces_candidates(game, space):
    game.reset("BCD")
    fb = game.step("ABC")
    assert fb == (0, 2)
    assert not game.solved
    assert 0 < game.remaining_candidates < len(space)
    assert "BCD" in game.candidates


def test_guessing_the_key_solves(game):
    game.reset("DAD")
    assert game.step("DAD") == (3, 0)
    assert game.solved
    assert game.game_over()
    with pytest.raises(RuntimeError):
        game.step("AAA")


def test_step_before_reset_raises(game):
    with pytest.raises(RuntimeError):
        game.step("AAA")


def test_guess_outside_alphabet_raises(game):
    game.reset("ABC")
    with pytest.raises(InvalidCodeError):
        game.step("XYZ")


def test_inconsistent_guess_can_be_disallowed(space):
    game = MastermindGame(space, allow_inconsistent=False)
    game.reset("ABC")
    game.step("AAA")  # (1, 0)
    with pytest.raises(ValueError):
        game.step("DDD")


def test_max_guesses_ends_the_game(space):
    game = MastermindGame(space, max_guesses=1)
    game.reset("ABC")
    game.step("DDD")
    assert game.game_over()
    assert not game.solved


def test_play_out_ends_on_the_key(space):
    guesses = play_out(zero_step, space, "CBA")
    assert guesses[-1] == "CBA"
    assert len(set(guesses)) == len(guesses)


def test_play_out_respects_guess_limit(space):
    strategy = strategy_for("worst-case", space.config)
    guesses = play_out(strategy, space, "DDC", max_guesses=1)
    assert len(guesses) == 1
