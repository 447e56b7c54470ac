import time
from collections import Counter

import pytest

from mastermind.aggregate import expected_guesses
from mastermind.codes import CodeSpace, GameConfig, generate_code_space
from mastermind.errors import EmptyDomainError, InvalidCodeError, NoProgressError
from mastermind.feedback import feedback
from mastermind.game import play_out
from mastermind.partition import partition_by
from mastermind.scorers import RefinedBranchMaximizing, worst_case
from mastermind.strategy import STRATEGY_NAMES, make_strategy, strategy_for, zero_step
from mastermind.tree import guess_tree, guesses_per_key, summarize


def test_zero_step_over_two_single_symbol_codes():
    # root guess counts 1, each level below adds 1; a lone key gives {1: 1} (see DESIGN.md, scenario 1)
    # "A" is guessed first and is right for key A; key B needs a second guess
    assert summarize(zero_step, {"A", "B"}) == Counter({1: 1, 2: 1})


def test_singleton_set_is_solved_in_one_guess():
    config = GameConfig.standard(3, 2)
    for name in STRATEGY_NAMES:
        for allow in (False, True):
            strategy = strategy_for(name, config, allow_inconsistent=allow)
            assert summarize(strategy, ["BC"]) == Counter({1: 1}), (name, allow)


@pytest.mark.parametrize("allow", [False, True])
@pytest.mark.parametrize("name", STRATEGY_NAMES)
def test_distribution_covers_every_key(name, allow):
    config = GameConfig.standard(3, 3)
    space = generate_code_space(config.alphabet, config.length)
    dist = summarize(strategy_for(name, config, allow_inconsistent=allow), space)
    assert sum(dist.values()) == len(space)
    assert min(dist) >= 1


def test_refined_branch_on_four_colors_three_pegs():
    space = generate_code_space("ABCD", 3)
    strategy = make_strategy(space, RefinedBranchMaximizing((3, 0)))
    assert summarize(strategy, space) == Counter({1: 1, 2: 7, 3: 33, 4: 23})


def test_worst_case_consistent_guesses_on_classic_board():
    space = generate_code_space("ABCDEF", 4)
    dist = summarize(make_strategy(None, worst_case), space)
    assert sum(dist.values()) == 1296
    assert expected_guesses(dist) == pytest.approx(4.497, abs=1e-3)


def test_tree_matches_replayed_games():
    config = GameConfig.standard(4, 3)
    space = CodeSpace.from_config(config)
    strategy = strategy_for("refined-branch", config, allow_inconsistent=True)

    per_key = guesses_per_key(strategy, space.codes())
    played = {key: len(play_out(strategy, space, key)) for key in space}

    assert per_key == played
    assert Counter(played.values()) == summarize(strategy, space.codes())


def test_parallel_summary_equals_sequential():
    config = GameConfig.standard(4, 3)
    space = generate_code_space(config.alphabet, config.length)
    strategy = strategy_for("worst-case", config)
    assert summarize(strategy, space, workers=2) == summarize(strategy, space)


def test_guess_removal_and_partition_cover_the_rest():
    cons = generate_code_space("ABC", 3)
    guess = make_strategy(None, worst_case)(cons)
    rest = [c for c in cons if c != guess]
    cells = partition_by(lambda k: feedback(guess, k), rest)
    flat = [c for cell in cells.values() for c in cell]
    assert sorted(flat) == sorted(set(cons) - {guess})
    assert len(flat) == len(rest)


def test_guess_tree_root_and_children():
    cons = generate_code_space("AB", 2)
    strategy = make_strategy(None, worst_case)
    tree = guess_tree(strategy, cons)
    assert tree["guess"] == strategy(cons)
    assert tree["solved"] is True
    assert list(tree["children"]) == sorted(tree["children"])


def test_empty_set_raises():
    with pytest.raises(EmptyDomainError):
        summarize(zero_step, [])


def test_guess_that_never_splits_raises():
    def stubborn(cons):
        return "CC"

    with pytest.raises(NoProgressError):
        summarize(stubborn, ["AA", "AB"])


def test_worst_case_inconsistent_guesses_on_classic_board_is_fast():
    config = GameConfig.standard(6, 4)
    space = generate_code_space(config.alphabet, config.length)
    strategy = strategy_for("worst-case", config, allow_inconsistent=True)

    start = time.perf_counter()
    dist = summarize(strategy, space)
    elapsed = time.perf_counter() - start

    assert dist == Counter({1: 1, 2: 6, 3: 62, 4: 533, 5: 694})
    assert expected_guesses(dist) == pytest.approx(4.476, abs=1e-3)
    assert elapsed < 30.0, f"6x4 inconsistent worst-case took {elapsed:.1f}s"


def test_foreign_symbols_in_consistent_set_raise():
    strategy = make_strategy(["AA", "AB", "BA", "BB"], worst_case)
    with pytest.raises(InvalidCodeError):
        summarize(strategy, ["XY", "YX"])
