import itertools
from collections import Counter

import numpy as np
import pytest

import mastermind.strategy as strategy_module
from mastermind.codes import GameConfig, generate_code_space
from mastermind.errors import InvalidCodeError
from mastermind.feedback import Feedback, feedback
from mastermind.scorers import SCORERS
from mastermind.strategy import histogram_of, make_strategy, strategy_for
from mastermind.table import FeedbackTable
from mastermind.tree import summarize


def test_entries_match_feedback():
    codes = generate_code_space("ABC", 3)
    table = FeedbackTable(codes)
    for i, j in itertools.product(range(len(codes)), repeat=2):
        assert table.decode(table.table[i, j]) == feedback(codes[i], codes[j])


def test_entries_match_feedback_across_chunks():
    codes = generate_code_space("ABCDE", 4)
    table = FeedbackTable(codes)
    for i in (0, 255, 256, 400, len(codes) - 1):
        row = [table.decode(v) for v in table.table[i]]
        assert row == [feedback(codes[i], key) for key in codes]


def test_encoding_follows_feedback_order():
    table = FeedbackTable(generate_code_space("AB", 4))
    values = range(table.width)
    decoded = [table.decode(v) for v in values]
    assert decoded == sorted(decoded)
    assert table.decode(4 * 5) == Feedback(4, 0)


def test_histograms_match_direct_counts():
    codes = generate_code_space("ABCD", 3)
    table = FeedbackTable(codes)
    keys = codes[3:40]
    guesses = ["AAB", "ABC", "DDD", "CAB"]

    hists = table.histograms(table.indices(guesses), table.indices(keys))
    assert hists.shape == (len(guesses), table.width)
    for guess, row in zip(guesses, hists):
        assert tuple(table.as_histogram(row).items()) == histogram_of(guess, keys)
        assert row.sum() == len(keys)


def test_covers_and_indices():
    table = FeedbackTable(["AB", "BA", "BB"])
    assert table.covers(["BA", "AB"])
    assert not table.covers(["AA"])
    assert list(table.indices(["BB", "AB"])) == [2, 0]
    assert table.indices(["BB"]).dtype == np.intp


def test_rejects_empty_or_mixed_codes():
    with pytest.raises(InvalidCodeError):
        FeedbackTable([])
    with pytest.raises(InvalidCodeError):
        FeedbackTable(["AB", "ABC"])


@pytest.mark.parametrize("name", sorted(SCORERS))
def test_table_and_direct_scoring_pick_the_same_guesses(monkeypatch, name):
    config = GameConfig.standard(4, 3)
    space = generate_code_space(config.alphabet, config.length)

    with_table = summarize(strategy_for(name, config, allow_inconsistent=True), space)
    monkeypatch.setattr(strategy_module, "TABLE_LIMIT", 0)
    direct = summarize(strategy_for(name, config, allow_inconsistent=True), space)

    assert with_table == direct
    assert sum(direct.values()) == len(space)


def test_table_is_reused_for_subsets():
    space = generate_code_space("ABC", 3)
    strategy = make_strategy(space, SCORERS["worst-case"](GameConfig.standard(3, 3)))
    strategy(space)
    table = strategy._table
    strategy(space[:5])
    assert strategy._table is table


def test_table_is_rebuilt_for_codes_it_does_not_cover():
    strategy = make_strategy(None, SCORERS["expected-size"](GameConfig.standard(3, 2)))
    assert strategy(["AB", "BA"]) == "AB"
    assert strategy(["CC", "CA", "AC"]) == "AC"
    assert strategy._table.covers(["CC", "CA", "AC"])
    assert Counter(strategy._table.codes) == Counter(["AC", "CA", "CC"])
