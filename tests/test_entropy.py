"""
Tests for wordle_assistant.entropy.
"""

from collections import Counter

import numpy as np
import pytest

from wordle_assistant.entropy import EPSILON, EntropyTable, entropies_of, entropy_of
from wordle_assistant.patterns import generate_pattern

WORDS = ["crane", "blame", "flame", "plate", "lemon", "stare", "apple", "mambo"]


def test_single_pattern_has_zero_entropy():
    assert entropy_of({242: 100}) == 0.0


def test_two_equal_patterns_is_one_bit():
    assert abs(entropy_of({242: 50, 0: 50}) - 1.0) < 1e-6


def test_four_equal_patterns_is_two_bits():
    assert abs(entropy_of({242: 25, 0: 25, 27: 25, 81: 25}) - 2.0) < 1e-6


@pytest.mark.parametrize("n", [2, 3, 8, 100, 243])
def test_distinct_codes_give_log2_n(n):
    assert abs(entropy_of({code: 1 for code in range(n)}) - np.log2(n)) < 1e-9


def test_unequal_distribution_is_bounded():
    h = entropy_of({242: 70, 0: 20, 27: 10})
    assert 0.0 < h < 1.6


def test_zero_counts_contribute_nothing():
    assert entropy_of({1: 5, 2: 0}) == 0.0
    assert abs(entropy_of(np.array([0, 3, 0, 3])) - 1.0) < 1e-6


def test_empty_counts():
    assert entropy_of({}) == 0.0


def test_table_groups_within_tolerance():
    table = EntropyTable()
    table.add(1.0, "a")
    table.add(1.0 + EPSILON / 10, "b")
    table.add(0.5, "c")
    table.add(2.0, "d")
    table.add(2.0 - EPSILON / 10, "e")

    assert table.best() == "d"
    assert table.max_entropy() == 2.0
    assert table.ranked() == [(2.0, ["d", "e"]), (1.0, ["a", "b"]), (0.5, ["c"])]
    assert table.top(3) == [("d", 2.0), ("e", 2.0), ("a", 1.0)]
    assert len(table) == 5


def test_empty_table():
    table = EntropyTable()
    assert not table
    assert len(table) == 0
    with pytest.raises(LookupError):
        table.best()


def _brute_force(words, word_size):
    result = {}
    for i, g in enumerate(words):
        counts = Counter(
            generate_pattern(g, t, word_size) for j, t in enumerate(words) if j != i
        )
        result[g] = entropy_of(counts)
    return result


def test_entropies_of_matches_pairwise_tally():
    expected = _brute_force(WORDS, 5)
    table = entropies_of(WORDS, 5)
    assert len(table) == len(WORDS)
    for word, entropy in table.top(len(WORDS)):
        assert abs(entropy - expected[word]) <= EPSILON


def test_entropies_of_keeps_first_encountered_order():
    table = entropies_of(["abc", "def", "ghi"], 3)
    assert table.ranked() == [(0.0, ["abc", "def", "ghi"])]


def test_entropies_of_single_and_empty():
    assert entropies_of(["crane"], 5).ranked() == [(0.0, ["crane"])]
    assert not entropies_of([], 5)


def test_parallel_scoring_matches_serial():
    serial = entropies_of(WORDS, 5)
    parallel = entropies_of(WORDS, 5, workers=2)
    assert parallel.ranked() == serial.ranked()
