"""
Tests for wordle_assistant.patterns: the feedback codec, the pattern
generator and the feedback parser.
"""

from collections import Counter
from itertools import product

import pytest

from wordle_assistant.errors import InvalidPosition, MalformedFeedback
from wordle_assistant.patterns import (
    TILES,
    LetterColor,
    WordTable,
    all_correct_code,
    build_code,
    code_to_colors,
    generate_pattern,
    get_color,
    parse_feedback,
    pattern_row,
    render_code,
    set_color,
)

A, M, C = LetterColor.ABSENT, LetterColor.MISPLACED, LetterColor.CORRECT

GRID = [
    "apple", "plate", "mambo", "amaze", "crane", "eerie",
    "geese", "llama", "allay", "sassy", "essay", "blame",
]


@pytest.mark.parametrize("guess,target,expected", [
    ("CRANE", "LIGHT", 0b0000000000),
    ("CRANE", "CRANE", 0b1010101010),
    ("CRANE", "BLAME", 0b0000100010),
    ("CRANE", "LEMON", 0b0000000101),
    ("APPLE", "PLATE", 0b0101000110),
    ("MAMBO", "AMAZE", 0b0101000000),
])
def test_generate_pattern_golden(guess, target, expected):
    assert generate_pattern(guess, target, 5) == expected


def test_duplicate_letter_consumed_once():
    """The second P of APPLE finds no P left in PLATE."""
    colors = code_to_colors(generate_pattern("APPLE", "PLATE", 5), 5)
    assert colors == [M, M, A, M, C]


@pytest.mark.parametrize("word", ["cat", "tree", "crane", "banana", "letters", "absolute"])
def test_word_against_itself_is_all_correct(word):
    assert generate_pattern(word, word, len(word)) == all_correct_code(len(word))


@pytest.mark.parametrize("guess,target", list(product(GRID, GRID)))
def test_hits_never_exceed_target_occurrences(guess, target):
    colors = code_to_colors(generate_pattern(guess, target, 5), 5)
    hits = Counter(g for g, c in zip(guess, colors) if c != A)
    in_target = Counter(target)
    in_guess = Counter(guess)
    for letter, n in hits.items():
        assert n <= in_target[letter]
    for letter in in_guess:
        assert hits[letter] == min(in_guess[letter], in_target[letter])


def test_set_and_get_color():
    code = set_color(0, 3, C)
    assert code == 2 << 6
    assert get_color(code, 3) == C
    assert get_color(code, 2) == A


def test_set_color_leaves_other_positions():
    assert set_color(0b01100110, 0, M) == 0b01100101
    assert set_color(0b101010, 1, A) == 0b100010


@pytest.mark.parametrize("position", [-1, 8, 100])
def test_invalid_position(position):
    with pytest.raises(InvalidPosition):
        set_color(0, position, C)
    with pytest.raises(IndexError):
        get_color(0, position)


def test_all_correct_code_fits_sixteen_bits():
    assert all_correct_code(5) == 0b1010101010
    assert all_correct_code(8) == 0xAAAA
    assert all_correct_code(8) < 1 << 16


def test_build_code_reverses_letter_order():
    assert build_code([A, M, C], 3) == 0b000110
    assert code_to_colors(0b000110, 3) == [A, M, C]


def test_build_code_matches_generated_pattern():
    code = generate_pattern("crane", "blame", 5)
    assert build_code(code_to_colors(code, 5), 5) == code


def test_build_code_wrong_length():
    with pytest.raises(MalformedFeedback):
        build_code([C, C], 5)


def test_render_code():
    assert render_code(all_correct_code(3), 3) == TILES[C] * 3
    assert render_code(build_code([A, M, C], 3), 3) == TILES[A] + TILES[M] + TILES[C]


@pytest.mark.parametrize("text,word_size,expected", [
    ("gn y gr gr gn", 5, [C, M, A, A, C]),
    ("GYBBG", 5, [C, M, A, A, C]),
    ("2,1,0,0,2", 5, [C, M, A, A, C]),
    ("correct absent misplaced", 3, [C, A, M]),
    ("green grey yellow", 3, [C, A, M]),
    ("x-.", 3, [A, A, A]),
])
def test_parse_feedback(text, word_size, expected):
    assert parse_feedback(text, word_size) == expected


@pytest.mark.parametrize("text", ["gn y", "gyzbg", "gn y gr gr foo", "", "gggggg"])
def test_parse_feedback_rejects_malformed(text):
    with pytest.raises(MalformedFeedback):
        parse_feedback(text, 5)


SHORT_GRID = ["cat", "act", "tat", "aaa", "tea", "eat", "tot"]
LONG_GRID = ["absolute", "resolute", "tattered", "assessed", "sassiest", "dressers", "aaaaaaaa"]


@pytest.mark.parametrize(
    "words,word_size", [(SHORT_GRID, 3), (GRID, 5), (LONG_GRID, 8)]
)
def test_pattern_row_matches_generate_pattern(words, word_size):
    table = WordTable(words, word_size)
    for i, guess in enumerate(words):
        row = pattern_row(table, i)
        assert row.tolist() == [generate_pattern(guess, t, word_size) for t in words]
