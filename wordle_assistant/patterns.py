"""
patterns.py

Encodes game feedback as compact integer codes.

Each letter position holds one of three colors in 2 bits:

    0 = absent    (gray)
    1 = misplaced (yellow)
    2 = correct   (green)

Position p occupies bits [2p, 2p + 1], so a code for words of up to 8 letters
fits in 16 bits. Guess letter i is written at code position
word_size - 1 - i, i.e. the last letter of the guess sits in the lowest bits.
Codes are only ever compared for equality.
"""

import re
from collections import Counter
from enum import IntEnum

import numpy as np

from wordle_assistant.errors import InvalidPosition, MalformedFeedback


MAX_POSITIONS = 8
COLOR_MASK = 0b11


class LetterColor(IntEnum):
    ABSENT = 0
    MISPLACED = 1
    CORRECT = 2


TILES = {
    LetterColor.ABSENT: "⬛",
    LetterColor.MISPLACED: "\U0001f7e8",
    LetterColor.CORRECT: "\U0001f7e9",
}

# Multi-character tokens; "gn"/"y"/"gr" are the short forms shown at the prompt.
FEEDBACK_WORDS = {
    "gn": LetterColor.CORRECT,
    "green": LetterColor.CORRECT,
    "correct": LetterColor.CORRECT,
    "y": LetterColor.MISPLACED,
    "yellow": LetterColor.MISPLACED,
    "misplaced": LetterColor.MISPLACED,
    "gr": LetterColor.ABSENT,
    "gray": LetterColor.ABSENT,
    "grey": LetterColor.ABSENT,
    "absent": LetterColor.ABSENT,
}

# One symbol per letter, e.g. "bygbb" or "01200".
FEEDBACK_SYMBOLS = {
    "g": LetterColor.CORRECT,
    "2": LetterColor.CORRECT,
    "y": LetterColor.MISPLACED,
    "1": LetterColor.MISPLACED,
    "b": LetterColor.ABSENT,
    "x": LetterColor.ABSENT,
    "-": LetterColor.ABSENT,
    ".": LetterColor.ABSENT,
    "0": LetterColor.ABSENT,
}

_TOKEN_SPLIT = re.compile(r"[\s,]+")


def _check_position(position: int) -> int:
    if not 0 <= position < MAX_POSITIONS:
        raise InvalidPosition(
            f"Position {position} is outside 0..{MAX_POSITIONS - 1}"
        )
    return 2 * position


def set_color(code: int, position: int, color: LetterColor) -> int:
    """Return *code* with the two bits at *position* replaced by *color*."""
    shift = _check_position(position)
    return (code & ~(COLOR_MASK << shift)) | (int(color) << shift)


def get_color(code: int, position: int) -> LetterColor:
    """Extract the color stored at *position*."""
    shift = _check_position(position)
    return LetterColor((code >> shift) & COLOR_MASK)


def all_correct_code(word_size: int) -> int:
    """The code produced when the guess is the target."""
    code = 0
    for position in range(word_size):
        code = set_color(code, position, LetterColor.CORRECT)
    return code


def generate_pattern(guess: str, target: str, word_size: int) -> int:
    """
    Encode the feedback for *guess* played against *target*.

    Duplicate letters follow the standard game rules:

    1. First mark correct letters (right letter, right position).
       Each one consumes an occurrence of that letter from the target.

    2. Then, left to right, mark a remaining letter misplaced only while
       unused occurrences of it are left in the target; otherwise absent.
    """
    remaining = Counter(target)
    colors = [LetterColor.ABSENT] * word_size

    # First pass: correct letters consume their occurrence
    for i in range(word_size):
        if guess[i] == target[i]:
            colors[i] = LetterColor.CORRECT
            remaining[guess[i]] -= 1

    # Second pass: misplaced while occurrences remain
    for i in range(word_size):
        if colors[i] == LetterColor.CORRECT:
            continue
        if remaining[guess[i]] > 0:
            remaining[guess[i]] -= 1
            colors[i] = LetterColor.MISPLACED

    code = 0
    for i, color in enumerate(colors):
        code = set_color(code, word_size - 1 - i, color)
    return code


def build_code(colors, word_size: int) -> int:
    """Assemble per-letter colors, given in guess order, into a code."""
    colors = list(colors)
    if len(colors) != word_size:
        raise MalformedFeedback(
            f"Expected {word_size} colors, got {len(colors)}"
        )
    code = 0
    for i, color in enumerate(colors):
        code = set_color(code, word_size - 1 - i, LetterColor(color))
    return code


def code_to_colors(code: int, word_size: int) -> list[LetterColor]:
    """Per-letter colors of *code* in guess order."""
    return [get_color(code, word_size - 1 - i) for i in range(word_size)]


def render_code(code: int, word_size: int) -> str:
    return "".join(TILES[c] for c in code_to_colors(code, word_size))


def parse_feedback(text: str, word_size: int) -> list[LetterColor]:
    """
    Parse one round of feedback typed by the player.

    Two forms are accepted:

    - one token per letter, separated by spaces or commas
      ("gn y gr gr gn", "correct absent ..."),
    - one symbol per letter with no separators ("gybbg", "21002").
    """
    cleaned = text.strip().lower()
    tokens = [t for t in _TOKEN_SPLIT.split(cleaned) if t]

    if len(tokens) == 1 and len(tokens[0]) == word_size:
        symbols = tokens[0]
        unknown = sorted({s for s in symbols if s not in FEEDBACK_SYMBOLS})
        if unknown:
            raise MalformedFeedback(f"Unknown feedback symbols: {', '.join(unknown)}")
        return [FEEDBACK_SYMBOLS[s] for s in symbols]

    if len(tokens) != word_size:
        raise MalformedFeedback(
            f"Expected feedback for {word_size} letters, got {len(tokens)}"
        )
    unknown = [t for t in tokens if t not in FEEDBACK_WORDS and t not in FEEDBACK_SYMBOLS]
    if unknown:
        raise MalformedFeedback(f"Unknown feedback: {', '.join(unknown)}")
    return [FEEDBACK_WORDS.get(t, FEEDBACK_SYMBOLS.get(t)) for t in tokens]


class WordTable:
    """
    Candidate words as a numpy letter matrix, for scoring one guess against
    every candidate in a single vectorized pass.

    letters: (n_words, word_size) compact letter indices
    counts:  (n_words, alphabet) occurrences of each letter per word
    """

    def __init__(self, words: list[str], word_size: int):
        chars = np.array([[ord(ch) for ch in w] for w in words], dtype=np.int64)
        chars = chars.reshape(len(words), word_size)
        _, inverse = np.unique(chars, return_inverse=True)
        self.word_size = word_size
        self.letters = inverse.reshape(chars.shape)
        alphabet = int(self.letters.max()) + 1 if self.letters.size else 0
        self.counts = np.zeros((len(words), alphabet), dtype=np.int64)
        rows = np.repeat(np.arange(len(words)), word_size)
        np.add.at(self.counts, (rows, self.letters.ravel()), 1)

    def __len__(self):
        return self.letters.shape[0]


def pattern_row(table: WordTable, guess_index: int) -> np.ndarray:
    """
    Codes of table word *guess_index* played against every table word.

    Same rules as generate_pattern: a non-correct letter at position i is
    misplaced when its rank among the non-correct occurrences of that letter
    in the guess (counted left to right) does not exceed the occurrences the
    target has left after correct matches.
    """
    word_size = table.word_size
    letters = table.letters
    guess = letters[guess_index]
    correct = letters == guess

    available = {}
    for c in set(guess.tolist()):
        in_guess = guess == c
        available[c] = table.counts[:, c] - correct[:, in_guess].sum(axis=1)

    ranks = {c: np.zeros(len(table), dtype=np.int64) for c in available}
    codes = np.zeros(len(table), dtype=np.int64)
    for i in range(word_size):
        c = int(guess[i])
        open_slot = ~correct[:, i]
        ranks[c] += open_slot
        misplaced = open_slot & (ranks[c] <= available[c])
        colors = np.where(correct[:, i], LetterColor.CORRECT, 0)
        colors = np.where(misplaced, LetterColor.MISPLACED, colors)
        codes |= colors.astype(np.int64) << (2 * (word_size - 1 - i))
    return codes
