"""
config.py

Defaults shared by the CLI and the lexicon loader.
"""

from pathlib import Path


MIN_WORD_SIZE = 3
MAX_WORD_SIZE = 8

CONFIG = {
    # Game
    "word_size": 5,

    # Lexicon: a WordNet 3.0 install (dict/index.* files) or a word list file
    "dictionary": Path("WordNet-3.0"),

    # Random self-play benchmark
    "benchmark_games": 100,
    "random_seed": None,

    # Ranking report
    "top_words": 20,
}


def max_guesses_for(word_size: int) -> int:
    """Guess budget of one game: one more guess than there are letters."""
    return word_size + 1


def check_word_size(word_size: int) -> int:
    """Return *word_size* if it is supported, else raise ValueError."""
    if not MIN_WORD_SIZE <= word_size <= MAX_WORD_SIZE:
        raise ValueError(
            f"Word size must be between {MIN_WORD_SIZE} and {MAX_WORD_SIZE}, "
            f"got {word_size}."
        )
    return word_size
