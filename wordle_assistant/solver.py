"""
solver.py

Picks the next guess and prunes candidates after feedback.
"""

from wordle_assistant.entropy import entropies_of
from wordle_assistant.errors import EmptyCandidateSet
from wordle_assistant.patterns import generate_pattern


def next_best_guess(candidates: list[str], word_size: int, workers: int | None = None) -> str:
    """
    Return the candidate whose feedback distribution has the highest entropy.

    Ties go to the candidate met first in *candidates*. A single candidate
    is returned as is, without scoring.
    """
    if not candidates:
        raise EmptyCandidateSet("No candidate words left to guess from")
    if len(candidates) == 1:
        return candidates[0]

    entropies = entropies_of(candidates, word_size, workers=workers)
    if not entropies:
        return candidates[0]
    return entropies.best()


def filter_by_pattern(code: int, guess: str, candidates: list[str], word_size: int) -> list[str]:
    """Keep only candidates that would have produced *code* for *guess*."""
    return [w for w in candidates if generate_pattern(guess, w, word_size) == code]
