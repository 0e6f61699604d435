"""
session.py

Drives the solver through whole games.

Two consumers of the solver live here:

1. Interactive play. The player reports the colors the real game showed and
   the session narrows the candidates. Every move is a plain function
   (state, input) -> (new state, output) over an immutable SessionState, so
   the command loop in main.py only does text I/O.

2. Random self-play. A secret is drawn from the lexicon and the solver plays
   against it, scoring its own guesses with generate_pattern. run_benchmark
   repeats this over many games, optionally across worker processes.
"""

import multiprocessing as mp
import random
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum

from tqdm import tqdm

from wordle_assistant.config import max_guesses_for
from wordle_assistant.errors import EmptyCandidateSet, InvalidGuess, InvalidMove
from wordle_assistant.patterns import all_correct_code, build_code, generate_pattern
from wordle_assistant.solver import filter_by_pattern, next_best_guess


class Phase(Enum):
    START = "start"
    AWAITING_GUESS = "awaiting guess"
    AWAITING_FEEDBACK = "awaiting feedback"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


FINISHED = (Phase.SOLVED, Phase.EXHAUSTED)


@dataclass(frozen=True)
class SessionState:
    word_size: int
    lexicon: tuple[str, ...]
    candidates: tuple[str, ...]
    max_guesses: int
    phase: Phase = Phase.START
    last_guess: str | None = None
    rounds: int = 0
    history: tuple[tuple[str, int], ...] = ()

    @property
    def finished(self) -> bool:
        return self.phase in FINISHED

    @property
    def solved(self) -> bool:
        return self.phase is Phase.SOLVED


def new_session(lexicon, word_size: int, max_guesses: int | None = None) -> SessionState:
    words = tuple(lexicon)
    return SessionState(
        word_size=word_size,
        lexicon=words,
        candidates=words,
        max_guesses=max_guesses if max_guesses is not None else max_guesses_for(word_size),
    )


def restart(state: SessionState) -> SessionState:
    """A fresh game over the same lexicon."""
    return new_session(state.lexicon, state.word_size, state.max_guesses)


def _check_open(state: SessionState) -> None:
    if state.finished:
        raise InvalidMove(f"The game is over ({state.phase.value})")


def propose_guess(state: SessionState, workers: int | None = None):
    """Ask the solver for the next guess."""
    _check_open(state)
    guess = next_best_guess(list(state.candidates), state.word_size, workers=workers)
    return replace(state, last_guess=guess, phase=Phase.AWAITING_FEEDBACK), guess


def enter_word(state: SessionState, word: str):
    """Use a word chosen by the player as the current guess."""
    _check_open(state)
    word = word.strip().lower()
    if len(word) != state.word_size or not word.isalpha():
        raise InvalidGuess(f"Guess must be {state.word_size} letters, got {word!r}")
    return replace(state, last_guess=word, phase=Phase.AWAITING_FEEDBACK), word


def apply_feedback(state: SessionState, colors):
    """
    Narrow the candidates with the colors shown for the current guess.

    *colors* holds one LetterColor per guess letter, in guess order.
    Returns the new state and the feedback code. If no candidate fits the
    feedback, EmptyCandidateSet is raised and the caller keeps the old state.
    """
    _check_open(state)
    if state.last_guess is None:
        raise InvalidMove("There is no guess to give feedback for")

    code = build_code(colors, state.word_size)
    history = state.history + ((state.last_guess, code),)
    rounds = state.rounds + 1

    if code == all_correct_code(state.word_size):
        return replace(state, phase=Phase.SOLVED, rounds=rounds, history=history), code

    candidates = filter_by_pattern(code, state.last_guess, state.candidates, state.word_size)
    if not candidates:
        raise EmptyCandidateSet(
            f"No word is consistent with that feedback for {state.last_guess!r}"
        )

    phase = Phase.EXHAUSTED if rounds >= state.max_guesses else Phase.AWAITING_GUESS
    new_state = replace(
        state,
        candidates=tuple(candidates),
        last_guess=None,
        phase=phase,
        rounds=rounds,
        history=history,
    )
    return new_state, code


def remove_last_guess(state: SessionState):
    """
    Drop the current guess without feedback, e.g. when the game rejected it.

    Returns the new state and the removed word, or None when the guess was
    not among the candidates (or there was no guess).
    """
    _check_open(state)
    guess = state.last_guess
    if guess is None:
        return state, None

    removed = guess if guess in state.candidates else None
    candidates = tuple(w for w in state.candidates if w != guess)
    return replace(state, candidates=candidates, last_guess=None, phase=Phase.AWAITING_GUESS), removed


# ----------------------------------------------------------------------
# Random self-play
# ----------------------------------------------------------------------

@dataclass
class GameResult:
    secret: str
    guesses: list[str] = field(default_factory=list)
    codes: list[int] = field(default_factory=list)
    solved: bool = False

    @property
    def num_guesses(self) -> int:
        return len(self.guesses)


def play_random_game(lexicon, word_size: int, rng=None, max_guesses: int | None = None,
                     workers: int | None = None) -> GameResult:
    """
    Play one game against a secret drawn uniformly from *lexicon*.

    Stops as soon as a guess scores all-correct, or after max_guesses
    guesses (word_size + 1 by default).
    """
    if not lexicon:
        raise EmptyCandidateSet("Cannot play a game with an empty lexicon")
    rng = rng if rng is not None else random.Random()
    budget = max_guesses if max_guesses is not None else max_guesses_for(word_size)

    candidates = list(lexicon)
    result = GameResult(secret=candidates[rng.randrange(len(candidates))])
    solved_code = all_correct_code(word_size)

    for _ in range(budget):
        guess = next_best_guess(candidates, word_size, workers=workers)
        code = generate_pattern(guess, result.secret, word_size)
        result.guesses.append(guess)
        result.codes.append(code)
        if code == solved_code:
            result.solved = True
            break
        candidates = filter_by_pattern(code, guess, candidates, word_size)

    return result


@dataclass
class BenchmarkSummary:
    games: int = 0
    successes: int = 0
    distribution: Counter = field(default_factory=Counter)
    failed_secrets: list[str] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return self.games - self.successes

    @property
    def mean_guesses(self) -> float:
        """Mean guess count over solved games."""
        if not self.successes:
            return 0.0
        return sum(n * c for n, c in self.distribution.items()) / self.successes

    def record(self, result: GameResult) -> None:
        self.games += 1
        if result.solved:
            self.successes += 1
            self.distribution[result.num_guesses] += 1
        else:
            self.failed_secrets.append(result.secret)


_BENCH_STATE = {}


def _init_bench_worker(lexicon, word_size, max_guesses):
    _BENCH_STATE["lexicon"] = lexicon
    _BENCH_STATE["word_size"] = word_size
    _BENCH_STATE["max_guesses"] = max_guesses


def _bench_game(game_seed):
    return play_random_game(
        _BENCH_STATE["lexicon"],
        _BENCH_STATE["word_size"],
        rng=random.Random(game_seed),
        max_guesses=_BENCH_STATE["max_guesses"],
    )


def run_benchmark(lexicon, word_size: int, games: int, seed=None, workers: int | None = None,
                  max_guesses: int | None = None, progress: bool = True) -> BenchmarkSummary:
    """
    Play *games* independent random games and tally the outcomes.

    Each game gets its own seed drawn from *seed*, so a seeded benchmark
    gives the same summary whether it runs serially or in a worker pool.
    """
    lexicon = list(lexicon)
    base = random.Random(seed)
    game_seeds = [base.randrange(2**32) for _ in range(games)]
    summary = BenchmarkSummary()

    if workers is not None and workers > 1:
        start_method = "fork" if "fork" in mp.get_all_start_methods() else "spawn"
        ctx = mp.get_context(start_method)
        with ctx.Pool(
            processes=workers,
            initializer=_init_bench_worker,
            initargs=(lexicon, word_size, max_guesses),
        ) as pool:
            results = pool.imap(_bench_game, game_seeds)
            for result in tqdm(results, total=games, desc="Games", disable=not progress):
                summary.record(result)
        return summary

    for game_seed in tqdm(game_seeds, desc="Games", disable=not progress):
        summary.record(
            play_random_game(lexicon, word_size, rng=random.Random(game_seed), max_guesses=max_guesses)
        )
    return summary
