"""
main.py

Unified CLI for the entropy word-guessing assistant.

Modes:
-mode play (default): interactive assistant for a game played elsewhere.
-mode random: the solver plays one game against a random secret.
-mode benchmark: many random games, with success/failure counts.
-mode rank: top opening guesses by entropy over the whole lexicon.

Optional:
-size N: word size, 3 to 8 (default: 5).
-dict PATH: WordNet install or word list file (default: ./WordNet-3.0).
-games N, -seed N: benchmark size and reproducibility.
-workers N: worker processes for scoring guesses / benchmark games.
-top N: how many words the rank mode prints.
"""

import argparse
import random

from wordle_assistant.config import CONFIG, check_word_size
from wordle_assistant.entropy import entropies_of
from wordle_assistant.errors import (
    EmptyCandidateSet,
    InvalidGuess,
    InvalidMove,
    MalformedFeedback,
    WordleError,
)
from wordle_assistant.patterns import parse_feedback, render_code
from wordle_assistant.session import (
    Phase,
    apply_feedback,
    enter_word,
    new_session,
    play_random_game,
    propose_guess,
    remove_last_guess,
    restart,
    run_benchmark,
)
from wordle_assistant.words import load_lexicon


COMMANDS = (
    "Commands:\n"
    "  word    - enter your word\n"
    "  guess   - get the first/next guess\n"
    "  remove  - remove the last guess from the dictionary\n"
    "  restart - start over with the full dictionary\n"
    "  quit    - exit the game\n"
)

FEEDBACK_HELP = "g/gn = correct, y = misplaced, b/gr = absent; blank line to go back"


def _print_history(state):
    for i, (guess, code) in enumerate(state.history, 1):
        print(f"Guess {i}: {guess}  {render_code(code, state.word_size)}")


def _collect_feedback(state, read, workers):
    """Prompt for feedback on the current guess until the game moves on."""
    while state.last_guess is not None and not state.finished:
        try:
            text = read(f"Feedback for {state.last_guess.upper()} ({FEEDBACK_HELP}): ").strip()
        except EOFError:
            return state
        if not text:
            return state

        try:
            colors = parse_feedback(text, state.word_size)
            state, code = apply_feedback(state, colors)
        except MalformedFeedback as exc:
            print(f"Invalid input! {exc}")
            continue
        except EmptyCandidateSet as exc:
            print(f"{exc}. Check the feedback, or type 'restart' to start over.")
            continue

        print(f"{render_code(code, state.word_size)}  remaining={len(state.candidates)}")
        if state.phase is Phase.SOLVED:
            print("You won!")
            _print_history(state)
            return state
        if state.phase is Phase.EXHAUSTED:
            print(f"Out of guesses. {len(state.candidates)} candidates were left.")
            _print_history(state)
            print("Type 'restart' to play again.")
            return state

        state, guess = propose_guess(state, workers=workers)
        print(f"Next guess should be: {guess}")
    return state


def run_play(lexicon, word_size, max_guesses=None, workers=None, read=input):
    print("Play Wordle Offline")
    print(COMMANDS)
    state = new_session(lexicon, word_size, max_guesses=max_guesses)

    while True:
        try:
            command = read("> ").strip().lower()
        except EOFError:
            command = "quit"

        if command == "quit":
            print("Quitting game.")
            return state

        if command == "guess":
            print("Finding next guess...")
            try:
                state, guess = propose_guess(state, workers=workers)
            except (EmptyCandidateSet, InvalidMove) as exc:
                print(f"{exc}. Type 'restart' to start over.")
                continue
            print(guess)
        elif command == "word":
            try:
                word = read("Enter your word: ")
            except EOFError:
                print("Quitting game.")
                return state
            try:
                state, _ = enter_word(state, word)
            except InvalidMove as exc:
                print(f"{exc}. Type 'restart' to start over.")
                continue
            except InvalidGuess as exc:
                print(exc)
                continue
            print("You can now start providing results.")
        elif command == "remove":
            if state.last_guess is None or state.finished:
                print("No guess to remove.")
                continue
            state, removed = remove_last_guess(state)
            if removed is not None:
                print(f"Removing {removed} from the dictionary.")
            continue
        elif command == "restart":
            state = restart(state)
            print(f"Starting over with {len(state.candidates)} words.")
            continue
        else:
            print(COMMANDS)
            continue

        state = _collect_feedback(state, read, workers)
        if state.solved:
            return state


def run_random(lexicon, word_size, seed=None, max_guesses=None, workers=None):
    result = play_random_game(
        lexicon, word_size, rng=random.Random(seed), max_guesses=max_guesses, workers=workers
    )
    for i, (guess, code) in enumerate(zip(result.guesses, result.codes), 1):
        print(f"Guess {i}: {guess}  {render_code(code, word_size)}")
    status = "SOLVED" if result.solved else "FAILED"
    print(f"Secret: {result.secret} -> {status} in {result.num_guesses} guesses")
    return result


def run_benchmark_mode(lexicon, word_size, games, seed=None, max_guesses=None, workers=None):
    print(f"Playing {games} random games with {len(lexicon)} {word_size}-letter words...")
    summary = run_benchmark(
        lexicon, word_size, games, seed=seed, workers=workers, max_guesses=max_guesses
    )
    print(f"Success: {summary.successes} Fail: {summary.failures}")
    if summary.successes:
        print(f"Mean guesses (solved games): {summary.mean_guesses:.3f}")
        for n in sorted(summary.distribution):
            print(f"  {n} guesses: {summary.distribution[n]}")
    if summary.failed_secrets:
        print(f"Failed: {', '.join(summary.failed_secrets)}")
    return summary


def run_rank(lexicon, word_size, top, workers=None):
    print("Computing single-guess entropies...")
    entropies = entropies_of(lexicon, word_size, workers=workers)
    print("\nTop single guesses:")
    for word, entropy in entropies.top(top):
        print(f"{word}: {entropy:.4f} bits")
    if entropies:
        leaders = entropies.ranked()[0][1]
        print(f"\nHighest entropy: {entropies.max_entropy():.4f} bits ({len(leaders)} words)")
    return entropies


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Entropy-based word-guessing assistant for 3 to 8 letter games."
    )
    parser.add_argument(
        "-mode",
        choices=("play", "random", "benchmark", "rank"),
        default="play",
        help="What to run (default: play).",
    )
    parser.add_argument(
        "-size",
        type=int,
        default=CONFIG["word_size"],
        help=f"Number of letters per word (default: {CONFIG['word_size']}).",
    )
    parser.add_argument(
        "-dict",
        type=str,
        default=str(CONFIG["dictionary"]),
        help="WordNet install directory or newline-separated word list.",
    )
    parser.add_argument(
        "-max-guesses",
        type=int,
        default=None,
        help="Guess budget per game (default: word size + 1).",
    )
    parser.add_argument(
        "-games",
        type=int,
        default=CONFIG["benchmark_games"],
        help=f"Games to play in benchmark mode (default: {CONFIG['benchmark_games']}).",
    )
    parser.add_argument(
        "-seed",
        type=int,
        default=CONFIG["random_seed"],
        help="Random seed for random and benchmark modes.",
    )
    parser.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes (default: run in this process).",
    )
    parser.add_argument(
        "-top",
        type=int,
        default=CONFIG["top_words"],
        help=f"Words to list in rank mode (default: {CONFIG['top_words']}).",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        word_size = check_word_size(args.size)
        lexicon = load_lexicon(args.dict, word_size)
    except (ValueError, FileNotFoundError) as exc:
        raise SystemExit(str(exc)) from exc

    print(f"Lexicon: {len(lexicon)} words of length {word_size}")

    try:
        if args.mode == "random":
            run_random(
                lexicon, word_size, seed=args.seed, max_guesses=args.max_guesses, workers=args.workers
            )
        elif args.mode == "benchmark":
            run_benchmark_mode(
                lexicon,
                word_size,
                args.games,
                seed=args.seed,
                max_guesses=args.max_guesses,
                workers=args.workers,
            )
        elif args.mode == "rank":
            run_rank(lexicon, word_size, args.top, workers=args.workers)
        else:
            run_play(lexicon, word_size, max_guesses=args.max_guesses, workers=args.workers)
    except WordleError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
