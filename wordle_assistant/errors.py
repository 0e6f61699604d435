"""
errors.py

Exceptions raised by the solver core and its glue.

The core never prints. It raises one of these and leaves messaging to the
CLI in main.py.
"""


class WordleError(Exception):
    """Base class for every error raised by this package."""


class InvalidPosition(WordleError, IndexError):
    """A feedback code position outside the supported 0..7 range."""


class MalformedFeedback(WordleError, ValueError):
    """Feedback with the wrong number of colors or an unknown symbol."""


class InvalidGuess(WordleError, ValueError):
    """A player-supplied word that cannot be used as a guess."""


class EmptyCandidateSet(WordleError, LookupError):
    """No candidate word is left, or none is consistent with the feedback."""


class InvalidMove(WordleError, RuntimeError):
    """A move the game session cannot accept in its current phase."""


class EmptyLexicon(WordleError, ValueError):
    """The lexicon source holds no words of the requested size."""
