"""
words.py

Loads the lexicon: every word of the chosen size, lowercased, a-z only,
deduplicated and sorted.

Two sources are understood:

- a WordNet 3.0 install, read from its dict/index.{noun,verb,adj,adv} files
  (the first space-separated token of each entry line is the lemma),
- a plain newline-separated word list.
"""

import re
import sys
from pathlib import Path

from wordle_assistant.errors import EmptyLexicon


WORDNET_INDEX_FILES = ("index.noun", "index.verb", "index.adj", "index.adv")


def _word_pattern(word_size):
    return re.compile(rf"^[a-z]{{{word_size}}}$")


def _keep_sized(raw_words, word_size):
    pattern = _word_pattern(word_size)
    return sorted({w for w in (r.strip().lower() for r in raw_words) if pattern.match(w)})


def load_word_list(path, word_size: int) -> list[str]:
    """Load a newline-separated word list, keeping words of *word_size* letters."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Word list not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return _keep_sized(f, word_size)


def _index_lemmas(path):
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            # License header lines start with a space
            if not line.strip() or line.startswith(" "):
                continue
            lemma, sep, _ = line.partition(" ")
            if sep:
                yield lemma


def _wordnet_dict_dir(path):
    path = Path(path)
    if (path / "dict").is_dir():
        return path / "dict"
    return path


def load_wordnet(path, word_size: int) -> list[str]:
    """
    Load lemmas of *word_size* letters from a WordNet install.

    *path* is either the WordNet root (holding dict/) or the dict directory
    itself. Index files that cannot be read are skipped with a warning.
    """
    dict_dir = _wordnet_dict_dir(path)
    lemmas = []
    loaded = 0
    for name in WORDNET_INDEX_FILES:
        index = dict_dir / name
        try:
            lemmas.extend(_index_lemmas(index))
        except OSError as exc:
            print(f"Warning: could not read {index}: {exc}", file=sys.stderr)
            continue
        loaded += 1

    if not loaded:
        raise FileNotFoundError(f"No WordNet index files found in {dict_dir}")
    return _keep_sized(lemmas, word_size)


def load_lexicon(path, word_size: int) -> list[str]:
    """
    Load the lexicon from *path*: a WordNet directory or a word list file.

    Raises FileNotFoundError if the source is missing and EmptyLexicon if it
    holds no words of the requested size.
    """
    path = Path(path)
    if path.is_dir():
        words = load_wordnet(path, word_size)
    elif path.is_file():
        words = load_word_list(path, word_size)
    else:
        raise FileNotFoundError(f"Lexicon source not found: {path}")

    if not words:
        raise EmptyLexicon(f"No {word_size}-letter words found in {path}")
    return words
