"""
entropy.py

Entropy of the feedback distribution a guess produces over the candidates.

For a guess g, every other candidate t is treated as a possible target and
the codes generate_pattern(g, t) are tallied. The Shannon entropy of that
tally is the expected information, in bits, that playing g reveals.
"""

import bisect
import multiprocessing as mp
from collections.abc import Mapping

import numpy as np

from wordle_assistant.patterns import WordTable, pattern_row


# Entropies closer than this are treated as the same value.
EPSILON = 1e-9

_WORKER_STATE = {}


def entropy_of(counts) -> float:
    """
    Compute Shannon entropy, in bits, from bucket counts.

    *counts* is either a mapping of code -> occurrences or an array of
    occurrences (e.g. from np.bincount). Empty buckets contribute nothing.
    """
    if isinstance(counts, Mapping):
        values = np.fromiter(counts.values(), dtype=np.float64, count=len(counts))
    else:
        values = np.asarray(counts, dtype=np.float64)
    total = values.sum()
    if total <= 0:
        return 0.0
    probs = values[values > 0] / total
    return float(np.sum(probs * np.log2(1.0 / probs)))


class EntropyTable:
    """
    Words grouped by entropy, keys kept in ascending order.

    A value within EPSILON of an existing key joins that key. Words under a
    key keep the order in which they were added.
    """

    def __init__(self):
        self._keys = []
        self._words = []

    def add(self, entropy: float, word: str) -> None:
        i = bisect.bisect_left(self._keys, entropy)
        if i < len(self._keys) and abs(self._keys[i] - entropy) <= EPSILON:
            self._words[i].append(word)
        elif i > 0 and abs(self._keys[i - 1] - entropy) <= EPSILON:
            self._words[i - 1].append(word)
        else:
            self._keys.insert(i, entropy)
            self._words.insert(i, [word])

    def best(self) -> str:
        """First word added under the highest entropy."""
        if not self._keys:
            raise LookupError("EntropyTable is empty")
        return self._words[-1][0]

    def max_entropy(self) -> float:
        if not self._keys:
            raise LookupError("EntropyTable is empty")
        return self._keys[-1]

    def ranked(self):
        """(entropy, words) pairs from highest to lowest entropy."""
        return [(k, list(w)) for k, w in zip(reversed(self._keys), reversed(self._words))]

    def top(self, n: int):
        """The first n (word, entropy) pairs in ranked order."""
        result = []
        for entropy, words in self.ranked():
            for word in words:
                if len(result) == n:
                    return result
                result.append((word, entropy))
        return result

    def __len__(self):
        return sum(len(w) for w in self._words)

    def __bool__(self):
        return bool(self._keys)


def guess_entropy(table: WordTable, guess_index: int) -> float:
    """Entropy of one candidate played against all the others."""
    row = np.delete(pattern_row(table, guess_index), guess_index)
    if row.size == 0:
        return 0.0
    return entropy_of(np.bincount(row))


def _init_worker(table):
    _WORKER_STATE["table"] = table


def _worker_chunk(task):
    start, end = task
    table = _WORKER_STATE["table"]
    return [guess_entropy(table, i) for i in range(start, end)]


def _parallel_entropies(table, workers):
    n = len(table)
    chunk_size = max(1, -(-n // (workers * 4)))
    tasks = [(start, min(start + chunk_size, n)) for start in range(0, n, chunk_size)]

    start_method = "fork" if "fork" in mp.get_all_start_methods() else "spawn"
    ctx = mp.get_context(start_method)
    with ctx.Pool(processes=workers, initializer=_init_worker, initargs=(table,)) as pool:
        # imap keeps task order, so results line up with candidate order
        chunks = pool.imap(_worker_chunk, tasks)
        return [value for chunk in chunks for value in chunk]


def entropies_of(candidates: list[str], word_size: int, workers: int | None = None) -> EntropyTable:
    """
    Score every candidate as a guess and group the candidates by entropy.

    With workers > 1 the guesses are scored in a process pool; results are
    merged in candidate order so ties resolve exactly as in a serial run.
    """
    entropies = EntropyTable()
    if not candidates:
        return entropies

    table = WordTable(candidates, word_size)
    if workers is not None and workers > 1:
        values = _parallel_entropies(table, workers)
    else:
        values = [guess_entropy(table, i) for i in range(len(candidates))]

    for word, value in zip(candidates, values):
        entropies.add(value, word)
    return entropies
