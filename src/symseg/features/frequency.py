from __future__ import annotations

from typing import Iterable

import numpy as np

from symseg.errors import EmptySegmentError
from symseg.features.alphabet import Alphabet


def estimate_frequency(alphabet: Alphabet | Iterable[str], segment: str) -> np.ndarray:
    """Empirical symbol probabilities of ``segment`` in alphabet order."""

    alphabet = Alphabet.from_symbols(alphabet)
    if not segment:
        raise EmptySegmentError()
    codes = alphabet.encode(segment)
    return frequencies_from_counts(np.bincount(codes, minlength=len(alphabet)))


def frequencies_from_counts(counts: np.ndarray) -> np.ndarray:
    total = int(counts.sum())
    if total == 0:
        raise EmptySegmentError()
    return counts / total


class SymbolCounts:
    """Running per-symbol counts on both sides of a sliding cut.

    Starts with the cut at position 0 (empty prefix, whole segment as
    suffix); each :meth:`advance` moves one symbol from suffix to prefix.
    """

    def __init__(self, codes: np.ndarray, alphabet_size: int) -> None:
        self.codes = codes
        self.position = 0
        self.prefix = np.zeros(alphabet_size, dtype=np.int64)
        self.suffix = np.bincount(codes, minlength=alphabet_size).astype(np.int64)

    def advance(self) -> int:
        if self.position >= len(self.codes):
            raise IndexError("cut is already at the end of the segment")
        code = self.codes[self.position]
        self.prefix[code] += 1
        self.suffix[code] -= 1
        self.position += 1
        return self.position

    def prefix_frequencies(self) -> np.ndarray:
        return frequencies_from_counts(self.prefix)

    def suffix_frequencies(self) -> np.ndarray:
        return frequencies_from_counts(self.suffix)
