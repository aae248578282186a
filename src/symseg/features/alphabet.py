from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

import numpy as np

from symseg.errors import InvalidSymbolError

MIN_ALPHABET_SIZE = 2


@dataclass(frozen=True)
class Alphabet:
    """Ordered set of distinct symbols a sequence is drawn from."""

    symbols: Tuple[str, ...]
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.symbols) < MIN_ALPHABET_SIZE:
            raise ValueError(f"Alphabet needs at least {MIN_ALPHABET_SIZE} symbols")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("Alphabet symbols must be distinct")
        for symbol in self.symbols:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise ValueError(f"Alphabet symbols must be single characters, got {symbol!r}")
        object.__setattr__(
            self, "_index", {symbol: idx for idx, symbol in enumerate(self.symbols)}
        )

    @classmethod
    def from_symbols(cls, symbols: Iterable[str] | "Alphabet") -> "Alphabet":
        if isinstance(symbols, Alphabet):
            return symbols
        return cls(tuple(symbols))

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __str__(self) -> str:
        return "".join(self.symbols)

    def encode(self, segment: str) -> np.ndarray:
        """Map each symbol of ``segment`` to its alphabet index.

        Every symbol is checked; the first one outside the alphabet raises
        :class:`InvalidSymbolError`.
        """

        codes = np.empty(len(segment), dtype=np.int64)
        for position, symbol in enumerate(segment):
            idx = self._index.get(symbol)
            if idx is None:
                raise InvalidSymbolError(symbol, position)
            codes[position] = idx
        return codes
