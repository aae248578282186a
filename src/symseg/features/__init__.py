from .alphabet import Alphabet
from .entropy import divergence, entropy, mixture_divergence
from .frequency import SymbolCounts, estimate_frequency, frequencies_from_counts

__all__ = [
    "Alphabet",
    "entropy",
    "divergence",
    "mixture_divergence",
    "estimate_frequency",
    "frequencies_from_counts",
    "SymbolCounts",
]
