from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from symseg.config.calibration import CalibrationParameters, resolve_calibration
from symseg.features.alphabet import Alphabet
from symseg.features.entropy import divergence, entropy, mixture_divergence
from symseg.features.frequency import SymbolCounts, estimate_frequency
from symseg.segmentation.significance import is_significant, significance
from symseg.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CutCandidate:
    position: int
    divergence: float


@dataclass
class SequenceSegment:
    start: int
    end: int
    text: str

    def length(self) -> int:
        return self.end - self.start


@dataclass
class SplitDecision:
    start: int
    end: int
    cut: Optional[int]
    max_divergence: Optional[float]
    significance: float
    accepted: bool


def find_best_cut(codes: np.ndarray, alphabet_size: int) -> CutCandidate | None:
    """Scan every cut of an encoded segment and keep the most divergent one.

    Counts are updated incrementally as the cut slides, so the scan is linear
    in the segment length. Ties keep the earliest position.
    """

    length = len(codes)
    if length < 2:
        return None
    counts = SymbolCounts(codes, alphabet_size)
    # the length-weighted mixture of both sides is the whole segment
    parent_entropy = entropy(counts.suffix_frequencies())
    best: CutCandidate | None = None
    for _ in range(1, length):
        pos = counts.advance()
        value = mixture_divergence(
            parent_entropy,
            counts.prefix / pos,
            counts.suffix / (length - pos),
            pos / length,
            (length - pos) / length,
        )
        if best is None or value > best.divergence:
            best = CutCandidate(position=pos, divergence=value)
    return best


def divergence_at(sequence: str, alphabet: Alphabet | Iterable[str], position: int) -> float:
    """Jensen-Shannon divergence of ``sequence`` cut at ``position``."""

    alphabet = Alphabet.from_symbols(alphabet)
    if not 0 < position < len(sequence):
        raise ValueError(f"position must be within [1, {len(sequence) - 1}], got {position}")
    length = len(sequence)
    return divergence(
        estimate_frequency(alphabet, sequence[:position]),
        estimate_frequency(alphabet, sequence[position:]),
        position / length,
        (length - position) / length,
    )


def split_segments(
    sequence: str,
    alphabet: Alphabet | Iterable[str],
    calibration: CalibrationParameters | None = None,
    *,
    trace: Optional[List[SplitDecision]] = None,
) -> List[SequenceSegment]:
    """Recursively split ``sequence`` at significant maximal-divergence cuts.

    The recursion runs on an explicit stack; leaves are returned left to right
    so their texts concatenate back to ``sequence``.
    """

    alphabet = Alphabet.from_symbols(alphabet)
    params = resolve_calibration(len(alphabet), calibration)
    codes = alphabet.encode(sequence)

    leaves: List[SequenceSegment] = []
    pending: List[Tuple[int, int]] = [(0, len(sequence))]
    while pending:
        start, end = pending.pop()
        length = end - start
        if length < params.min_segment_length:
            leaves.append(SequenceSegment(start, end, sequence[start:end]))
            continue

        best = find_best_cut(codes[start:end], len(alphabet))
        max_divergence = best.divergence if best else None
        score = significance(max_divergence, length, len(alphabet), params)
        accepted = best is not None and is_significant(score, params)
        cut = start + best.position if best else None
        if trace is not None:
            trace.append(
                SplitDecision(
                    start=start,
                    end=end,
                    cut=cut,
                    max_divergence=max_divergence,
                    significance=score,
                    accepted=accepted,
                )
            )
        logger.debug(
            "Evaluated segment",
            extra={
                "start": start,
                "end": end,
                "cut": cut,
                "divergence": max_divergence,
                "significance": score,
                "accepted": accepted,
            },
        )

        if accepted:
            # postfix first so the prefix is popped next
            pending.append((cut, end))
            pending.append((start, cut))
        else:
            leaves.append(SequenceSegment(start, end, sequence[start:end]))
    return leaves


def split(
    sequence: str,
    alphabet: Alphabet | Iterable[str],
    calibration: CalibrationParameters | None = None,
) -> List[str]:
    return [segment.text for segment in split_segments(sequence, alphabet, calibration)]
