"""Recursive Jensen-Shannon segmentation."""

from .significance import effective_sample_size, is_significant, significance
from .splitter import (
    CutCandidate,
    SequenceSegment,
    SplitDecision,
    divergence_at,
    find_best_cut,
    split,
    split_segments,
)

__all__ = [
    "effective_sample_size",
    "is_significant",
    "significance",
    "CutCandidate",
    "SequenceSegment",
    "SplitDecision",
    "divergence_at",
    "find_best_cut",
    "split",
    "split_segments",
]
