"""Recursive Jensen-Shannon segmentation of symbolic sequences."""

from .config import CalibrationParameters, calibration_for_alphabet
from .errors import (
    EmptySegmentError,
    InvalidSymbolError,
    SegmentationError,
    UnsupportedAlphabetSizeError,
)
from .features import Alphabet, divergence, entropy, estimate_frequency
from .segmentation import SequenceSegment, divergence_at, significance, split, split_segments

__all__ = [
    "Alphabet",
    "CalibrationParameters",
    "calibration_for_alphabet",
    "SegmentationError",
    "InvalidSymbolError",
    "UnsupportedAlphabetSizeError",
    "EmptySegmentError",
    "estimate_frequency",
    "entropy",
    "divergence",
    "significance",
    "SequenceSegment",
    "divergence_at",
    "split",
    "split_segments",
]
