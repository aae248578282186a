from __future__ import annotations

from typing import Sequence

import numpy as np

WEIGHT_TOLERANCE = 1e-9


def entropy(frequencies: Sequence[float] | np.ndarray) -> float:
    """Shannon entropy in bits, with 0 * log2(0) taken as 0."""

    probs = np.asarray(frequencies, dtype=float)
    if np.any(probs < 0):
        raise ValueError("Frequencies must be non-negative")
    return _entropy_bits(probs)


def divergence(
    p: Sequence[float] | np.ndarray,
    q: Sequence[float] | np.ndarray,
    weight_p: float,
    weight_q: float,
) -> float:
    """Weighted Jensen-Shannon divergence H(w_p p + w_q q) - w_p H(p) - w_q H(q)."""

    p_arr = np.asarray(p, dtype=float)
    q_arr = np.asarray(q, dtype=float)
    if p_arr.shape != q_arr.shape:
        raise ValueError("Frequency vectors must have the same length")
    if weight_p < 0 or weight_q < 0:
        raise ValueError("Weights must be non-negative")
    if abs(weight_p + weight_q - 1.0) > WEIGHT_TOLERANCE:
        raise ValueError("Weights must sum to 1")

    mixture = weight_p * p_arr + weight_q * q_arr
    return mixture_divergence(_entropy_bits(mixture), p_arr, q_arr, weight_p, weight_q)


def mixture_divergence(
    mixture_entropy: float,
    p: np.ndarray,
    q: np.ndarray,
    weight_p: float,
    weight_q: float,
) -> float:
    """Jensen-Shannon divergence given the entropy of the weighted mixture.

    Inputs are not validated; callers pass normalized float arrays.
    """

    value = mixture_entropy - weight_p * _entropy_bits(p) - weight_q * _entropy_bits(q)
    # round-off can push identical distributions slightly below zero
    return max(0.0, value)


def _entropy_bits(probs: np.ndarray) -> float:
    nonzero = probs[probs > 0]
    if nonzero.size == 0:
        return 0.0
    return float(-np.sum(nonzero * np.log2(nonzero)))
