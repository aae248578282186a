from __future__ import annotations

import sys

import numpy as np
import pytest

from symseg.config import CalibrationParameters, calibration_for_alphabet
from symseg.errors import InvalidSymbolError, UnsupportedAlphabetSizeError
from symseg.features import Alphabet
from symseg.segmentation import (
    SplitDecision,
    divergence_at,
    find_best_cut,
    split,
    split_segments,
)


def test_find_best_cut_on_two_blocks() -> None:
    alphabet = Alphabet.from_symbols("AC")
    best = find_best_cut(alphabet.encode("AAAAACCCCC"), len(alphabet))

    assert best is not None
    assert best.position == 5
    assert best.divergence == pytest.approx(1.0)


def test_find_best_cut_keeps_first_maximum() -> None:
    alphabet = Alphabet.from_symbols("AC")
    best = find_best_cut(alphabet.encode("ACCA"), len(alphabet))

    assert best is not None
    assert best.position == 1
    assert best.divergence == pytest.approx(divergence_at("ACCA", alphabet, 3))


def test_find_best_cut_needs_two_symbols() -> None:
    alphabet = Alphabet.from_symbols("AC")
    assert find_best_cut(alphabet.encode("A"), len(alphabet)) is None


def test_divergence_at_matches_manual_value() -> None:
    assert divergence_at("AAAAACCCCC", "AC", 5) == pytest.approx(1.0)
    with pytest.raises(ValueError):
        divergence_at("AAAAACCCCC", "AC", 0)
    with pytest.raises(ValueError):
        divergence_at("AAAAACCCCC", "AC", 10)


def test_split_two_homogeneous_blocks() -> None:
    sequence = "A" * 50 + "C" * 50
    assert split(sequence, "AC") == ["A" * 50, "C" * 50]


def test_split_three_blocks_reports_offsets() -> None:
    sequence = "A" * 400 + "C" * 400 + "A" * 400
    params = CalibrationParameters(beta=0.8, a=2.96, b=-7.88, min_segment_length=1)

    segments = split_segments(sequence, "AC", params)

    assert [(seg.start, seg.end) for seg in segments] == [(0, 400), (400, 800), (800, 1200)]
    assert all(seg.length() == 400 for seg in segments)


def test_split_repeated_symbol_is_single_leaf() -> None:
    trace: list[SplitDecision] = []
    segments = split_segments("AAAAAAAAAA", "ACGT", trace=trace)

    assert [seg.text for seg in segments] == ["AAAAAAAAAA"]
    assert len(trace) == 1
    assert trace[0].max_divergence == 0.0
    assert trace[0].significance == 0.0
    assert not trace[0].accepted


def test_split_shorter_than_min_length_is_returned_whole() -> None:
    params = CalibrationParameters(beta=0.8, a=2.96, b=-7.88, min_segment_length=200)
    sequence = "A" * 50 + "C" * 50
    trace: list[SplitDecision] = []

    assert split_segments(sequence, "AC", params, trace=trace)[0].text == sequence
    assert split(sequence, "AC", params) == [sequence]
    assert trace == []


def test_split_empty_sequence() -> None:
    assert split("", "ACGT") == [""]


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_split_leaves_reconstruct_sequence(seed: int) -> None:
    rng = np.random.default_rng(seed)
    blocks = []
    for weights in ([0.7, 0.1, 0.1, 0.1], [0.1, 0.1, 0.1, 0.7], [0.25, 0.25, 0.25, 0.25]):
        blocks.append("".join(rng.choice(list("ACGT"), size=120, p=weights)))
    sequence = "".join(blocks)
    params = CalibrationParameters(beta=0.8, a=2.44, b=-6.15, min_segment_length=1)

    leaves = split(sequence, "ACGT", params)

    assert "".join(leaves) == sequence
    assert all(leaves)


def test_split_trace_records_accepted_cuts() -> None:
    trace: list[SplitDecision] = []
    split_segments("A" * 50 + "C" * 50, "AC", trace=trace)

    assert trace[0].accepted
    assert trace[0].cut == 50
    assert trace[0].significance > calibration_for_alphabet(2).significance_threshold
    assert [decision.accepted for decision in trace[1:]] == [False, False]


def test_split_propagates_invalid_symbol() -> None:
    with pytest.raises(InvalidSymbolError):
        split("A" * 50 + "N" + "C" * 50, "AC")


def test_split_requires_calibration_for_unknown_alphabet_size() -> None:
    with pytest.raises(UnsupportedAlphabetSizeError):
        split("ABCABC", "ABC")

    params = CalibrationParameters(beta=0.8, a=2.5, b=-6.0)
    assert "".join(split("A" * 60 + "B" * 60 + "C" * 60, "ABC", params)) == "A" * 60 + "B" * 60 + "C" * 60


def _stack_depth() -> int:
    depth = 0
    frame = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def test_split_deep_tree_does_not_grow_call_stack() -> None:
    # each significant cut peels one short block off the tail
    sequence = "".join("C" if j == 0 else "A" for i in range(1, 60) for j in range(i))
    params = CalibrationParameters(
        beta=1.0, a=0.0, b=1.0, min_segment_length=1, significance_threshold=0.0
    )
    trace: list[SplitDecision] = []
    split_segments("AACC", "AC", params)
    original_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(_stack_depth() + 40)
    try:
        segments = split_segments(sequence, "AC", params, trace=trace)
    finally:
        sys.setrecursionlimit(original_limit)

    assert "".join(seg.text for seg in segments) == sequence
    assert len(segments) > 50
    assert sum(decision.accepted for decision in trace) == len(segments) - 1
