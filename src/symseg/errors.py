from __future__ import annotations


class SegmentationError(ValueError):
    """Base class for input errors raised while segmenting a sequence."""


class InvalidSymbolError(SegmentationError):
    def __init__(self, symbol: str, position: int) -> None:
        super().__init__(f"Symbol {symbol!r} at position {position} is not in the alphabet")
        self.symbol = symbol
        self.position = position


class UnsupportedAlphabetSizeError(SegmentationError):
    def __init__(self, size: int) -> None:
        super().__init__(
            f"No calibration preset for alphabet size {size}; "
            "supply beta, a and b explicitly"
        )
        self.size = size


class EmptySegmentError(SegmentationError):
    def __init__(self) -> None:
        super().__init__("Symbol frequencies are undefined for an empty segment")
