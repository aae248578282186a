from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from symseg.errors import UnsupportedAlphabetSizeError

DEFAULT_SIGNIFICANCE_THRESHOLD = 0.95
DEFAULT_MIN_SEGMENT_LENGTH = 2


@dataclass(frozen=True)
class CalibrationParameters:
    """Chi-squared approximation constants and recursion stopping criteria."""

    beta: float
    a: float
    b: float
    significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD
    min_segment_length: int = DEFAULT_MIN_SEGMENT_LENGTH

    def __post_init__(self) -> None:
        if not 0.0 <= self.significance_threshold <= 1.0:
            raise ValueError("significance_threshold must be within [0, 1]")
        if self.min_segment_length < 1:
            raise ValueError("min_segment_length must be positive")


# Grosse et al. (2002), Table 1
CALIBRATION_PRESETS: Mapping[int, CalibrationParameters] = {
    2: CalibrationParameters(beta=0.8, a=2.96, b=-7.88),
    4: CalibrationParameters(beta=0.8, a=2.44, b=-6.15),
    12: CalibrationParameters(beta=0.85, a=2.32, b=-4.32),
}

_FLOAT_FIELDS = ("beta", "a", "b", "significance_threshold")
_REQUIRED_FIELDS = ("beta", "a", "b")


def calibration_for_alphabet(alphabet_size: int) -> CalibrationParameters:
    try:
        return CALIBRATION_PRESETS[alphabet_size]
    except KeyError:
        raise UnsupportedAlphabetSizeError(alphabet_size) from None


def resolve_calibration(
    alphabet_size: int, calibration: CalibrationParameters | None = None
) -> CalibrationParameters:
    if calibration is not None:
        return calibration
    return calibration_for_alphabet(alphabet_size)


@dataclass
class SegmenterConfig:
    name: str
    alphabet: str
    calibration: Dict[str, Any] = field(default_factory=dict)

    def calibration_parameters(self) -> CalibrationParameters:
        overrides = _parse_overrides(self.calibration)
        preset = CALIBRATION_PRESETS.get(len(self.alphabet))
        if preset is not None:
            return replace(preset, **overrides)
        if not all(key in overrides for key in _REQUIRED_FIELDS):
            raise UnsupportedAlphabetSizeError(len(self.alphabet))
        return CalibrationParameters(**overrides)


def load_segmenter_config(path: Path, alphabet: Optional[str] = None) -> SegmenterConfig:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text())
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must contain a mapping")
    resolved_alphabet = alphabet or data.get("alphabet")
    if not resolved_alphabet:
        raise ValueError(f"Config {path} does not define an alphabet")
    return SegmenterConfig(
        name=data.get("name", path.stem),
        alphabet=str(resolved_alphabet),
        calibration=data.get("calibration") or {},
    )


def _parse_overrides(values: Mapping[str, Any]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if key not in _FLOAT_FIELDS and key != "min_segment_length":
            raise ValueError(f"Unknown calibration field: {key}")
        try:
            if key in _FLOAT_FIELDS:
                overrides[key] = float(value)
            else:
                overrides[key] = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid calibration value for {key}: {value!r}") from exc
    return overrides
