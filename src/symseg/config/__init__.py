from .calibration import (
    CALIBRATION_PRESETS,
    CalibrationParameters,
    SegmenterConfig,
    calibration_for_alphabet,
    load_segmenter_config,
    resolve_calibration,
)

__all__ = [
    "CALIBRATION_PRESETS",
    "CalibrationParameters",
    "SegmenterConfig",
    "calibration_for_alphabet",
    "load_segmenter_config",
    "resolve_calibration",
]
