from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from symseg.config.calibration import (
    CalibrationParameters,
    SegmenterConfig,
    load_segmenter_config,
)
from symseg.features.alphabet import Alphabet
from symseg.segmentation.splitter import SequenceSegment, SplitDecision, split_segments
from symseg.utils import get_logger

logger = get_logger(__name__)

MANIFEST_NAME = "segments.json"
SUBSEQUENCES_NAME = "subsequences.txt"


@dataclass
class PipelineConfig:
    alphabet: Optional[str] = None
    config_path: Optional[Path] = None
    significance_threshold: Optional[float] = None
    min_segment_length: Optional[int] = None

    def resolve_segmenter_config(self) -> SegmenterConfig:
        if self.config_path:
            return load_segmenter_config(self.config_path, alphabet=self.alphabet)
        if not self.alphabet:
            raise ValueError("An alphabet is required when no config file is given")
        return SegmenterConfig(name="default", alphabet=self.alphabet)

    def resolve_calibration(self, segmenter_config: SegmenterConfig) -> CalibrationParameters:
        calibration = segmenter_config.calibration_parameters()
        overrides: Dict[str, Any] = {}
        if self.significance_threshold is not None:
            overrides["significance_threshold"] = self.significance_threshold
        if self.min_segment_length is not None:
            overrides["min_segment_length"] = self.min_segment_length
        return replace(calibration, **overrides) if overrides else calibration


@dataclass
class PipelineResult:
    segments: List[SequenceSegment] = field(default_factory=list)
    decisions: List[SplitDecision] = field(default_factory=list)
    output_dir: Optional[Path] = None
    manifest_path: Optional[Path] = None
    subsequences_path: Optional[Path] = None

    @property
    def subsequences(self) -> List[str]:
        return [segment.text for segment in self.segments]


class SegmentationPipeline:
    def __init__(self, config: PipelineConfig) -> None:
        self.config = config
        self.segmenter_config = config.resolve_segmenter_config()
        self.alphabet = Alphabet.from_symbols(self.segmenter_config.alphabet)
        self.calibration = config.resolve_calibration(self.segmenter_config)
        logger.debug(
            "Initialized pipeline",
            extra={"config": self.segmenter_config.name, "alphabet": str(self.alphabet)},
        )

    def run(self, sequence: str, output_dir: Optional[Path] = None) -> PipelineResult:
        decisions: List[SplitDecision] = []
        segments = split_segments(sequence, self.alphabet, self.calibration, trace=decisions)
        result = PipelineResult(segments=segments, decisions=decisions)
        logger.info(
            "Split sequence of length %d into %d segments",
            len(sequence),
            len(segments),
        )
        if output_dir is None:
            return result

        output_dir.mkdir(parents=True, exist_ok=True)
        subsequences_path = output_dir / SUBSEQUENCES_NAME
        subsequences_path.write_text("".join(f"{text}\n" for text in result.subsequences))
        manifest_path = output_dir / MANIFEST_NAME
        manifest_path.write_text(json.dumps(self._manifest(sequence, result), indent=2))
        logger.info(
            "Wrote segmentation outputs",
            extra={"out": str(output_dir), "segment_count": len(segments)},
        )
        result.output_dir = output_dir
        result.manifest_path = manifest_path
        result.subsequences_path = subsequences_path
        return result

    def _manifest(self, sequence: str, result: PipelineResult) -> Dict[str, Any]:
        return {
            "config": self.segmenter_config.name,
            "alphabet": str(self.alphabet),
            "length": len(sequence),
            "calibration": asdict(self.calibration),
            "segments": [
                {"start": seg.start, "end": seg.end, "sequence": seg.text}
                for seg in result.segments
            ],
            "decisions": [asdict(decision) for decision in result.decisions],
        }
