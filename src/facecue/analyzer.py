"""Heuristic face analyzer: one frame in, one raw DetectionResult out.

Stages, in order:

    luminance -> scan -> select -> estimate

No trained model is involved. Temporal smoothing is not applied here; it
belongs to the session that owns the smoothing state (see
``facecue.scheduler``).
"""

import logging
from typing import Dict, List, Optional

import numpy as np

from facecue.config import PoseConfig, ScanConfig
from facecue.estimator import estimate_pose
from facecue.frame import Frame
from facecue.luminance import to_luminance
from facecue.scanner import scan_regions
from facecue.selector import select_largest
from facecue.steps import ProcessingStep, get_processing_steps, processing_step
from facecue.types import CandidateRegion, DetectionResult

logger = logging.getLogger(__name__)


class FaceCueAnalyzer:
    """Brightness/contrast face detector with pose and expression cues.

    Args:
        scan: Region scanner thresholds.
        pose: Pose and expression settings.
    """

    def __init__(
        self,
        scan: Optional[ScanConfig] = None,
        pose: Optional[PoseConfig] = None,
    ):
        self._scan_config = scan or ScanConfig()
        self._pose_config = pose or PoseConfig()
        self._step_timings: Optional[Dict[str, float]] = None
        self._last_timing: Optional[Dict[str, float]] = None

    @property
    def name(self) -> str:
        return "face.cue"

    @property
    def processing_steps(self) -> List[ProcessingStep]:
        return get_processing_steps(self)

    @property
    def last_timing(self) -> Optional[Dict[str, float]]:
        """Per-stage milliseconds of the most recent ``process`` call."""
        return self._last_timing

    @processing_step("luminance", "Reduce RGBA to (R+G+B)/3 luminance")
    def _luminance(self, frame: Frame) -> np.ndarray:
        return to_luminance(frame.data, frame.width, frame.height)

    @processing_step(
        "scan",
        "Probe-grid window search with brightness/variance heuristics",
        follows="luminance",
    )
    def _scan(self, gray: np.ndarray) -> List[CandidateRegion]:
        return scan_regions(gray, self._scan_config)

    @processing_step("select", "Keep the largest candidate", follows="scan")
    def _select(self, candidates: List[CandidateRegion]) -> Optional[CandidateRegion]:
        return select_largest(candidates)

    @processing_step(
        "estimate",
        "Yaw/pitch from screen offset, mouth/eye state from statistics",
        follows="select",
    )
    def _estimate(self, region: CandidateRegion, frame: Frame) -> DetectionResult:
        return estimate_pose(
            region,
            frame.width,
            frame.height,
            self._pose_config,
            frame_id=frame.frame_id,
            t_ns=frame.t_src_ns,
        )

    def process(self, frame: Frame) -> DetectionResult:
        """Run all stages on one frame.

        Raises:
            FrameShapeError: If the frame buffer does not match its size.
        """
        self._step_timings = {}
        try:
            gray = self._luminance(frame)
            region = self._select(self._scan(gray))
            if region is None:
                logger.debug("Frame %d: no candidate region", frame.frame_id)
                return DetectionResult.empty(frame.frame_id, frame.t_src_ns)
            return self._estimate(region, frame)
        finally:
            self._last_timing = self._step_timings
            self._step_timings = None

    def annotate(self, result: DetectionResult, width: int, height: int):
        """Overlay marks for a result (see ``facecue.overlay.annotate``)."""
        from facecue.overlay import annotate

        return annotate(result, width, height)


__all__ = ["FaceCueAnalyzer"]
