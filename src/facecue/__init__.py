"""facecue: heuristic face pose/expression tracking for avatar control.

Pipeline, run once per frame:

    RGBA frame -> luminance -> candidate windows -> largest region
               -> yaw/pitch + mouth/eye state -> temporal smoothing

Example:
    >>> from facecue import FaceCueAnalyzer, Frame, TemporalSmoother
    >>> analyzer = FaceCueAnalyzer()
    >>> smoother = TemporalSmoother()
    >>> result = smoother.update(analyzer.process(Frame.from_buffer(buf, 640, 480)))
"""

from facecue.analyzer import FaceCueAnalyzer
from facecue.avatar import AvatarPose, map_to_avatar
from facecue.config import (
    PoseConfig,
    ScanConfig,
    SchedulerConfig,
    SmoothingConfig,
    TrackerConfig,
)
from facecue.errors import FrameShapeError
from facecue.estimator import estimate_pose
from facecue.frame import Frame
from facecue.luminance import to_luminance
from facecue.scanner import scan_regions
from facecue.scheduler import FrameScheduler
from facecue.selector import select_largest
from facecue.smoothing import SmoothingState, TemporalSmoother, smooth
from facecue.source import FrameSlot, FrameSource, VideoCaptureSource
from facecue.stats import SchedulerStats
from facecue.types import CandidateRegion, DetectionResult, EyeState, Point

__version__ = "0.1.0"

__all__ = [
    # Pipeline stages
    "to_luminance",
    "scan_regions",
    "select_largest",
    "estimate_pose",
    "smooth",
    "FaceCueAnalyzer",
    # Session
    "FrameScheduler",
    "SchedulerStats",
    "SmoothingState",
    "TemporalSmoother",
    # Sources
    "Frame",
    "FrameSource",
    "FrameSlot",
    "VideoCaptureSource",
    # Types
    "CandidateRegion",
    "DetectionResult",
    "EyeState",
    "Point",
    "AvatarPose",
    "map_to_avatar",
    # Configuration
    "ScanConfig",
    "PoseConfig",
    "SmoothingConfig",
    "SchedulerConfig",
    "TrackerConfig",
    # Errors
    "FrameShapeError",
]
