"""Face candidate and detection result types.

Coordinate system (pixels, origin top-left):
- ``face_center``: absolute centre of the selected window.
- ``position``: offset of that centre from the frame centre.

Angles are in degrees and derived from screen-space offset only:
- ``y_angle`` (yaw): left(-) / right(+), clamped to [-45, 45]
- ``x_angle`` (pitch): up(-) / down(+), clamped to [-30, 30]
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Point:
    """2D point in pixels."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class EyeState:
    """Per-eye openness. Both sides always agree with the current heuristic."""

    left: bool = True
    right: bool = True


@dataclass(frozen=True)
class CandidateRegion:
    """A window of the frame proposed as possibly containing a face.

    Attributes:
        center_x: Probe x coordinate the window is centred on.
        center_y: Probe y coordinate the window is centred on.
        width: Nominal window width in pixels.
        height: Nominal window height in pixels.
        area: ``width * height``.
        confidence: Heuristic score in [0, 1].
        mean_brightness: Mean luminance over the clipped window.
        variance: Population variance of luminance over the clipped window.
    """

    center_x: int
    center_y: int
    width: float
    height: float
    area: float
    confidence: float
    mean_brightness: float
    variance: float


@dataclass(frozen=True)
class DetectionResult:
    """Pose/expression estimate for one frame.

    When ``detected`` is False every field other than ``frame_id`` and
    ``t_ns`` carries no signal and consumers must ignore it.
    """

    detected: bool = False
    confidence: float = 0.0
    x_angle: float = 0.0
    y_angle: float = 0.0
    position: Point = field(default_factory=Point)
    face_center: Point = field(default_factory=Point)
    face_size: float = 0.0
    mouth_open: bool = False
    eyes_open: EyeState = field(default_factory=EyeState)
    brightness: float = 0.0
    variance: float = 0.0
    frame_id: int = 0
    t_ns: int = 0

    @classmethod
    def empty(cls, frame_id: int = 0, t_ns: int = 0) -> "DetectionResult":
        """Result for a frame with no accepted candidate.

        Boolean cues are all False so a serialised non-detection never
        reports open eyes or mouth.
        """
        return cls(
            detected=False,
            confidence=0.0,
            eyes_open=EyeState(left=False, right=False),
            frame_id=frame_id,
            t_ns=t_ns,
        )

    @property
    def signals(self) -> Dict[str, Any]:
        """Flat scalar view used for text output and logging."""
        if not self.detected:
            return {"detected": False}
        return {
            "detected": True,
            "confidence": self.confidence,
            "pitch": self.x_angle,
            "yaw": self.y_angle,
            "offset_x": self.position.x,
            "offset_y": self.position.y,
            "face_size": self.face_size,
            "mouth_open": self.mouth_open,
            "eyes_open": self.eyes_open.left and self.eyes_open.right,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)


__all__ = ["Point", "EyeState", "CandidateRegion", "DetectionResult"]
