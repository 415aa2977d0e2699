"""Mapping from detection results to avatar rig parameters.

The renderer itself lives outside this package; this is the contract it
consumes. Rotations are in radians and damped by ``gain`` so the head
never mirrors the full estimated angle.
"""

import math
from dataclasses import dataclass
from typing import Optional

from facecue.types import DetectionResult

EYE_OPEN_SCALE = 1.0
EYE_CLOSED_SCALE = 0.1
MOUTH_OPEN_SCALE = 1.5
MOUTH_CLOSED_SCALE = 1.0


@dataclass(frozen=True)
class AvatarPose:
    """Rig parameters for one frame.

    Attributes:
        rotation_x: Head rotation about the horizontal axis (radians).
        rotation_y: Head rotation about the vertical axis (radians).
        left_eye_scale: Vertical scale of the left eye (1.0 open).
        right_eye_scale: Vertical scale of the right eye (1.0 open).
        mouth_scale: Uniform mouth scale (1.0 closed).
        teeth_visible: Whether the teeth mesh is shown.
    """

    rotation_x: float = 0.0
    rotation_y: float = 0.0
    left_eye_scale: float = EYE_OPEN_SCALE
    right_eye_scale: float = EYE_OPEN_SCALE
    mouth_scale: float = MOUTH_CLOSED_SCALE
    teeth_visible: bool = False


def map_to_avatar(result: DetectionResult, gain: float = 0.6) -> Optional[AvatarPose]:
    """Convert a detection into avatar rig parameters.

    Args:
        result: Smoothed detection result.
        gain: Fraction of the estimated angle applied to the head.

    Returns:
        AvatarPose, or None when nothing was detected (keep the last pose).
    """
    if not result.detected:
        return None

    def eye_scale(is_open: bool) -> float:
        return EYE_OPEN_SCALE if is_open else EYE_CLOSED_SCALE

    return AvatarPose(
        rotation_x=-math.radians(result.x_angle) * gain,
        rotation_y=math.radians(result.y_angle) * gain,
        left_eye_scale=eye_scale(result.eyes_open.left),
        right_eye_scale=eye_scale(result.eyes_open.right),
        mouth_scale=MOUTH_OPEN_SCALE if result.mouth_open else MOUTH_CLOSED_SCALE,
        teeth_visible=result.mouth_open,
    )


__all__ = ["AvatarPose", "map_to_avatar"]
