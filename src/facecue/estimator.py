"""Head pose and expression estimation from a selected candidate region.

Angles come from the region's screen-space offset, not from 3D geometry:
the horizontal offset drives yaw (wider range), the vertical offset
drives pitch. Mouth and eye state are coarse texture/shape proxies.
"""

from typing import Optional

from facecue.config import PoseConfig
from facecue.types import CandidateRegion, DetectionResult, EyeState, Point


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


def estimate_pose(
    region: CandidateRegion,
    width: int,
    height: int,
    config: Optional[PoseConfig] = None,
    *,
    frame_id: int = 0,
    t_ns: int = 0,
) -> DetectionResult:
    """Build a positive DetectionResult from a region.

    Args:
        region: Selected candidate.
        width: Frame width in pixels.
        height: Frame height in pixels.
        config: Gains, limits and expression thresholds.
        frame_id: Frame identifier copied into the result.
        t_ns: Frame timestamp copied into the result.

    Returns:
        DetectionResult with ``detected=True``.
    """
    config = config or PoseConfig()
    half_w = width / 2
    half_h = height / 2

    x_offset = (region.center_x - half_w) / half_w
    y_offset = (region.center_y - half_h) / half_h

    yaw = _clamp(x_offset * config.yaw_gain, config.yaw_limit)
    pitch = _clamp(y_offset * config.pitch_gain, config.pitch_limit)

    aspect = region.height / region.width
    mouth_open = (
        region.variance > config.mouth_min_variance
        and aspect > config.mouth_min_aspect
    )
    # one statistic for the whole window, so both eyes always agree
    eyes = (
        region.mean_brightness > config.eye_min_brightness
        and region.variance > config.eye_min_variance
    )

    return DetectionResult(
        detected=True,
        confidence=region.confidence,
        x_angle=pitch,
        y_angle=yaw,
        position=Point(region.center_x - half_w, region.center_y - half_h),
        face_center=Point(float(region.center_x), float(region.center_y)),
        face_size=max(region.width, region.height),
        mouth_open=mouth_open,
        eyes_open=EyeState(left=eyes, right=eyes),
        brightness=region.mean_brightness,
        variance=region.variance,
        frame_id=frame_id,
        t_ns=t_ns,
    )


__all__ = ["estimate_pose"]
