"""Detection overlay: result -> marks -> pixels (cv2).

Example:
    >>> from facecue.overlay import draw_detection
    >>> annotated = draw_detection(bgr_image, result)
"""

from __future__ import annotations

import math

import cv2
import numpy as np

from facecue.marks import BBoxMark, LabelMark, LineMark, Mark, PointMark
from facecue.types import DetectionResult

FONT = cv2.FONT_HERSHEY_SIMPLEX

BOX_COLOR = (0, 255, 0)
CENTER_COLOR = (0, 0, 255)
AXIS_COLOR = (255, 255, 0)
AXIS_LENGTH_PX = 40


def annotate(result: DetectionResult, width: int, height: int) -> list[Mark]:
    """Overlay marks for a detection.

    A square of side ``face_size`` centred on the face, a centre dot and
    an angle indicator whose end point moves with yaw (x) and pitch (y).

    Returns:
        Marks with normalized coordinates; empty when nothing was detected.
    """
    if not result.detected or width <= 0 or height <= 0:
        return []

    cx, cy = result.face_center.x, result.face_center.y
    side = result.face_size
    yaw = math.radians(result.y_angle)
    pitch = math.radians(result.x_angle)
    end_x = cx + math.cos(yaw) * AXIS_LENGTH_PX
    end_y = cy + math.sin(pitch) * AXIS_LENGTH_PX

    return [
        BBoxMark(
            x=(cx - side / 2) / width,
            y=(cy - side / 2) / height,
            w=side / width,
            h=side / height,
            label="face",
            color=BOX_COLOR,
            confidence=result.confidence,
        ),
        PointMark(x=cx / width, y=cy / height, radius=4, color=CENTER_COLOR),
        LineMark(
            x1=cx / width,
            y1=cy / height,
            x2=end_x / width,
            y2=end_y / height,
            color=AXIS_COLOR,
        ),
    ]


def render_marks(frame: np.ndarray, marks: list[Mark]) -> np.ndarray:
    """Render marks onto a copy of a BGR frame.

    Args:
        frame: BGR image (H, W, 3).
        marks: Marks from ``annotate()``.

    Returns:
        Annotated copy, or the input itself when there is nothing to draw.
    """
    if not marks:
        return frame

    output = frame.copy()
    h, w = output.shape[:2]
    for mark in marks:
        if isinstance(mark, BBoxMark):
            output = _render_bbox(output, mark, w, h)
        elif isinstance(mark, PointMark):
            center = (int(mark.x * w), int(mark.y * h))
            cv2.circle(output, center, mark.radius, mark.color, -1)
        elif isinstance(mark, LineMark):
            cv2.line(
                output,
                (int(mark.x1 * w), int(mark.y1 * h)),
                (int(mark.x2 * w), int(mark.y2 * h)),
                mark.color,
                mark.thickness,
            )
        elif isinstance(mark, LabelMark):
            cv2.putText(
                output, mark.text, (int(mark.x * w), int(mark.y * h)),
                FONT, mark.font_scale, mark.color, 1,
            )
    return output


def _render_bbox(image: np.ndarray, mark: BBoxMark, w: int, h: int) -> np.ndarray:
    x1, y1 = int(mark.x * w), int(mark.y * h)
    x2, y2 = int((mark.x + mark.w) * w), int((mark.y + mark.h) * h)

    # stroke opacity follows confidence
    layer = image.copy()
    cv2.rectangle(layer, (x1, y1), (x2, y2), mark.color, mark.thickness)
    alpha = min(1.0, max(0.0, mark.confidence))
    image = cv2.addWeighted(layer, alpha, image, 1.0 - alpha, 0)

    if mark.label:
        text = f"{mark.label} {mark.confidence:.0%}"
        label_y = y1 - 6 if y1 > 20 else y2 + 16
        cv2.putText(image, text, (x1, label_y), FONT, 0.45, mark.color, 1)
    return image


def draw_detection(frame: np.ndarray, result: DetectionResult) -> np.ndarray:
    """Annotate a BGR frame with a detection result."""
    h, w = frame.shape[:2]
    return render_marks(frame, annotate(result, w, h))


__all__ = ["annotate", "render_marks", "draw_detection"]
