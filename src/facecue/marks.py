"""Declarative overlay marks.

Marks describe *what* to draw; ``facecue.overlay.render_marks`` turns them
into pixels. Coordinates are normalized to [0, 1]; colors are BGR.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class BBoxMark:
    """Bounding box."""

    x: float
    y: float
    w: float
    h: float
    label: str = ""
    color: tuple[int, int, int] = (0, 255, 0)
    thickness: int = 3
    confidence: float = 1.0


@dataclass(frozen=True)
class PointMark:
    """Filled dot with a radius in pixels."""

    x: float
    y: float
    radius: int = 4
    color: tuple[int, int, int] = (0, 0, 255)


@dataclass(frozen=True)
class LineMark:
    """Straight segment from (x1, y1) to (x2, y2)."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: tuple[int, int, int] = (255, 255, 0)
    thickness: int = 2


@dataclass(frozen=True)
class LabelMark:
    """Text label anchored at its bottom-left corner."""

    text: str
    x: float
    y: float
    color: tuple[int, int, int] = (255, 255, 255)
    font_scale: float = 0.45


Mark = Union[BBoxMark, PointMark, LineMark, LabelMark]

__all__ = ["Mark", "BBoxMark", "PointMark", "LineMark", "LabelMark"]
