"""Frame container for RGBA pixel buffers handed over by a frame source."""

from dataclasses import dataclass
from typing import Union

import cv2
import numpy as np

from facecue.errors import FrameShapeError

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]


@dataclass
class Frame:
    """A captured frame.

    Attributes:
        data: RGBA image as a uint8 array of shape (height, width, 4).
        width: Frame width in pixels.
        height: Frame height in pixels.
        frame_id: Source frame counter.
        t_src_ns: Capture timestamp in nanoseconds (source timeline).
    """

    data: np.ndarray
    width: int
    height: int
    frame_id: int = 0
    t_src_ns: int = 0

    @classmethod
    def from_buffer(
        cls,
        buffer: BufferLike,
        width: int,
        height: int,
        frame_id: int = 0,
        t_src_ns: int = 0,
    ) -> "Frame":
        """Wrap a flat RGBA byte buffer without copying.

        Raises:
            FrameShapeError: If the buffer length is not ``width * height * 4``.
        """
        if isinstance(buffer, np.ndarray):
            flat = np.asarray(buffer, dtype=np.uint8).reshape(-1)
        else:
            flat = np.frombuffer(buffer, dtype=np.uint8)
        expected = width * height * 4
        if width <= 0 or height <= 0 or flat.size != expected:
            raise FrameShapeError(max(expected, 0), int(flat.size))
        return cls(
            data=flat.reshape(height, width, 4),
            width=width,
            height=height,
            frame_id=frame_id,
            t_src_ns=t_src_ns,
        )

    @classmethod
    def from_bgr(
        cls,
        image: np.ndarray,
        frame_id: int = 0,
        t_src_ns: int = 0,
    ) -> "Frame":
        """Convert an OpenCV BGR capture (H, W, 3) to an RGBA frame."""
        rgba = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
        h, w = rgba.shape[:2]
        return cls(data=rgba, width=w, height=h, frame_id=frame_id, t_src_ns=t_src_ns)

    def to_bgr(self) -> np.ndarray:
        """BGR copy of the frame for drawing and display."""
        return cv2.cvtColor(self.data, cv2.COLOR_RGBA2BGR)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


__all__ = ["Frame"]
