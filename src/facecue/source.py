"""Frame sources consumed by the scheduler.

A source hands over the current frame on demand, or ``None`` when no
frame is ready yet. Not-ready is a normal state, not an error.
"""

import logging
import threading
import time
from typing import Optional, Protocol, Union, runtime_checkable

import cv2

from facecue.frame import Frame

logger = logging.getLogger(__name__)


@runtime_checkable
class FrameSource(Protocol):
    """Protocol for frame sources."""

    def read(self) -> Optional[Frame]:
        """Return the current frame, or None if not ready."""
        ...


class FrameSlot:
    """Thread-safe single-slot holder for the latest frame.

    A capture thread calls ``put()``; the scheduler calls ``read()``. Reads
    do not consume the frame, like a live video element that always
    exposes its current picture.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frame: Optional[Frame] = None

    def put(self, frame: Frame) -> None:
        with self._lock:
            self._frame = frame

    def read(self) -> Optional[Frame]:
        with self._lock:
            return self._frame

    def clear(self) -> None:
        """Drop the held frame so the slot reports not-ready."""
        with self._lock:
            self._frame = None


class VideoCaptureSource:
    """Frame source backed by ``cv2.VideoCapture``.

    Args:
        source: Camera index or video file path / stream URL.
        width: Requested capture width (cameras only, best effort).
        height: Requested capture height (cameras only, best effort).
    """

    def __init__(
        self,
        source: Union[int, str],
        width: Optional[int] = None,
        height: Optional[int] = None,
    ):
        self._source = source
        self._cap = cv2.VideoCapture(source)
        if width:
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        if height:
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self._frame_id = 0
        self._last_frame: Optional[Frame] = None
        self._exhausted = False
        self._lock = threading.Lock()
        if not self._cap.isOpened():
            logger.warning("Could not open video source %r", source)

    @property
    def is_opened(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    @property
    def exhausted(self) -> bool:
        """True once a file source has run out of frames or the source is closed."""
        return self._exhausted or not self.is_opened

    @property
    def last_frame(self) -> Optional[Frame]:
        """Most recent frame handed out by read()."""
        return self._last_frame

    @property
    def fps(self) -> float:
        if not self.is_opened:
            return 0.0
        return float(self._cap.get(cv2.CAP_PROP_FPS) or 0.0)

    def read(self) -> Optional[Frame]:
        with self._lock:
            if not self.is_opened:
                return None
            ok, image = self._cap.read()
            if not ok or image is None or image.size == 0:
                # cameras drop frames transiently; files just end
                if not isinstance(self._source, int):
                    self._exhausted = True
                return None
            frame = Frame.from_bgr(
                image,
                frame_id=self._frame_id,
                t_src_ns=time.monotonic_ns(),
            )
            self._frame_id += 1
            self._last_frame = frame
            return frame

    def release(self) -> None:
        with self._lock:
            if self._cap is not None:
                self._cap.release()
                self._cap = None
                logger.info("Released video source %r", self._source)


__all__ = ["FrameSource", "FrameSlot", "VideoCaptureSource"]
