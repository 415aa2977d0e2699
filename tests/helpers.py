"""Shared test helpers for facecue tests."""

from pathlib import Path

import cv2
import numpy as np

from facecue.frame import Frame
from facecue.types import CandidateRegion


def gray_to_rgba(gray: np.ndarray) -> np.ndarray:
    """Stack a (H, W) luminance image into an opaque (H, W, 4) RGBA array."""
    gray = gray.astype(np.uint8)
    alpha = np.full_like(gray, 255)
    return np.stack([gray, gray, gray, alpha], axis=-1)


def checkerboard(height: int, width: int, low: int = 110, high: int = 170) -> np.ndarray:
    """Checkerboard patch; with 110/170 the mean is 140 and variance 900."""
    yy, xx = np.indices((height, width))
    return np.where((yy + xx) % 2 == 0, low, high).astype(np.uint8)


def face_gray(
    width: int = 300,
    height: int = 360,
    center: tuple = (150, 180),
    size: tuple = (100, 120),
    background: int = 0,
) -> np.ndarray:
    """Luminance image with one face-like patch on a flat background.

    With the default 300x360 frame the candidate window is exactly
    100x120, so a probe centred on the patch sees only the patch.
    """
    gray = np.full((height, width), background, dtype=np.uint8)
    pw, ph = size
    x0 = center[0] - pw // 2
    y0 = center[1] - ph // 2
    gray[y0:y0 + ph, x0:x0 + pw] = checkerboard(ph, pw)
    return gray


def face_frame(frame_id: int = 0, t_ns: int = 0, **kwargs) -> Frame:
    """RGBA Frame built from ``face_gray``."""
    gray = face_gray(**kwargs)
    h, w = gray.shape
    return Frame(
        data=gray_to_rgba(gray), width=w, height=h,
        frame_id=frame_id, t_src_ns=t_ns,
    )


def uniform_frame(value: int, width: int = 640, height: int = 480, frame_id: int = 0) -> Frame:
    """Frame with every pixel set to ``value``."""
    gray = np.full((height, width), value, dtype=np.uint8)
    return Frame(data=gray_to_rgba(gray), width=width, height=height, frame_id=frame_id)


def make_region(
    center_x: int = 320,
    center_y: int = 240,
    width: float = 120.0,
    height: float = 150.0,
    confidence: float = 0.8,
    mean_brightness: float = 140.0,
    variance: float = 900.0,
) -> CandidateRegion:
    """CandidateRegion with ``area`` derived from width and height."""
    return CandidateRegion(
        center_x=center_x,
        center_y=center_y,
        width=width,
        height=height,
        area=width * height,
        confidence=confidence,
        mean_brightness=mean_brightness,
        variance=variance,
    )


def create_test_video(path: Path, num_frames: int = 10, fps: int = 30) -> None:
    """Write a small video with a face-like patch in the middle.

    Args:
        path: Output path for the video file.
        num_frames: Number of frames to generate.
        fps: Frame rate of the video.
    """
    gray = face_gray()
    height, width = gray.shape
    image = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(str(path), fourcc, fps, (width, height))
    for _ in range(num_frames):
        writer.write(image)
    writer.release()
