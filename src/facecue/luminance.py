"""Grayscale reduction of RGBA frames."""

import numpy as np

from facecue.frame import BufferLike, Frame


def to_luminance(rgba: BufferLike, width: int, height: int) -> np.ndarray:
    """Convert an RGBA buffer to a single-channel luminance buffer.

    Each sample is the integer mean ``(R + G + B) // 3``; alpha is ignored.
    The input is never modified, so repeated calls on the same buffer give
    bit-identical output.

    Args:
        rgba: Flat RGBA bytes or a uint8 array of shape (height, width, 4).
        width: Frame width in pixels.
        height: Frame height in pixels.

    Returns:
        uint8 array of shape (height, width).

    Raises:
        FrameShapeError: If the buffer length is not ``width * height * 4``.
    """
    pixels = Frame.from_buffer(rgba, width, height).data
    total = (
        pixels[..., 0].astype(np.uint16)
        + pixels[..., 1]
        + pixels[..., 2]
    )
    return (total // 3).astype(np.uint8)


__all__ = ["to_luminance"]
