"""Tests for facecue.luminance."""

import numpy as np
import pytest

from facecue.errors import FrameShapeError
from facecue.frame import Frame
from facecue.luminance import to_luminance


class TestToLuminance:
    def test_channel_mean_truncates(self):
        # (10 + 20 + 31) / 3 = 20.33 -> 20, (255*3)/3 = 255
        rgba = bytes([10, 20, 31, 255, 255, 255, 255, 0])
        gray = to_luminance(rgba, 2, 1)
        assert gray.dtype == np.uint8
        assert gray.shape == (1, 2)
        assert gray.tolist() == [[20, 255]]

    def test_alpha_ignored(self):
        opaque = np.array([[[90, 120, 150, 255]]], dtype=np.uint8)
        clear = np.array([[[90, 120, 150, 0]]], dtype=np.uint8)
        assert to_luminance(opaque, 1, 1)[0, 0] == 120
        assert to_luminance(clear, 1, 1)[0, 0] == 120

    def test_no_overflow_on_bright_pixels(self):
        rgba = np.full((4, 4, 4), 250, dtype=np.uint8)
        assert (to_luminance(rgba, 4, 4) == 250).all()

    def test_idempotent(self):
        rng = np.random.default_rng(7)
        rgba = rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)
        before = rgba.copy()
        first = to_luminance(rgba, 64, 48)
        second = to_luminance(rgba, 64, 48)
        assert np.array_equal(first, second)
        assert np.array_equal(rgba, before)

    def test_flat_and_shaped_inputs_agree(self):
        rng = np.random.default_rng(3)
        rgba = rng.integers(0, 256, size=(5, 6, 4), dtype=np.uint8)
        assert np.array_equal(
            to_luminance(rgba, 6, 5),
            to_luminance(rgba.tobytes(), 6, 5),
        )

    def test_wrong_length_raises(self):
        with pytest.raises(FrameShapeError) as exc_info:
            to_luminance(bytes(10), 2, 2)
        assert exc_info.value.expected == 16
        assert exc_info.value.actual == 10

    def test_frame_shape_error_is_value_error(self):
        with pytest.raises(ValueError):
            to_luminance(bytes(0), 0, 0)


class TestFrame:
    def test_from_buffer(self):
        frame = Frame.from_buffer(bytes(range(24)), 3, 2, frame_id=4, t_src_ns=99)
        assert frame.data.shape == (2, 3, 4)
        assert frame.frame_id == 4
        assert frame.t_src_ns == 99
        assert not frame.is_empty

    def test_from_bgr_converts_channel_order(self):
        bgr = np.zeros((2, 2, 3), dtype=np.uint8)
        bgr[..., 0] = 200  # blue
        frame = Frame.from_bgr(bgr)
        assert frame.width == 2 and frame.height == 2
        assert frame.data[0, 0].tolist() == [0, 0, 200, 255]
        assert np.array_equal(frame.to_bgr(), bgr)
