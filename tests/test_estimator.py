"""Tests for facecue.estimator."""

import pytest

from facecue.config import PoseConfig
from facecue.estimator import estimate_pose
from facecue.types import DetectionResult, EyeState, Point
from helpers import make_region

W, H = 640, 480


class TestAngles:
    def test_centered_face_is_level(self):
        result = estimate_pose(make_region(center_x=320, center_y=240), W, H)
        assert result.detected
        assert result.y_angle == 0.0
        assert result.x_angle == 0.0
        assert result.position == Point(0.0, 0.0)

    def test_horizontal_offset_drives_yaw(self):
        result = estimate_pose(make_region(center_x=480, center_y=240), W, H)
        assert result.y_angle == pytest.approx(15.0)
        assert result.x_angle == pytest.approx(0.0)

    def test_vertical_offset_drives_pitch(self):
        result = estimate_pose(make_region(center_x=320, center_y=360), W, H)
        assert result.x_angle == pytest.approx(12.5)
        assert result.y_angle == pytest.approx(0.0)

    def test_top_left_corner(self):
        result = estimate_pose(make_region(center_x=20, center_y=20), W, H)
        assert result.y_angle == pytest.approx(-300 / 320 * 30)
        assert result.x_angle == pytest.approx(-220 / 240 * 25)
        assert result.position == Point(-300.0, -220.0)

    @pytest.mark.parametrize(
        "center, expected",
        [
            ((5000, 240), (0.0, 45.0)),
            ((-5000, 240), (0.0, -45.0)),
            ((320, 5000), (30.0, 0.0)),
            ((320, -5000), (-30.0, 0.0)),
        ],
    )
    def test_angles_are_clamped(self, center, expected):
        result = estimate_pose(make_region(center_x=center[0], center_y=center[1]), W, H)
        assert (result.x_angle, result.y_angle) == pytest.approx(expected)

    def test_custom_gains(self):
        config = PoseConfig(yaw_gain=60.0, yaw_limit=10.0)
        result = estimate_pose(make_region(center_x=480), W, H, config)
        assert result.y_angle == 10.0


class TestExpression:
    def test_mouth_open_needs_variance_and_tall_window(self):
        region = make_region(width=100, height=150, variance=1500)
        assert estimate_pose(region, W, H).mouth_open

    def test_mouth_closed_for_wide_window(self):
        region = make_region(width=100, height=120, variance=1500)
        assert not estimate_pose(region, W, H).mouth_open

    def test_mouth_closed_for_low_variance(self):
        region = make_region(width=100, height=150, variance=1000)
        assert not estimate_pose(region, W, H).mouth_open

    def test_eyes_open(self):
        region = make_region(mean_brightness=100, variance=600)
        assert estimate_pose(region, W, H).eyes_open == EyeState(True, True)

    @pytest.mark.parametrize("brightness, variance", [(85, 600), (100, 450)])
    def test_eyes_closed(self, brightness, variance):
        region = make_region(mean_brightness=brightness, variance=variance)
        assert estimate_pose(region, W, H).eyes_open == EyeState(False, False)


class TestResultFields:
    def test_copies_region_statistics(self):
        region = make_region(
            center_x=200, center_y=100, width=120, height=150,
            confidence=0.6, mean_brightness=130, variance=800,
        )
        result = estimate_pose(region, W, H, frame_id=7, t_ns=1234)
        assert result.confidence == 0.6
        assert result.brightness == 130
        assert result.variance == 800
        assert result.face_size == 150
        assert result.face_center == Point(200.0, 100.0)
        assert result.frame_id == 7
        assert result.t_ns == 1234

    def test_signals(self):
        result = estimate_pose(make_region(center_x=480), W, H)
        signals = result.signals
        assert signals["detected"] is True
        assert signals["yaw"] == pytest.approx(15.0)
        assert signals["offset_x"] == 160.0
        assert signals["eyes_open"] is True

    def test_empty_result_signals(self):
        empty = DetectionResult.empty(frame_id=2, t_ns=5)
        assert empty.signals == {"detected": False}
        assert empty.to_dict()["frame_id"] == 2
        assert empty.to_dict()["position"] == {"x": 0.0, "y": 0.0}

    def test_empty_result_reports_no_open_cues(self):
        data = DetectionResult.empty().to_dict()
        assert data["eyes_open"] == {"left": False, "right": False}
        assert data["mouth_open"] is False
