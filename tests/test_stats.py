"""Tests for facecue.stats."""

import threading

import pytest

from facecue.stats import SchedulerStats


class TestSchedulerStats:
    def test_initial_state(self):
        stats = SchedulerStats()
        assert stats.frames_processed == 0
        assert stats.detection_rate == 0.0

    def test_record_pass(self):
        stats = SchedulerStats()
        stats.record_pass(10.0, {"scan": 8.0}, detected=True)
        stats.record_pass(20.0, {"scan": 18.0}, detected=False)
        assert stats.frames_processed == 2
        assert stats.frames_detected == 1
        assert stats.detection_rate == 0.5
        # first sample seeds the EMA, then alpha=0.3
        assert stats.pass_time_ms == pytest.approx(13.0)
        assert stats.step_time_ms["scan"] == pytest.approx(11.0)

    def test_counters(self):
        stats = SchedulerStats()
        stats.record_failure()
        stats.record_not_ready()
        stats.record_busy()
        stats.record_busy()
        stats.record_emitted()
        snapshot = stats.to_dict()
        assert snapshot["frames_failed"] == 1
        assert snapshot["frames_not_ready"] == 1
        assert snapshot["busy_skips"] == 2
        assert snapshot["results_emitted"] == 1

    def test_reset(self):
        stats = SchedulerStats()
        stats.record_pass(5.0, {"scan": 1.0}, detected=True)
        stats.record_failure()
        stats.reset()
        assert stats.to_dict() == SchedulerStats().to_dict()

    def test_thread_safety(self):
        stats = SchedulerStats()

        def work():
            for _ in range(1000):
                stats.record_pass(1.0, detected=True)
                stats.record_busy()

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert stats.frames_processed == 4000
        assert stats.busy_skips == 4000
