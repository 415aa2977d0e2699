"""Statistics for the frame scheduler.

SchedulerStats provides thread-safe counters and EMA timings. Mutation
methods may be called from the scheduler thread while readers poll from
elsewhere.

Example:
    >>> stats = SchedulerStats()
    >>> stats.record_pass(12.5, {"scan": 9.1}, detected=True)
    >>> stats.frames_detected
    1
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class SchedulerStats:
    """Thread-safe statistics for one tracking session."""

    frames_processed: int = 0
    frames_detected: int = 0
    frames_failed: int = 0
    frames_not_ready: int = 0
    busy_skips: int = 0
    results_emitted: int = 0

    # EMA of the whole pass and of each stage (milliseconds)
    pass_time_ms: float = 0.0
    step_time_ms: Dict[str, float] = field(default_factory=dict)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _ema_alpha: float = field(default=0.3, repr=False)

    def _ema(self, prev: Optional[float], value: float) -> float:
        if prev is None:
            return value
        return self._ema_alpha * value + (1 - self._ema_alpha) * prev

    def record_pass(
        self,
        elapsed_ms: float,
        step_timings: Optional[Dict[str, float]] = None,
        detected: bool = False,
    ) -> None:
        """Record a completed pipeline pass."""
        with self._lock:
            first = self.frames_processed == 0
            self.frames_processed += 1
            if detected:
                self.frames_detected += 1
            self.pass_time_ms = self._ema(None if first else self.pass_time_ms, elapsed_ms)
            for name, ms in (step_timings or {}).items():
                self.step_time_ms[name] = self._ema(self.step_time_ms.get(name), ms)

    def record_failure(self) -> None:
        with self._lock:
            self.frames_failed += 1

    def record_not_ready(self) -> None:
        with self._lock:
            self.frames_not_ready += 1

    def record_busy(self) -> None:
        with self._lock:
            self.busy_skips += 1

    def record_emitted(self) -> None:
        with self._lock:
            self.results_emitted += 1

    @property
    def detection_rate(self) -> float:
        """Fraction of processed frames with a detection."""
        with self._lock:
            if self.frames_processed == 0:
                return 0.0
            return self.frames_detected / self.frames_processed

    def reset(self) -> None:
        """Reset all counters and timings."""
        with self._lock:
            self.frames_processed = 0
            self.frames_detected = 0
            self.frames_failed = 0
            self.frames_not_ready = 0
            self.busy_skips = 0
            self.results_emitted = 0
            self.pass_time_ms = 0.0
            self.step_time_ms.clear()

    def to_dict(self) -> Dict[str, object]:
        """Snapshot of the counters."""
        with self._lock:
            return {
                "frames_processed": self.frames_processed,
                "frames_detected": self.frames_detected,
                "frames_failed": self.frames_failed,
                "frames_not_ready": self.frames_not_ready,
                "busy_skips": self.busy_skips,
                "results_emitted": self.results_emitted,
                "pass_time_ms": round(self.pass_time_ms, 3),
                "step_time_ms": {k: round(v, 3) for k, v in self.step_time_ms.items()},
            }


__all__ = ["SchedulerStats"]
