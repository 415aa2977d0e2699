"""Frame scheduler: drives the analyzer at a fixed cadence.

One scheduling attempt (``run_once``) reads the current frame, runs the
analyzer, smooths the result against the session state and hands it to
the registered consumers. Attempts are single-flight: the gate is a
non-blocking lock, so an attempt that finds another pass in flight
returns immediately and asks to be retried after ``busy_retry_sec``.

Failure containment:
- Source not ready (``read()`` returns None): skipped, retried at the
  normal interval.
- Any exception from reading or analysing a frame: logged, counted,
  and the frame emits nothing. The loop keeps running.
- Consumer exceptions: logged per consumer.

Example:
    >>> slot = FrameSlot()
    >>> with FrameScheduler(slot, on_result=print) as scheduler:
    ...     slot.put(frame)
    ...     time.sleep(1.0)
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from facecue.analyzer import FaceCueAnalyzer
from facecue.config import TrackerConfig
from facecue.smoothing import SmoothingState, smooth
from facecue.source import FrameSource
from facecue.stats import SchedulerStats
from facecue.types import DetectionResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[DetectionResult], None]


class FrameScheduler:
    """Single-flight, fixed-cadence driver for one tracking session.

    Args:
        source: Frame source polled once per attempt.
        analyzer: Per-frame analyzer. Defaults to a FaceCueAnalyzer built
            from ``config``.
        config: Tracker configuration.
        on_result: Optional first consumer.
    """

    def __init__(
        self,
        source: FrameSource,
        analyzer: Optional[FaceCueAnalyzer] = None,
        *,
        config: Optional[TrackerConfig] = None,
        on_result: Optional[ResultCallback] = None,
    ):
        self._config = config or TrackerConfig()
        self._source = source
        self._analyzer = analyzer or FaceCueAnalyzer(
            scan=self._config.scan, pose=self._config.pose,
        )
        self._consumers: List[ResultCallback] = []
        if on_result is not None:
            self._consumers.append(on_result)

        # Single-flight gate: held for the whole of a pipeline pass.
        self._gate = threading.Lock()
        # Guards session state, the consumer list and result delivery.
        self._state_lock = threading.RLock()
        self._state = SmoothingState()
        self._session = 0

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.stats = SchedulerStats()

    # --- Properties ------------------------------------------------------

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def analyzer(self) -> FaceCueAnalyzer:
        return self._analyzer

    @property
    def state(self) -> SmoothingState:
        """Current smoothing state of the session."""
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop_event.is_set()
        )

    # --- Consumers -------------------------------------------------------

    def add_consumer(self, callback: ResultCallback) -> None:
        """Register a callback receiving every emitted DetectionResult."""
        with self._state_lock:
            self._consumers.append(callback)

    def remove_consumer(self, callback: ResultCallback) -> None:
        with self._state_lock:
            if callback in self._consumers:
                self._consumers.remove(callback)

    # --- Scheduling ------------------------------------------------------

    def run_once(self) -> float:
        """Make one scheduling attempt.

        Safe to call from any thread. Never raises for per-frame failures.

        Returns:
            Seconds to wait before the next attempt.
        """
        cadence = self._config.scheduler
        if not self._gate.acquire(blocking=False):
            self.stats.record_busy()
            logger.debug("Previous frame still in flight, retrying later")
            return cadence.busy_retry_sec
        try:
            self._run_pass()
        finally:
            self._gate.release()
        return cadence.interval_sec

    def _run_pass(self) -> None:
        if self._stop_event.is_set():
            return

        with self._state_lock:
            session = self._session
            state = self._state

        start_ns = time.perf_counter_ns()
        try:
            frame = self._source.read()
            if frame is None or frame.is_empty:
                self.stats.record_not_ready()
                logger.debug("Frame source not ready, skipping")
                return
            raw = self._analyzer.process(frame)
            result, next_state = smooth(raw, state, self._config.smoothing)
        except Exception:
            self.stats.record_failure()
            logger.warning("Frame analysis failed, frame dropped", exc_info=True)
            return

        elapsed_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        self.stats.record_pass(
            elapsed_ms,
            getattr(self._analyzer, "last_timing", None),
            detected=result.detected,
        )

        with self._state_lock:
            # torn down or reset while this pass was running
            if self._stop_event.is_set() or session != self._session:
                return
            self._state = next_state
            self._emit(result)

    def _emit(self, result: DetectionResult) -> None:
        self.stats.record_emitted()
        for callback in list(self._consumers):
            # a consumer may have stopped the session
            if self._stop_event.is_set():
                break
            try:
                callback(result)
            except Exception:
                logger.warning("Result consumer %r raised", callback, exc_info=True)

    def _loop(self, stop_event: threading.Event) -> None:
        logger.info("Frame scheduler started")
        delay = 0.0
        while not stop_event.wait(delay):
            delay = self.run_once()
        logger.info("Frame scheduler stopped")

    # --- Lifecycle -------------------------------------------------------

    def start(self) -> None:
        """Start the recurring loop on a daemon thread."""
        if self.is_running:
            return
        previous = self._thread
        if previous is not None and previous.is_alive():
            logger.warning("Previous scheduler thread still finishing a pass")
        # each run owns its stop event
        self._stop_event = threading.Event()
        self.reset_session()
        self._thread = threading.Thread(
            target=self._loop,
            args=(self._stop_event,),
            name="facecue-scheduler",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Halt the loop and discard the session state.

        No result is delivered once this has been called. May be called
        from a consumer callback running on the scheduler thread.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Frame scheduler thread did not stop within %ss", timeout)
        with self._state_lock:
            self._state = SmoothingState()
            self._session += 1

    def reset_session(self) -> None:
        """Discard smoothing state, e.g. after the stream is re-acquired."""
        with self._state_lock:
            self._state = SmoothingState()
            self._session += 1
        logger.info("Tracking session reset")

    def __enter__(self) -> "FrameScheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


__all__ = ["FrameScheduler", "ResultCallback"]
