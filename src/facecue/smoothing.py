"""Temporal smoothing of detection results.

A single-pole exponential smoother over the continuous pose fields
(``x_angle``, ``y_angle``, ``position``)::

    smoothed = previous * alpha + current * (1 - alpha)

Non-detections pass through untouched and leave the state alone, so a
face that reappears is blended against the last known pose. Set
``SmoothingConfig.stale_after_sec`` to bound how old that pose may be.

The state is an explicit value: ``smooth()`` takes a ``SmoothingState``
and returns the next one. ``TemporalSmoother`` wraps that for callers
that want a stateful object.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from facecue.config import SmoothingConfig
from facecue.types import DetectionResult, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmoothingState:
    """Per-session smoothing state.

    Attributes:
        previous: Last positive (smoothed) detection, if any.
        history: Most recent smoothed detections, oldest first. Kept for
            downstream multi-frame analysis; not read by the blend.
    """

    previous: Optional[DetectionResult] = None
    history: Tuple[DetectionResult, ...] = ()


def _blend(previous: float, current: float, alpha: float) -> float:
    return previous * alpha + current * (1 - alpha)


def smooth(
    result: DetectionResult,
    state: SmoothingState,
    config: Optional[SmoothingConfig] = None,
) -> Tuple[DetectionResult, SmoothingState]:
    """Blend a result with the session's previous detection.

    Args:
        result: Raw result for the current frame.
        state: Current session state.
        config: Blend factor, history bound and staleness window.

    Returns:
        (smoothed result, next state). For ``detected=False`` the result
        and the state are returned unchanged.
    """
    if not result.detected:
        return result, state

    config = config or SmoothingConfig()
    previous = state.previous

    stale_ns = config.stale_after_ns
    if previous is not None and stale_ns is not None:
        gap_ns = result.t_ns - previous.t_ns
        if gap_ns > stale_ns:
            logger.debug(
                "Previous detection is %.3fs old, restarting unsmoothed",
                gap_ns / 1e9,
            )
            previous = None

    smoothed = result
    if previous is not None and previous.detected:
        a = config.alpha
        smoothed = replace(
            result,
            x_angle=_blend(previous.x_angle, result.x_angle, a),
            y_angle=_blend(previous.y_angle, result.y_angle, a),
            position=Point(
                _blend(previous.position.x, result.position.x, a),
                _blend(previous.position.y, result.position.y, a),
            ),
        )

    history = (state.history + (smoothed,))[-config.history_size:]
    return smoothed, SmoothingState(previous=smoothed, history=history)


class TemporalSmoother:
    """Stateful wrapper around ``smooth()`` for one tracking session.

    Args:
        config: Smoothing settings.
    """

    def __init__(self, config: Optional[SmoothingConfig] = None) -> None:
        self._config = config or SmoothingConfig()
        self._state = SmoothingState()

    @property
    def state(self) -> SmoothingState:
        return self._state

    def update(self, result: DetectionResult) -> DetectionResult:
        """Smooth a result and advance the session state."""
        smoothed, self._state = smooth(result, self._state, self._config)
        return smoothed

    def reset(self) -> None:
        """Discard the session state."""
        self._state = SmoothingState()


__all__ = ["SmoothingState", "smooth", "TemporalSmoother"]
