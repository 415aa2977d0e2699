"""Sliding-window face candidate search over a luminance buffer.

Probe points lie on a regular grid. Each probe proposes a fixed-size
window centred on it; the window is accepted when its brightness and
contrast look like skin with facial features:

    min_mean < mean < max_mean  and  min_variance < variance < max_variance

Window statistics come from summed-area tables, so every probe costs
O(1) after an O(W*H) setup. Sums of integer samples are exact in float64
at any practical frame size, which keeps the result independent of
evaluation order.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from facecue.config import ScanConfig
from facecue.types import CandidateRegion

logger = logging.getLogger(__name__)


def probe_grid(
    width: int, height: int, config: Optional[ScanConfig] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Probe coordinates along each axis.

    Returns:
        (xs, ys) int arrays. Either may be empty for small frames.
    """
    config = config or ScanConfig()
    xs = np.arange(config.margin, width - config.margin, config.stride, dtype=np.int64)
    ys = np.arange(config.margin, height - config.margin, config.stride, dtype=np.int64)
    return xs, ys


def window_size(
    width: int, height: int, config: Optional[ScanConfig] = None
) -> Tuple[float, float]:
    """Nominal candidate window size for a frame: min(120, W/3) x min(150, H/3)."""
    config = config or ScanConfig()
    return (
        min(config.max_window_width, width / 3),
        min(config.max_window_height, height / 3),
    )


def _summed_area(gray: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Zero-padded summed-area tables of values and squared values."""
    values = gray.astype(np.float64)
    h, w = values.shape
    sums = np.zeros((h + 1, w + 1), dtype=np.float64)
    squares = np.zeros((h + 1, w + 1), dtype=np.float64)
    sums[1:, 1:] = values.cumsum(axis=0).cumsum(axis=1)
    squares[1:, 1:] = (values * values).cumsum(axis=0).cumsum(axis=1)
    return sums, squares


def _pixel_span(
    centers: np.ndarray, size: float, limit: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Integer pixel range [start, stop) covered by windows clipped to [0, limit)."""
    lo = np.maximum(0.0, centers - size / 2)
    hi = np.minimum(float(limit), centers + size / 2)
    return np.ceil(lo).astype(np.int64), np.ceil(hi).astype(np.int64)


def window_stats(
    gray: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    win_w: float,
    win_h: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Mean and population variance of every probe window.

    Args:
        gray: Luminance buffer of shape (H, W).
        xs: Probe x coordinates.
        ys: Probe y coordinates.
        win_w: Nominal window width.
        win_h: Nominal window height.

    Returns:
        (mean, variance) arrays of shape (len(ys), len(xs)).
    """
    h, w = gray.shape
    sums, squares = _summed_area(gray)
    c1, c2 = _pixel_span(xs.astype(np.float64), win_w, w)
    r1, r2 = _pixel_span(ys.astype(np.float64), win_h, h)

    def box(table: np.ndarray) -> np.ndarray:
        return (
            table[r2[:, None], c2[None, :]]
            - table[r1[:, None], c2[None, :]]
            - table[r2[:, None], c1[None, :]]
            + table[r1[:, None], c1[None, :]]
        )

    counts = (r2 - r1)[:, None] * (c2 - c1)[None, :]
    counts = np.maximum(counts, 1).astype(np.float64)
    mean = box(sums) / counts
    variance = np.maximum(box(squares) / counts - mean * mean, 0.0)
    return mean, variance


def _grid_offsets(config: ScanConfig) -> np.ndarray:
    """Probe-index offsets covered by the visited neighbourhood.

    The neighbourhood is the pixel lattice ``-r, -r + step, ..., r`` in each
    axis. Probes sit ``stride`` apart, so an index offset ``j`` is covered
    when ``j * stride`` lies on that lattice.
    """
    reach = config.dedup_radius // config.stride
    j = np.arange(-reach, reach + 1)
    return j[(j * config.stride + config.dedup_radius) % config.dedup_step == 0]


def scan_regions(
    gray: np.ndarray, config: Optional[ScanConfig] = None
) -> List[CandidateRegion]:
    """Collect candidate face windows from a luminance buffer.

    Probes are visited row-major. Once a probe yields an accepted window,
    the probe points in a (2r+1) x (2r+1) neighbourhood around it (on a
    ``dedup_step`` grid) are marked visited and skipped.

    Args:
        gray: uint8 luminance buffer of shape (H, W).
        config: Scanner thresholds.

    Returns:
        Accepted regions in discovery order. Empty when nothing passes,
        including frames too small to hold a single probe.
    """
    config = config or ScanConfig()
    height, width = gray.shape[:2]
    xs, ys = probe_grid(width, height, config)
    if xs.size == 0 or ys.size == 0:
        return []

    win_w, win_h = window_size(width, height, config)
    if not (win_w > config.min_window_width and win_h > config.min_window_height):
        return []

    mean, variance = window_stats(gray, xs, ys, win_w, win_h)
    confidence = np.minimum(1.0, (variance / 1000.0) * (mean / 150.0))
    accepted = (
        (mean > config.min_mean)
        & (mean < config.max_mean)
        & (variance > config.min_variance)
        & (variance < config.max_variance)
        & (confidence > config.min_confidence)
    )

    offsets = _grid_offsets(config)
    n_rows, n_cols = accepted.shape
    visited = np.zeros(accepted.shape, dtype=bool)
    regions: List[CandidateRegion] = []

    # argwhere yields indices in row-major order
    for iy, ix in np.argwhere(accepted):
        if visited[iy, ix]:
            continue
        cx, cy = int(xs[ix]), int(ys[iy])
        regions.append(CandidateRegion(
            center_x=cx,
            center_y=cy,
            width=win_w,
            height=win_h,
            area=win_w * win_h,
            confidence=float(confidence[iy, ix]),
            mean_brightness=float(mean[iy, ix]),
            variance=float(variance[iy, ix]),
        ))
        rows = iy + offsets
        cols = ix + offsets
        rows = rows[(rows >= 0) & (rows < n_rows)]
        cols = cols[(cols >= 0) & (cols < n_cols)]
        visited[np.ix_(rows, cols)] = True

    logger.debug(
        "Scanned %dx%d probes, %d accepted windows, %d candidates",
        xs.size, ys.size, int(accepted.sum()), len(regions),
    )
    return regions


__all__ = ["probe_grid", "window_size", "window_stats", "scan_regions"]
