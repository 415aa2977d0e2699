"""Configuration classes for the facecue tracker.

Every threshold of the detection heuristic is a field here so the
pipeline can be tuned without touching code.

Example:
    >>> from facecue.config import TrackerConfig
    >>>
    >>> config = TrackerConfig.from_dict({
    ...     "scan": {"min_confidence": 0.3},
    ...     "smoothing": {"stale_after_sec": 1.0},
    ... })
    >>> config.smoothing.alpha
    0.7
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional, Type, TypeVar

T = TypeVar("T")


def _build(cls: Type[T], data: Optional[Dict[str, Any]], section: str) -> T:
    """Instantiate a config dataclass from a (possibly partial) dict."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"Config section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    for key in data:
        if key not in known:
            raise ValueError(f"Unknown config key '{section}.{key}'")
    return cls(**data)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_types(config: Any, section: str) -> None:
    """Raise ValueError for fields whose value does not match the annotation.

    int fields must hold real ints (no floats, no bools); float fields
    accept ints too.
    """
    for f in fields(config):
        value = getattr(config, f.name)
        if f.type is int:
            ok = isinstance(value, int) and not isinstance(value, bool)
            expected = "an integer"
        elif f.type is float:
            ok = _is_number(value)
            expected = "a number"
        elif f.type == Optional[float]:
            ok = value is None or _is_number(value)
            expected = "a number or null"
        else:
            continue
        if not ok:
            raise ValueError(f"{section}.{f.name} must be {expected}, got {value!r}")


@dataclass
class ScanConfig:
    """Region scanner settings.

    Attributes:
        stride: Distance between probe points in both axes.
        margin: Probes start this far from the top/left edge and stop this
            far before the bottom/right edge.
        max_window_width: Upper bound on window width (also capped at W/3).
        max_window_height: Upper bound on window height (also capped at H/3).
        min_mean, max_mean: Exclusive bounds on window mean luminance.
        min_variance, max_variance: Exclusive bounds on window variance.
        min_window_width, min_window_height: Windows must be strictly larger.
        dedup_radius: Half-size of the neighbourhood marked visited around an
            accepted probe.
        dedup_step: Step of the visited-neighbourhood grid.
        min_confidence: Accepted windows must score strictly above this.
    """

    stride: int = 10
    margin: int = 20
    max_window_width: float = 120.0
    max_window_height: float = 150.0
    min_mean: float = 80.0
    max_mean: float = 200.0
    min_variance: float = 400.0
    max_variance: float = 3000.0
    min_window_width: float = 40.0
    min_window_height: float = 50.0
    dedup_radius: int = 20
    dedup_step: int = 5
    min_confidence: float = 0.0

    def __post_init__(self) -> None:
        _check_types(self, "scan")
        if self.stride < 1:
            raise ValueError(f"scan.stride must be >= 1, got {self.stride}")
        if self.dedup_step < 1:
            raise ValueError(f"scan.dedup_step must be >= 1, got {self.dedup_step}")
        if self.margin < 0 or self.dedup_radius < 0:
            raise ValueError("scan.margin and scan.dedup_radius must be >= 0")


@dataclass
class PoseConfig:
    """Pose and expression estimator settings."""

    yaw_gain: float = 30.0
    yaw_limit: float = 45.0
    pitch_gain: float = 25.0
    pitch_limit: float = 30.0
    mouth_min_variance: float = 1200.0
    mouth_min_aspect: float = 1.4
    eye_min_brightness: float = 90.0
    eye_min_variance: float = 500.0

    def __post_init__(self) -> None:
        _check_types(self, "pose")
        if self.yaw_limit < 0 or self.pitch_limit < 0:
            raise ValueError("pose limits must be >= 0")


@dataclass
class SmoothingConfig:
    """Temporal smoothing settings.

    Attributes:
        alpha: Weight of the previous value in the blend, in [0, 1).
        history_size: Maximum number of results kept in the history log.
        stale_after_sec: Drop the previous detection if it is older than
            this when a new detection arrives. None keeps it indefinitely.
    """

    alpha: float = 0.7
    history_size: int = 3
    stale_after_sec: Optional[float] = None

    def __post_init__(self) -> None:
        _check_types(self, "smoothing")
        if not 0.0 <= self.alpha < 1.0:
            raise ValueError(f"smoothing.alpha must be in [0, 1), got {self.alpha}")
        if self.history_size < 1:
            raise ValueError(
                f"smoothing.history_size must be >= 1, got {self.history_size}"
            )
        if self.stale_after_sec is not None and self.stale_after_sec <= 0:
            raise ValueError("smoothing.stale_after_sec must be > 0 or None")

    @property
    def stale_after_ns(self) -> Optional[int]:
        if self.stale_after_sec is None:
            return None
        return int(self.stale_after_sec * 1_000_000_000)


@dataclass
class SchedulerConfig:
    """Frame scheduler cadence.

    Attributes:
        interval_sec: Delay between runs when idle (~30 Hz).
        busy_retry_sec: Delay before retrying when a run is still in flight.
    """

    interval_sec: float = 0.033
    busy_retry_sec: float = 0.05

    def __post_init__(self) -> None:
        _check_types(self, "scheduler")
        if self.interval_sec <= 0 or self.busy_retry_sec <= 0:
            raise ValueError("scheduler intervals must be > 0")


@dataclass
class TrackerConfig:
    """Complete configuration for a tracking session."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    pose: PoseConfig = field(default_factory=PoseConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TrackerConfig":
        """Create a TrackerConfig from a dictionary (e.g. loaded from YAML).

        Missing sections and keys fall back to defaults.

        Raises:
            ValueError: On unknown sections/keys or invalid values.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("Config must be a mapping of sections")
        sections = {f.name for f in fields(cls)}
        for key in data:
            if key not in sections:
                raise ValueError(f"Unknown config section '{key}'")
        return cls(
            scan=_build(ScanConfig, data.get("scan"), "scan"),
            pose=_build(PoseConfig, data.get("pose"), "pose"),
            smoothing=_build(SmoothingConfig, data.get("smoothing"), "smoothing"),
            scheduler=_build(SchedulerConfig, data.get("scheduler"), "scheduler"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "TrackerConfig":
        """Load a TrackerConfig from a YAML file.

        Raises:
            ImportError: If PyYAML is not installed.
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is not valid YAML or holds an invalid config.
        """
        try:
            import yaml
        except ImportError:
            raise ImportError(
                "PyYAML is required for YAML config support. "
                "Install it with: pip install pyyaml"
            )

        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


__all__ = [
    "ScanConfig",
    "PoseConfig",
    "SmoothingConfig",
    "SchedulerConfig",
    "TrackerConfig",
]
