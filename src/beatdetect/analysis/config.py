from dataclasses import dataclass, field, fields, replace
from enum import IntEnum
from typing import Any, ClassVar, Dict, Mapping, Union
import logging

from ..common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BeatClass(IntEnum):
    """Frequency class a beat is reported for"""

    LOW = 0
    MID = 1
    HIGH = 2

    @classmethod
    def parse(cls, value: Union["BeatClass", int, str]) -> "BeatClass":
        """Resolve a beat class from an enum member, index or name"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ConfigurationError(f"Unknown beat class: {value}") from None
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"Unknown beat class: {value}") from None


@dataclass
class DetectionDefaults:
    """Default tuning for spectral beat detection"""

    DEFAULT_FRAME_SIZE: ClassVar[int] = 1024
    DEFAULT_BAND_COUNT: ClassVar[int] = 64
    DEFAULT_HISTORY_LENGTH: ClassVar[int] = 40  # frames
    DEFAULT_DECIBEL_CUTOFF: ClassVar[float] = 125.0
    DEFAULT_REFRACTORY_FRAMES: ClassVar[int] = 1

    # Vote-count cutoffs, a class fires when votes > cutoff // 2
    DEFAULT_LOW_CUTOFF: ClassVar[int] = 4
    DEFAULT_MID_CUTOFF: ClassVar[int] = 16
    DEFAULT_HIGH_CUTOFF: ClassVar[int] = 32

    # Percentage of the rolling average a band must exceed
    DEFAULT_LOW_THRESHOLD: ClassVar[int] = 150
    DEFAULT_MID_THRESHOLD: ClassVar[int] = 130
    DEFAULT_HIGH_THRESHOLD: ClassVar[int] = 80

    # Raw magnitudes are scaled by this before band normalization
    ENERGY_SCALE: ClassVar[float] = 10.0

    @classmethod
    def get_cutoffs(cls) -> Dict[BeatClass, int]:
        return {
            BeatClass.LOW: cls.DEFAULT_LOW_CUTOFF,
            BeatClass.MID: cls.DEFAULT_MID_CUTOFF,
            BeatClass.HIGH: cls.DEFAULT_HIGH_CUTOFF,
        }

    @classmethod
    def get_thresholds(cls) -> Dict[BeatClass, int]:
        return {
            BeatClass.LOW: cls.DEFAULT_LOW_THRESHOLD,
            BeatClass.MID: cls.DEFAULT_MID_THRESHOLD,
            BeatClass.HIGH: cls.DEFAULT_HIGH_THRESHOLD,
        }

    @classmethod
    def get_all_defaults(cls) -> Dict[str, Any]:
        """Get all default values as a dictionary"""
        return {
            name: value
            for name, value in cls.__dict__.items()
            if (
                not name.startswith("_")
                and isinstance(value, (int, float, str, bool))
                and name.startswith("DEFAULT_")
            )
        }


def _normalize_per_class(
    name: str, values: Mapping[Any, Any], defaults: Dict[BeatClass, int]
) -> Dict[BeatClass, int]:
    """Merge per-class overrides onto defaults, keyed by BeatClass"""
    merged = dict(defaults)
    for key, value in values.items():
        beat_class = BeatClass.parse(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"Invalid {name} for {beat_class.name}: {value}")
        if value < 0:
            raise ConfigurationError(
                f"{name.capitalize()} for {beat_class.name} must be non-negative, got {value}"
            )
        merged[beat_class] = value
    return merged


@dataclass
class DetectionConfig:
    """Construction-time configuration of the detection pipeline"""

    frame_size: int = DetectionDefaults.DEFAULT_FRAME_SIZE
    band_count: int = DetectionDefaults.DEFAULT_BAND_COUNT
    history_length: int = DetectionDefaults.DEFAULT_HISTORY_LENGTH
    decibel_cutoff: float = DetectionDefaults.DEFAULT_DECIBEL_CUTOFF  # reserved
    refractory_frames: int = DetectionDefaults.DEFAULT_REFRACTORY_FRAMES
    cutoff: Dict[BeatClass, int] = field(default_factory=DetectionDefaults.get_cutoffs)
    threshold: Dict[BeatClass, int] = field(
        default_factory=DetectionDefaults.get_thresholds
    )

    def __post_init__(self):
        """Validate configuration"""
        try:
            self.cutoff = _normalize_per_class(
                "cutoff", self.cutoff, DetectionDefaults.get_cutoffs()
            )
            self.threshold = _normalize_per_class(
                "threshold", self.threshold, DetectionDefaults.get_thresholds()
            )
            self.validate()
        except ConfigurationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

    def validate(self) -> None:
        """Validate detection settings"""
        if self.frame_size < 1:
            raise ConfigurationError("Frame size must be at least 1")
        if self.band_count < 1:
            raise ConfigurationError("Band count must be at least 1")
        if self.frame_size % self.band_count != 0:
            raise ConfigurationError(
                f"Band count {self.band_count} must evenly divide frame size {self.frame_size}"
            )
        if self.history_length < 1:
            raise ConfigurationError("History length must be at least 1 frame")
        if self.refractory_frames < 0:
            raise ConfigurationError("Refractory period must be non-negative")

        for beat_class in BeatClass:
            if self.cutoff[beat_class] // 2 >= self.band_count:
                logger.warning(
                    f"{beat_class.name} cutoff {self.cutoff[beat_class]} needs more than "
                    f"{self.cutoff[beat_class] // 2} votes from {self.band_count} bands; "
                    f"it will never fire"
                )

    @property
    def samples_per_band(self) -> int:
        """Number of spectrum bins folded into each band"""
        return self.frame_size // self.band_count

    @classmethod
    def create_default(cls) -> "DetectionConfig":
        """Create default configuration"""
        return cls()

    def update(self, updates: Mapping[str, Any]) -> None:
        """Update configuration with new values and revalidate"""
        known = {f.name for f in fields(self)}
        changes = {}
        for name, value in updates.items():
            if name not in known:
                raise ConfigurationError(f"Unknown configuration field: {name}")
            if name in ("cutoff", "threshold"):
                value = {**getattr(self, name), **dict(value)}
            changes[name] = value

        # Validate on a copy so a rejected update leaves this config intact
        updated = replace(self, **changes)
        for name in known:
            setattr(self, name, getattr(updated, name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary"""
        return {
            "frame_size": self.frame_size,
            "band_count": self.band_count,
            "history_length": self.history_length,
            "decibel_cutoff": self.decibel_cutoff,
            "refractory_frames": self.refractory_frames,
            "cutoff": {c.name.lower(): v for c, v in self.cutoff.items()},
            "threshold": {c.name.lower(): v for c, v in self.threshold.items()},
        }
