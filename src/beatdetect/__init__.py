"""Spectral beat detection across low, mid and high frequency classes"""

from .analysis import (
    BandEnergyHistory,
    BeatClass,
    DetectionConfig,
    DetectionDefaults,
    DetectionSettings,
    FFTMagnitudeTransform,
    load_settings,
)
from .buffer import RollingStatsWindow
from .common import BeatDetectError, ConfigurationError, FrameSizeError, ReentrancyError
from .pipelines import (
    BeatFlags,
    BeatRecorder,
    BeatSink,
    DetectionPipeline,
    SpectralTransform,
)
from .state import BeatEvent, DetectionState

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "BeatClass",
    "DetectionConfig",
    "DetectionDefaults",
    "DetectionSettings",
    "load_settings",
    # Statistics
    "RollingStatsWindow",
    "BandEnergyHistory",
    # Pipeline
    "DetectionPipeline",
    "DetectionState",
    "BeatEvent",
    "SpectralTransform",
    "BeatSink",
    "FFTMagnitudeTransform",
    "BeatFlags",
    "BeatRecorder",
    # Exceptions
    "BeatDetectError",
    "ConfigurationError",
    "FrameSizeError",
    "ReentrancyError",
]
