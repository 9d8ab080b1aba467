"""Frame-by-frame beat detection pipelines"""

from .base import BeatPipeline, BeatSink, SpectralTransform
from .detection import DetectionPipeline, band_votes
from .sinks import BeatFlags, BeatRecorder

__all__ = [
    "BeatPipeline",
    "BeatSink",
    "SpectralTransform",
    "DetectionPipeline",
    "band_votes",
    "BeatFlags",
    "BeatRecorder",
]
