from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

import numpy as np

from ..analysis.config import BeatClass, DetectionConfig
from ..state.models import BeatEvent


@runtime_checkable
class SpectralTransform(Protocol):
    """Turns one audio frame into a magnitude spectrum of the same length"""

    def __call__(self, frame: np.ndarray) -> np.ndarray: ...


@runtime_checkable
class BeatSink(Protocol):
    """Receives beats as they fire"""

    def on_beat(self, beat_class: BeatClass, energy: float) -> None: ...


BeatCallback = Callable[[BeatClass, float], None]
SinkLike = Union[BeatSink, BeatCallback]


def resolve_sink(sink: Optional[SinkLike]) -> Optional[BeatCallback]:
    """Accept either a BeatSink or a plain callable"""
    if sink is None:
        return None
    if isinstance(sink, BeatSink):
        return sink.on_beat
    if callable(sink):
        return sink
    raise TypeError(f"Beat sink must define on_beat() or be callable, got {sink!r}")


class BeatPipeline(ABC):
    """Base class for frame-by-frame beat pipelines"""

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DetectionConfig()
        self._initialize()

    @abstractmethod
    def _initialize(self) -> None:
        """Initialize pipeline-specific state"""
        pass

    @abstractmethod
    def process(
        self, frame: np.ndarray, sink: Optional[SinkLike] = None
    ) -> List[BeatEvent]:
        """Process one frame and return the beats that fired"""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset pipeline state"""
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """Snapshot of the pipeline state"""
        pass
