from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from ..analysis.config import BeatClass, DetectionConfig
from ..analysis.history import BandEnergyHistory


@dataclass(frozen=True)
class BeatEvent:
    """A beat fired for one class on one frame"""

    beat_class: BeatClass
    energy: float
    frame_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beat_class": self.beat_class.name.lower(),
            "energy": self.energy,
            "frame_index": self.frame_index,
        }


def _per_class(value: Any) -> Dict[BeatClass, Any]:
    return {beat_class: value for beat_class in BeatClass}


@dataclass
class DetectionState:
    """Live detector state, mutated once per processed frame"""

    band_energies: np.ndarray
    history: BandEnergyHistory
    cooldown: Dict[BeatClass, int] = field(default_factory=lambda: _per_class(0))
    last_fired_energy: Dict[BeatClass, float] = field(
        default_factory=lambda: _per_class(0.0)
    )
    frames_processed: int = 0

    @classmethod
    def from_config(cls, config: DetectionConfig) -> "DetectionState":
        """Fresh state sized for the given configuration"""
        return cls(
            band_energies=np.zeros(config.band_count, dtype=np.float64),
            history=BandEnergyHistory(config.band_count, config.history_length),
        )

    def is_ready(self, beat_class: BeatClass) -> bool:
        return self.cooldown[beat_class] == 0

    def decay_cooldowns(self) -> None:
        """Count every active cooldown down by one frame"""
        for beat_class in BeatClass:
            if self.cooldown[beat_class] > 0:
                self.cooldown[beat_class] -= 1

    def reset(self) -> None:
        self.band_energies.fill(0)
        self.history.reset()
        self.cooldown = _per_class(0)
        self.last_fired_energy = _per_class(0.0)
        self.frames_processed = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary for diagnostics"""
        return {
            "frames_processed": self.frames_processed,
            "cooldown": {c.name.lower(): v for c, v in self.cooldown.items()},
            "last_fired_energy": {
                c.name.lower(): v for c, v in self.last_fired_energy.items()
            },
            "band_energies": self.band_energies.tolist(),
            "band_averages": self.history.averages().tolist(),
            "band_variances": self.history.variances().tolist(),
        }
