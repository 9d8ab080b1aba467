from typing import List

import numpy as np

from ..buffer.rolling import RollingStatsWindow
from ..common.exceptions import ConfigurationError, FrameSizeError
from .config import DetectionDefaults


def raw_band_energies(magnitudes: np.ndarray, band_count: int) -> np.ndarray:
    """Sum scaled magnitudes over contiguous groups of bins, one value per band"""
    magnitudes = np.asarray(magnitudes, dtype=np.float64)
    if magnitudes.ndim != 1:
        raise FrameSizeError(f"Expected a 1-D spectrum, got shape {magnitudes.shape}")
    if band_count < 1 or len(magnitudes) % band_count != 0:
        raise ConfigurationError(
            f"Band count {band_count} must evenly divide spectrum length {len(magnitudes)}"
        )

    samples_per_band = len(magnitudes) // band_count
    # Bin i lands in band i // samples_per_band
    grouped = magnitudes.reshape(band_count, samples_per_band)
    return grouped.sum(axis=1) * DetectionDefaults.ENERGY_SCALE


def bin_band_energies(magnitudes: np.ndarray, band_count: int) -> np.ndarray:
    """Per-band energy of one frame, normalized by the bins in each band"""
    raw = raw_band_energies(magnitudes, band_count)
    return raw / (len(magnitudes) // band_count)


class BandEnergyHistory:
    """Rolling energy baseline for every frequency band"""

    def __init__(self, band_count: int, history_length: int):
        if band_count < 1:
            raise ConfigurationError("Band count must be at least 1")
        self.band_count = band_count
        self.history_length = history_length
        self._windows: List[RollingStatsWindow] = [
            RollingStatsWindow(history_length) for _ in range(band_count)
        ]

    def update(self, energies: np.ndarray) -> None:
        """Feed one frame's band energies into the band windows"""
        if len(energies) != self.band_count:
            raise FrameSizeError(
                f"Expected {self.band_count} band energies, got {len(energies)}"
            )
        for window, energy in zip(self._windows, energies):
            window.add_sample(energy)

    def averages(self) -> np.ndarray:
        return np.array([w.get_average() for w in self._windows], dtype=np.float64)

    def variances(self) -> np.ndarray:
        return np.array([w.get_variance() for w in self._windows], dtype=np.float64)

    def reset(self) -> None:
        for window in self._windows:
            window.reset()

    def __getitem__(self, band: int) -> RollingStatsWindow:
        return self._windows[band]

    def __len__(self) -> int:
        return self.band_count

    def __iter__(self):
        return iter(self._windows)
