"""Tests for band binning and band energy history."""

import numpy as np
import pytest

from beatdetect.analysis.history import (
    BandEnergyHistory,
    bin_band_energies,
    raw_band_energies,
)
from beatdetect.common.exceptions import ConfigurationError, FrameSizeError


class TestBandBinning:
    """Test spectrum to band folding"""

    @pytest.mark.parametrize("frame_size,band_count", [(8, 4), (1024, 64), (12, 3)])
    def test_raw_energy_preserves_total(self, frame_size, band_count):
        """Raw band sums add up to ten times the spectrum total"""
        rng = np.random.default_rng(frame_size)
        spectrum = rng.uniform(0, 5, size=frame_size)

        raw = raw_band_energies(spectrum, band_count)

        assert len(raw) == band_count
        assert raw.sum() == pytest.approx(10 * spectrum.sum())

    def test_contiguous_groups(self):
        """Bins are grouped contiguously and normalized per band"""
        spectrum = np.array([1.0, 3.0, 0.0, 0.0, 2.0, 2.0, 5.0, 1.0])

        energies = bin_band_energies(spectrum, 4)

        assert energies.tolist() == pytest.approx([20.0, 0.0, 20.0, 30.0])

    def test_single_band(self):
        spectrum = np.arange(4, dtype=float)
        assert bin_band_energies(spectrum, 1).tolist() == pytest.approx([15.0])

    def test_uneven_split_rejected(self):
        with pytest.raises(ConfigurationError):
            bin_band_energies(np.ones(10), 3)

    def test_two_dimensional_rejected(self):
        with pytest.raises(FrameSizeError):
            bin_band_energies(np.ones((2, 4)), 2)


class TestBandEnergyHistory:
    """Test per-band rolling statistics"""

    def test_update_feeds_each_band(self):
        history = BandEnergyHistory(band_count=3, history_length=2)
        history.update(np.array([2.0, 4.0, 6.0]))
        history.update(np.array([2.0, 4.0, 6.0]))

        assert history.averages().tolist() == pytest.approx([2.0, 4.0, 6.0])
        assert history.variances().tolist() == pytest.approx([0.0, 0.0, 0.0])
        assert all(window.is_full for window in history)

    def test_wrong_band_count(self):
        history = BandEnergyHistory(band_count=4, history_length=2)
        with pytest.raises(FrameSizeError):
            history.update(np.ones(3))

    def test_invalid_dimensions(self):
        with pytest.raises(ConfigurationError):
            BandEnergyHistory(band_count=0, history_length=4)
        with pytest.raises(ConfigurationError):
            BandEnergyHistory(band_count=4, history_length=0)

    def test_reset(self):
        history = BandEnergyHistory(band_count=2, history_length=3)
        history.update(np.array([1.0, 1.0]))
        history.reset()

        assert history.averages().tolist() == [0.0, 0.0]
        assert history[0].get_sample_count() == 0
        assert len(history) == 2
