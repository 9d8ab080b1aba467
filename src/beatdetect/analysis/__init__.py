"""Band energy analysis and detector configuration"""

from .config import BeatClass, DetectionConfig, DetectionDefaults
from .history import BandEnergyHistory, bin_band_energies, raw_band_energies
from .settings import DetectionSettings, load_settings, settings_from_mapping
from .transforms import FFTMagnitudeTransform

__all__ = [
    # Configuration
    "BeatClass",
    "DetectionConfig",
    "DetectionDefaults",
    "DetectionSettings",
    "load_settings",
    "settings_from_mapping",
    # Band energy
    "BandEnergyHistory",
    "bin_band_energies",
    "raw_band_energies",
    # Transforms
    "FFTMagnitudeTransform",
]
