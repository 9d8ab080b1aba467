"""Loading detection configuration from mappings and YAML files."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..common.exceptions import ConfigurationError
from .config import DetectionConfig, DetectionDefaults

logger = logging.getLogger(__name__)


class ClassValues(BaseModel):
    """Per beat class integer values, unset classes keep their defaults"""

    low: Optional[int] = Field(default=None, ge=0)
    mid: Optional[int] = Field(default=None, ge=0)
    high: Optional[int] = Field(default=None, ge=0)

    def overrides(self) -> Dict[str, int]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class DetectionSettings(BaseModel):
    """External representation of the detector configuration"""

    frame_size: int = Field(default=DetectionDefaults.DEFAULT_FRAME_SIZE, gt=0)
    band_count: int = Field(default=DetectionDefaults.DEFAULT_BAND_COUNT, gt=0)
    history_length: int = Field(default=DetectionDefaults.DEFAULT_HISTORY_LENGTH, gt=0)
    decibel_cutoff: float = Field(
        default=DetectionDefaults.DEFAULT_DECIBEL_CUTOFF,
        description="Reserved, not used by the detector",
    )
    refractory_frames: int = Field(
        default=DetectionDefaults.DEFAULT_REFRACTORY_FRAMES, ge=0
    )
    cutoff: ClassValues = Field(default_factory=ClassValues)
    threshold: ClassValues = Field(default_factory=ClassValues)

    model_config = {"extra": "forbid"}

    def to_config(self) -> DetectionConfig:
        """Build a validated DetectionConfig"""
        return DetectionConfig(
            frame_size=self.frame_size,
            band_count=self.band_count,
            history_length=self.history_length,
            decibel_cutoff=self.decibel_cutoff,
            refractory_frames=self.refractory_frames,
            cutoff=self.cutoff.overrides(),
            threshold=self.threshold.overrides(),
        )


def settings_from_mapping(data: Optional[Mapping[str, Any]]) -> DetectionSettings:
    """Parse settings, converting pydantic errors to ConfigurationError"""
    if data is not None and not isinstance(data, Mapping):
        raise ConfigurationError(f"Detection settings must be a mapping, got {data!r}")
    try:
        return DetectionSettings.model_validate(dict(data or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid detection settings: {e}") from e


def load_settings(
    path: Union[str, Path], section: Optional[str] = "beat_detection"
) -> DetectionConfig:
    """Load a DetectionConfig from a YAML file

    When ``section`` is given and present at the top level, only that block
    is used, otherwise the whole document is treated as settings.
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            document = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read settings from {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    if section and section in document:
        document = document[section]

    config = settings_from_mapping(document).to_config()
    logger.info(f"Loaded detection settings from {path}")
    return config
