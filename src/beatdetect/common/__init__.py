"""Shared utilities for the beat detection package."""

from .exceptions import (
    BeatDetectError,
    ConfigurationError,
    FrameSizeError,
    ReentrancyError,
)

__all__ = [
    "BeatDetectError",
    "ConfigurationError",
    "FrameSizeError",
    "ReentrancyError",
]
