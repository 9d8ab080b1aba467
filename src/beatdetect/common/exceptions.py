"""Common exceptions for the beat detection package."""


class BeatDetectError(Exception):
    """Base exception for all beat detection errors."""

    pass


class ConfigurationError(BeatDetectError):
    """Configuration error."""

    pass


class FrameSizeError(BeatDetectError):
    """Frame or spectrum length does not match the configured frame size."""

    pass


class ReentrancyError(BeatDetectError):
    """A beat sink called back into the pipeline it was invoked from."""

    pass
