from typing import Optional

import numpy as np

from ..common.exceptions import ConfigurationError, FrameSizeError


class FFTMagnitudeTransform:
    """Magnitude spectrum of a frame using numpy's FFT

    Output has the same length as the input frame, mirror half included,
    so it can be binned directly against the configured frame size.
    """

    WINDOWS = {
        "hann": np.hanning,
        "hamming": np.hamming,
        "blackman": np.blackman,
    }

    def __init__(self, frame_size: int, window: Optional[str] = "hann"):
        if frame_size < 1:
            raise ConfigurationError("Frame size must be at least 1")
        self.frame_size = frame_size

        if window is None:
            self.window = None
        elif window in self.WINDOWS:
            self.window = self.WINDOWS[window](frame_size).astype(np.float64)
        else:
            raise ConfigurationError(
                f"Unknown window '{window}', expected one of {sorted(self.WINDOWS)}"
            )

    def __call__(self, frame: np.ndarray) -> np.ndarray:
        frame = np.nan_to_num(np.asarray(frame, dtype=np.float64))
        if frame.shape != (self.frame_size,):
            raise FrameSizeError(
                f"Expected frame of {self.frame_size} samples, got shape {frame.shape}"
            )

        if self.window is not None:
            frame = frame * self.window
        return np.abs(np.fft.fft(frame))
