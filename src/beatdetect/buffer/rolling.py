import numpy as np

from ..common.exceptions import ConfigurationError


class RollingStatsWindow:
    """Fixed-capacity circular buffer with running mean and mean absolute deviation.

    The average always divides by the full capacity, so slots that have not
    been written yet count as zeros. The deviation only looks at the slots
    that have actually been populated.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ConfigurationError(
                f"Window capacity must be at least 1, got {capacity}"
            )
        self._capacity = int(capacity)
        self._buffer = np.zeros(self._capacity, dtype=np.float64)
        self._total_samples = 0
        self._sum = 0.0
        self._average = 0.0
        self._variance = 0.0
        self._full = False

    def add_sample(self, sample: float) -> None:
        """Insert a sample, evicting the oldest one once the window is full"""
        sample = float(sample)
        index = self._total_samples % self._capacity
        self._total_samples += 1
        if not self._full and self._total_samples >= self._capacity:
            self._full = True

        self._buffer[index] = sample
        # Resummed on every insert, an all-zero window averages exactly 0
        self._sum = float(self._buffer.sum())
        self._average = self._sum / self._capacity

        # Unfilled slots sit after the populated prefix
        populated = self._buffer[: self.get_sample_count()]
        self._variance = float(np.mean(np.abs(populated - self._average)))

    def get_average(self) -> float:
        return self._average

    def get_variance(self) -> float:
        """Mean absolute deviation around the average (not statistical variance)"""
        return self._variance

    def get_sample_count(self) -> int:
        return self._capacity if self._full else self._total_samples

    def values(self) -> np.ndarray:
        """Copy of the stored samples in slot order"""
        return self._buffer.copy()

    def copy(self) -> "RollingStatsWindow":
        """Independent copy of this window and its statistics"""
        clone = RollingStatsWindow(self._capacity)
        clone._buffer = self._buffer.copy()
        clone._total_samples = self._total_samples
        clone._sum = self._sum
        clone._average = self._average
        clone._variance = self._variance
        clone._full = self._full
        return clone

    def reset(self) -> None:
        """Clear the window"""
        self._buffer.fill(0)
        self._total_samples = 0
        self._sum = 0.0
        self._average = 0.0
        self._variance = 0.0
        self._full = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def total_samples(self) -> int:
        """Number of samples ever inserted"""
        return self._total_samples

    @property
    def average(self) -> float:
        return self._average

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def sample_count(self) -> int:
        return self.get_sample_count()

    @property
    def is_full(self) -> bool:
        return self._full

    def __len__(self) -> int:
        return self.get_sample_count()
