import sys
from pathlib import Path

import numpy as np
import pytest

# Make the src layout importable without an installed package
src_dir = Path(__file__).parent.parent.absolute() / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from beatdetect.analysis.config import DetectionConfig


class IdentityTransform:
    """Treats the incoming frame as an already computed magnitude spectrum"""

    def __init__(self):
        self.calls = 0

    def __call__(self, frame):
        self.calls += 1
        return np.asarray(frame, dtype=np.float64)


@pytest.fixture
def identity_transform():
    return IdentityTransform()


@pytest.fixture
def small_config():
    """Eight bins in four bands with a sixteen frame history"""
    return DetectionConfig(frame_size=8, band_count=4, history_length=16)


@pytest.fixture
def flat_frame():
    """Every bin at magnitude 1, band energy 10"""
    return np.ones(8)


@pytest.fixture
def spike_frame():
    """Every bin at magnitude 100, band energy 1000"""
    return np.full(8, 100.0)
