"""
Pytest configuration file
"""

import sys
import threading
import time
from pathlib import Path

import numpy as np
import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class FakeRuntime:
    """Model runtime returning canned outputs and recording concurrency"""

    def __init__(self, outputs=None, error=None, delay=0.0):
        self.outputs = outputs or {}
        self.output_names = list(self.outputs)
        self.error = error
        self.delay = delay
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def run(self, blob):
        with self._lock:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.outputs
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def fake_runtime():
    """Provide the FakeRuntime class"""
    return FakeRuntime


@pytest.fixture
def frame():
    """Provide a blank 640x480 BGR frame"""
    return np.zeros((480, 640, 3), dtype=np.uint8)


@pytest.fixture
def sample_detection():
    """Provide sample detection for testing"""
    from rtdetect.core import BoundingBox, Detection

    return Detection(
        bbox=BoundingBox(0.1, 0.2, 0.3, 0.4),
        label="person",
        confidence=0.95,
    )


@pytest.fixture
def anchor_outputs():
    """
    Anchor-grid outputs: anchor 0 is a confident person, anchor 1 is
    background-dominated with every object class below threshold
    """
    confidence = np.array([[[0.05, 0.9, 0.05],
                            [0.8, 0.1, 0.05]]], dtype=np.float32)
    coordinates = np.array([[[0.1, 0.2, 0.5, 0.6],
                             [0.3, 0.3, 0.4, 0.4]]], dtype=np.float32)
    return {"confidence": confidence, "coordinates": coordinates}


@pytest.fixture
def anchor_config():
    """Provide an anchor-grid backend configuration"""
    from rtdetect.config import Architecture, BackendConfig

    return BackendConfig(
        name="ssd",
        model_path="ssd.onnx",
        architecture=Architecture.ANCHOR_GRID,
        input_size=300,
    )


@pytest.fixture
def prefiltered_config():
    """Provide a pre-filtered backend configuration"""
    from rtdetect.config import Architecture, BackendConfig

    return BackendConfig(
        name="ssdlite",
        model_path="ssdlite.onnx",
        architecture=Architecture.PREFILTERED,
        input_size=300,
    )
