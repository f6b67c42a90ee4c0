"""Mock detector for testing"""

import time
from typing import Any, List, Optional, Sequence

import numpy as np

from ..config import BackendConfig
from ..core import Detection
from .base import ObjectDetector


class MockDetector(ObjectDetector):
    """Mock detector returning a fixed detection list"""

    def __init__(self, config: Optional[BackendConfig] = None,
                 detections: Optional[Sequence[Detection]] = None,
                 delay: float = 0.0):
        """
        Initialize mock detector

        Args:
            config: Backend configuration, a placeholder one when None
            detections: Detections returned for every frame
            delay: Seconds each pass sleeps to simulate inference
        """
        super().__init__(config or BackendConfig(name="mock", model_path="mock"))
        self.detections = list(detections or [])
        self.delay = delay
        self.frame_count = 0

    @property
    def is_loaded(self) -> bool:
        return True

    def _preprocess(self, frame: np.ndarray) -> Any:
        return frame

    def _infer(self, model_input: Any, frame: np.ndarray) -> List[Detection]:
        if self.delay:
            time.sleep(self.delay)
        self.frame_count += 1
        return list(self.detections)
