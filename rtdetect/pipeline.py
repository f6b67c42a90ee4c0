# rtdetect/pipeline.py

"""Frame dispatch between a capture source and detector backends"""

import logging
import threading
from typing import Callable, Dict, List, Mapping, Optional, Set

import numpy as np

from .detectors.base import DetectionResult, ObjectDetector

ResultHandler = Callable[[str, DetectionResult], None]


class DetectionLoop:
    """
    Route camera frames to the active detector backend

    At most one frame is in flight per backend. A frame submitted while the
    active backend is still busy is dropped rather than queued, so results
    reach the display in capture order and never lag behind the camera.
    Switching the active backend does not wait for the previous one.
    """

    def __init__(self, detectors: Mapping[str, ObjectDetector],
                 on_result: ResultHandler,
                 active: Optional[str] = None):
        """
        Initialize detection loop

        Args:
            detectors: Backends keyed by name
            on_result: Called with (backend name, result) on a worker thread
            active: Initially selected backend, first one when None
        """
        if not detectors:
            raise ValueError("DetectionLoop needs at least one detector")

        self.logger = logging.getLogger(f"{__name__}.DetectionLoop")
        self._detectors: Dict[str, ObjectDetector] = dict(detectors)
        self._on_result = on_result
        self._lock = threading.Lock()
        self._in_flight: Set[str] = set()
        self._active = active if active is not None else next(iter(self._detectors))
        if self._active not in self._detectors:
            raise KeyError(f"Unknown detector: {self._active}")

        self.submitted_frames = 0
        self.dropped_frames = 0

    @property
    def active(self) -> str:
        with self._lock:
            return self._active

    @property
    def backend_names(self) -> List[str]:
        return list(self._detectors)

    def select(self, name: str) -> None:
        """
        Make another backend service the next frames

        Raises:
            KeyError: If no backend has that name
        """
        if name not in self._detectors:
            raise KeyError(f"Unknown detector: {name}")
        with self._lock:
            self._active = name
        self.logger.info(f"Switched detector to '{name}'")

    def is_busy(self, name: Optional[str] = None) -> bool:
        with self._lock:
            return (name or self._active) in self._in_flight

    def submit(self, frame: np.ndarray) -> bool:
        """
        Hand a frame to the active backend if it is idle

        Args:
            frame: Camera frame

        Returns:
            True if the frame was submitted, False if it was dropped
        """
        with self._lock:
            name = self._active
            if name in self._in_flight:
                self.dropped_frames += 1
                return False
            self._in_flight.add(name)
            self.submitted_frames += 1

        self._detectors[name].detect(
            frame, callback=lambda result: self._deliver(name, result))
        return True

    def _deliver(self, name: str, result: DetectionResult) -> None:
        with self._lock:
            self._in_flight.discard(name)
        self._on_result(name, result)

    def close(self) -> None:
        """Wait for in-flight frames and shut every backend down"""
        for detector in self._detectors.values():
            detector.close()
