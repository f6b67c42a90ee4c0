"""
Per-backend diagnostics for RT Detect
"""

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque


@dataclass
class DetectorMetrics:
    """Snapshot of a backend's counters"""
    frames: int = 0
    detections: int = 0
    empty_frames: int = 0
    malformed_outputs: int = 0
    preprocess_failures: int = 0
    inference_failures: int = 0
    model_unavailable: int = 0
    last_inference_time: float = 0.0
    avg_inference_time: float = 0.0


class DetectorStats:
    """Thread-safe counters distinguishing empty frames from failures"""

    def __init__(self, window: int = 100):
        self._lock = threading.Lock()
        self._metrics = DetectorMetrics()
        self._inference_times: Deque[float] = deque(maxlen=window)

    def record_result(self, num_detections: int, inference_time: float):
        """Record a completed detection pass"""
        with self._lock:
            self._metrics.frames += 1
            self._metrics.detections += num_detections
            if num_detections == 0:
                self._metrics.empty_frames += 1
            self._record_time(inference_time)

    def record_malformed_output(self, inference_time: float):
        with self._lock:
            self._metrics.frames += 1
            self._metrics.malformed_outputs += 1
            self._record_time(inference_time)

    def record_preprocess_failure(self):
        with self._lock:
            self._metrics.frames += 1
            self._metrics.preprocess_failures += 1

    def record_inference_failure(self, elapsed: float):
        with self._lock:
            self._metrics.frames += 1
            self._metrics.inference_failures += 1
            self._record_time(elapsed)

    def record_model_unavailable(self):
        with self._lock:
            self._metrics.frames += 1
            self._metrics.model_unavailable += 1

    def _record_time(self, seconds: float):
        self._inference_times.append(seconds)
        self._metrics.last_inference_time = seconds

    @property
    def last_inference_time(self) -> float:
        with self._lock:
            return self._metrics.last_inference_time

    def get_metrics(self) -> DetectorMetrics:
        """Get a copy of the current metrics"""
        with self._lock:
            if self._inference_times:
                self._metrics.avg_inference_time = (
                    sum(self._inference_times) / len(self._inference_times)
                )
            return DetectorMetrics(**vars(self._metrics))

    def reset(self):
        """Reset all counters"""
        with self._lock:
            self._metrics = DetectorMetrics()
            self._inference_times.clear()
