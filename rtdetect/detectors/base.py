"""Base detector interface"""

import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, NamedTuple, Optional

import numpy as np

from ..config import BackendConfig
from ..core import Detection
from ..exceptions import MalformedOutputError, PreprocessingError
from ..utils.performance import DetectorStats


class DetectionResult(NamedTuple):
    """Outcome of one detection pass"""

    detections: List[Detection]
    inference_time: float  # seconds, preprocessing through decode


ResultCallback = Callable[[DetectionResult], None]


class ObjectDetector(ABC):
    """
    Abstract base class for detector backends

    A detection pass never raises: a missing model, a frame that cannot be
    preprocessed, a runtime failure or malformed outputs all produce an empty
    result and are counted in ``stats``. Asynchronous calls run on a
    single worker thread per backend, so passes on one backend never overlap
    and complete in submission order.
    """

    def __init__(self, config: BackendConfig):
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")
        self.stats = DetectorStats()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"detect-{config.name}")

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        """Whether the model loaded successfully"""
        pass

    @abstractmethod
    def _preprocess(self, frame: np.ndarray) -> Any:
        """
        Convert a frame to model input

        Raises:
            PreprocessingError: If the frame cannot be converted
        """
        pass

    @abstractmethod
    def _infer(self, model_input: Any, frame: np.ndarray) -> List[Detection]:
        """
        Run the model and decode its outputs

        Raises:
            MalformedOutputError: If outputs do not match the decoder's layout
        """
        pass

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def last_inference_time(self) -> float:
        return self.stats.last_inference_time

    def detect(self, frame: np.ndarray,
               callback: Optional[ResultCallback] = None) -> "Future[DetectionResult]":
        """
        Submit a frame for detection without blocking

        Args:
            frame: Input image as numpy array
            callback: Optional function called once with the result

        Returns:
            Future resolving to the DetectionResult
        """
        future = self._executor.submit(self.detect_sync, frame)
        if callback is not None:
            future.add_done_callback(lambda f: callback(f.result()))
        return future

    def detect_sync(self, frame: np.ndarray) -> DetectionResult:
        """
        Run one detection pass on the calling thread

        Args:
            frame: Input image as numpy array

        Returns:
            Detections and elapsed seconds
        """
        if not self.is_loaded:
            self.stats.record_model_unavailable()
            return DetectionResult([], 0.0)

        start_time = time.perf_counter()

        try:
            model_input = self._preprocess(frame)
        except PreprocessingError as e:
            self.logger.warning(f"Preprocessing failed: {e}")
            self.stats.record_preprocess_failure()
            return DetectionResult([], 0.0)

        try:
            detections = self._infer(model_input, frame)
        except MalformedOutputError as e:
            elapsed = time.perf_counter() - start_time
            self.logger.warning(f"Malformed model output: {e}")
            self.stats.record_malformed_output(elapsed)
            return DetectionResult([], elapsed)
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            self.logger.error(f"Detection failed: {e}")
            self.stats.record_inference_failure(elapsed)
            return DetectionResult([], elapsed)

        elapsed = time.perf_counter() - start_time
        self.stats.record_result(len(detections), elapsed)
        self.logger.debug(f"Detected {len(detections)} objects in {elapsed * 1000:.1f}ms")
        return DetectionResult(detections, elapsed)

    def get_class_names(self) -> List[str]:
        """Get list of detectable class names"""
        return list(self.config.labels)

    def get_model_info(self) -> Dict[str, Any]:
        """Get model information"""
        return {
            'name': self.config.name,
            'model_path': self.config.model_path,
            'kind': self.config.kind.value,
            'architecture': self.config.architecture.value,
            'input_size': self.config.input_size,
            'confidence_threshold': self.config.confidence_threshold,
            'iou_threshold': self.config.iou_threshold,
            'label_offset': self.config.label_offset,
            'num_classes': len(self.config.labels),
            'loaded': self.is_loaded,
        }

    def close(self) -> None:
        """Wait for in-flight passes and release the worker thread"""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "ObjectDetector":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
