"""Detector for models whose runtime returns decoded observations"""

from typing import Any, List, Optional

import cv2
import numpy as np

from ..config import BackendConfig
from ..core import BoundingBox, Detection
from ..core.labels import label_or_fallback
from ..exceptions import MalformedOutputError, ModelLoadError
from ..utils.nms import non_max_suppression
from .base import ObjectDetector
from .preprocess import ImagePreprocessor
from .runtime import read_net, set_compute_backend


class ObservationDetector(ObjectDetector):
    """
    Detector backed by cv2.dnn_DetectionModel

    The OpenCV detection model parses the network output itself and returns
    class ids, scores and pixel boxes. This backend only normalizes the boxes,
    names them, drops observations below the confidence threshold and runs a
    class-agnostic suppression pass over the remainder.
    """

    def __init__(self, config: BackendConfig, model: Optional[Any] = None):
        """
        Initialize observation detector

        Args:
            config: Backend configuration
            model: Object with detect(image, confThreshold, nmsThreshold);
                a cv2.dnn_DetectionModel is loaded from config when None
        """
        super().__init__(config)
        self.preprocessor = ImagePreprocessor(
            target_width=config.input_size,
            target_height=config.input_size,
            resize_mode=config.resize_mode,
        )

        self.model = model
        if self.model is None:
            try:
                self.model = self._load_model()
            except ModelLoadError as e:
                self.logger.error(f"Failed to load model for backend '{config.name}': {e}")

    def _load_model(self):
        net = read_net(self.config.model_path, self.config.config_path)
        model = cv2.dnn_DetectionModel(net)
        model.setInputParams(
            scale=self.config.scale,
            size=(self.config.input_size, self.config.input_size),
            mean=self.config.mean,
            swapRB=self.config.swap_rb,
            crop=False,
        )
        set_compute_backend(model, self.config.compute_backend)
        self.logger.info(f"Loaded detection model {self.config.model_path}")
        return model

    @property
    def is_loaded(self) -> bool:
        return self.model is not None

    def _preprocess(self, frame: np.ndarray) -> np.ndarray:
        # Blob packing happens inside the detection model
        return self.preprocessor.resize(frame)

    def _infer(self, model_input: np.ndarray, frame: np.ndarray) -> List[Detection]:
        class_ids, scores, boxes = self.model.detect(
            model_input,
            confThreshold=self.config.confidence_threshold,
            nmsThreshold=self.config.iou_threshold,
        )

        class_ids = np.asarray(class_ids).reshape(-1)
        scores = np.asarray(scores, dtype=np.float32).reshape(-1)
        boxes = np.asarray(boxes, dtype=np.float32)
        if boxes.size == 0:
            return []
        boxes = boxes.reshape(-1, 4)

        if not len(class_ids) == len(scores) == len(boxes):
            raise MalformedOutputError(
                f"Observation counts differ: {len(class_ids)} ids, "
                f"{len(scores)} scores, {len(boxes)} boxes"
            )

        height, width = model_input.shape[:2]
        detections = []
        for class_id, score, (x, y, w, h) in zip(class_ids, scores, boxes):
            if score < self.config.confidence_threshold:
                continue
            detections.append(Detection(
                bbox=BoundingBox(float(x) / width, float(y) / height,
                                 float(w) / width, float(h) / height),
                label=label_or_fallback(self.config.labels,
                                        int(class_id) + self.config.label_offset),
                confidence=float(score),
            ))

        return non_max_suppression(detections, self.config.iou_threshold)
