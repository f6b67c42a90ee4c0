# rtdetect/__init__.py

"""
RT Detect: Real-time object detection backends
==============================================

Detector backends for live camera feeds: frames are preprocessed, run
through a detection model, and the raw model output is decoded into a
deduplicated list of labeled, normalized bounding boxes.

Key Features:
- One asynchronous detector contract over several model architectures
- Anchor-grid (SSD) and pre-filtered detection-list decoders
- Numba-accelerated IoU and Non-Maximum Suppression
- Fail-soft behavior: load, preprocessing and inference errors yield empty
  results instead of stalling the feed
- YAML backend configuration with known model presets

License: MIT
"""

from rtdetect.__version__ import __version__
from rtdetect.config import (
    MODEL_PRESETS,
    Architecture,
    BackendConfig,
    BackendKind,
    load_backend_configs,
)
from rtdetect.core import COCO_LABELS, BoundingBox, Detection
from rtdetect.detectors import (
    DetectionResult,
    DnnDetector,
    ObjectDetector,
    ObservationDetector,
    create_detector,
)
from rtdetect.pipeline import DetectionLoop
from rtdetect.utils import calculate_iou, non_max_suppression

__all__ = [
    "__version__",
    "Architecture",
    "BackendConfig",
    "BackendKind",
    "MODEL_PRESETS",
    "load_backend_configs",
    "BoundingBox",
    "Detection",
    "COCO_LABELS",
    "DetectionResult",
    "ObjectDetector",
    "DnnDetector",
    "ObservationDetector",
    "create_detector",
    "DetectionLoop",
    "calculate_iou",
    "non_max_suppression",
]
