"""Object detectors for RT Detect"""

from .base import DetectionResult, ObjectDetector
from .decoders import decode_anchor_grid, decode_outputs, decode_prefiltered
from .dnn import DnnDetector
from .factory import create_detector
from .mock import MockDetector
from .observation import ObservationDetector
from .preprocess import ImagePreprocessor
from .runtime import DnnRuntime

__all__ = [
    "DetectionResult",
    "ObjectDetector",
    "DnnDetector",
    "ObservationDetector",
    "MockDetector",
    "ImagePreprocessor",
    "DnnRuntime",
    "create_detector",
    "decode_anchor_grid",
    "decode_prefiltered",
    "decode_outputs",
]
