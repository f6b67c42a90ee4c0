"""Core data structures for RT Detect"""

from .detection import BoundingBox, Detection
from .labels import COCO_LABELS, load_class_names

__all__ = ["BoundingBox", "Detection", "COCO_LABELS", "load_class_names"]
