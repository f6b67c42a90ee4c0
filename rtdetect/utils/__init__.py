"""Utility functions for RT Detect"""

from .io import setup_logging
from .iou import calculate_iou
from .nms import non_max_suppression
from .performance import DetectorMetrics, DetectorStats

__all__ = [
    "calculate_iou",
    "non_max_suppression",
    "setup_logging",
    "DetectorMetrics",
    "DetectorStats",
]
