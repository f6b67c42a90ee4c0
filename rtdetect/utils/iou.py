# rtdetect/utils/iou.py

"""IoU (Intersection over Union) utilities for duplicate suppression"""

from typing import Sequence

from numba import jit


@jit(nopython=True)
def calculate_iou_jit(x1: float, y1: float, w1: float, h1: float,
                      x2: float, y2: float, w2: float, h2: float) -> float:
    """
    Calculate IoU between two (x, y, width, height) boxes (numba accelerated)

    Returns:
        IoU value between 0 and 1
    """
    # Standardize negative extents
    if w1 < 0:
        x1 += w1
        w1 = -w1
    if h1 < 0:
        y1 += h1
        h1 = -h1
    if w2 < 0:
        x2 += w2
        w2 = -w2
    if h2 < 0:
        y2 += h2
        h2 = -h2

    # Get intersection extents
    inter_w = min(x1 + w1, x2 + w2) - max(x1, x2)
    inter_h = min(y1 + h1, y2 + h2) - max(y1, y2)
    if inter_w <= 0.0 or inter_h <= 0.0:
        return 0.0

    intersection_area = inter_w * inter_h
    union_area = w1 * h1 + w2 * h2 - intersection_area

    # Avoid division by zero
    if union_area <= 0.0:
        return 0.0

    return intersection_area / union_area


def calculate_iou(box1: Sequence[float], box2: Sequence[float]) -> float:
    """
    Calculate IoU between two bounding boxes

    Args:
        box1: First box as (x, y, width, height)
        box2: Second box as (x, y, width, height)

    Returns:
        IoU value between 0 and 1
    """
    x1, y1, w1, h1 = box1
    x2, y2, w2, h2 = box2
    return calculate_iou_jit(
        float(x1), float(y1), float(w1), float(h1),
        float(x2), float(y2), float(w2), float(h2),
    )
