"""Non-Maximum Suppression over detection lists"""

from typing import List, Sequence

from ..core import Detection
from .iou import calculate_iou


def non_max_suppression(detections: Sequence[Detection],
                        iou_threshold: float) -> List[Detection]:
    """
    Remove lower-confidence detections that overlap a kept one

    Candidates are visited in descending confidence (stable for ties) and
    compared only against detections already kept. The comparison is
    class-agnostic.

    Args:
        detections: Candidate detections in any order
        iou_threshold: Candidates with IoU above this against a kept box are dropped

    Returns:
        Kept detections, highest confidence first
    """
    if not detections:
        return []

    ordered = sorted(detections, key=lambda d: d.confidence, reverse=True)

    keep: List[Detection] = []
    for candidate in ordered:
        if all(calculate_iou(candidate.bbox, kept.bbox) <= iou_threshold
               for kept in keep):
            keep.append(candidate)

    return keep
