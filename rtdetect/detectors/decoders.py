"""
Raw output decoders

Each decoder turns a named output bundle into labeled detections, filters
them by confidence and suppresses duplicates. Box coordinates in both layouts
are encoded as (yMin, xMin, yMax, xMax), normalized to [0, 1].
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..config import Architecture, BackendConfig
from ..core import BoundingBox, Detection
from ..core.labels import clamped_label, label_or_fallback
from ..core.tensors import OutputBundle, describe_outputs, expect_shape, find_output
from ..exceptions import MalformedOutputError
from ..utils.nms import non_max_suppression

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_OUTPUTS = ("confidence", "scores")
DEFAULT_COORDINATE_OUTPUTS = ("coordinates", "boxes")


def _fail_soft(error: MalformedOutputError, outputs: OutputBundle,
               strict: bool) -> List[Detection]:
    if strict:
        raise error
    logger.warning(f"Malformed model output: {error} (outputs: {describe_outputs(outputs)})")
    return []


def _best_classes(scores: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Arg-max class index and its score per row; ties pick the lowest index"""
    best = np.argmax(scores, axis=1)
    return best, scores[np.arange(scores.shape[0]), best]


def decode_anchor_grid(outputs: OutputBundle,
                       labels: Sequence[str],
                       confidence_threshold: float = 0.3,
                       iou_threshold: float = 0.5,
                       label_offset: int = 0,
                       confidence_outputs: Sequence[str] = DEFAULT_CONFIDENCE_OUTPUTS,
                       coordinate_outputs: Sequence[str] = DEFAULT_COORDINATE_OUTPUTS,
                       strict: bool = False) -> List[Detection]:
    """
    Decode dense per-anchor outputs of an SSD-style model

    Expects confidence [1, anchors, classes] with class 0 as background and
    coordinates [1, anchors, 4]. Background is never chosen as an anchor's
    class. Anchors whose best score is below the threshold are skipped.

    Args:
        outputs: Named output arrays
        labels: Class-label table, background at index 0
        confidence_threshold: Minimum best-class score to keep an anchor
        iou_threshold: NMS overlap threshold
        label_offset: Added to the class index before the table lookup
        confidence_outputs: Accepted names for the score tensor
        coordinate_outputs: Accepted names for the box tensor
        strict: Raise MalformedOutputError instead of returning []

    Returns:
        Suppressed detections, highest confidence first
    """
    try:
        confidence = find_output(outputs, confidence_outputs)
        coordinates = find_output(outputs, coordinate_outputs)
        _, num_anchors, num_classes = expect_shape(
            confidence, (1, None, None), "confidence")
        expect_shape(coordinates, (1, num_anchors, 4), "coordinates")
        if num_classes < 2:
            raise MalformedOutputError(
                f"Anchor grid needs background plus at least one class, got {num_classes}")
    except MalformedOutputError as e:
        return _fail_soft(e, outputs, strict)

    # Skip background column, then shift indices back into table space
    best, best_scores = _best_classes(confidence[0, :, 1:])
    class_ids = best + 1

    candidates = []
    for anchor in np.flatnonzero(best_scores >= confidence_threshold):
        y_min, x_min, y_max, x_max = coordinates[0, anchor]
        candidates.append(Detection(
            bbox=BoundingBox.from_yxyx(y_min, x_min, y_max, x_max),
            label=clamped_label(labels, int(class_ids[anchor]) + label_offset),
            confidence=float(best_scores[anchor]),
        ))

    if not candidates:
        logger.debug(f"No anchors above {confidence_threshold} among {num_anchors}")
        return []

    return non_max_suppression(candidates, iou_threshold)


def decode_prefiltered(outputs: OutputBundle,
                       labels: Sequence[str],
                       confidence_threshold: float = 0.3,
                       iou_threshold: float = 0.5,
                       label_offset: int = 1,
                       confidence_outputs: Sequence[str] = DEFAULT_CONFIDENCE_OUTPUTS,
                       coordinate_outputs: Sequence[str] = DEFAULT_COORDINATE_OUTPUTS,
                       strict: bool = False) -> List[Detection]:
    """
    Decode the short detection list of a model that filters internally

    Expects confidence [detections, classes] without a background column and
    coordinates [detections, 4]. The class index is shifted by label_offset
    so that class 0 maps to the first non-background entry of a table that
    reserves index 0. Indices past the table end are labeled "object".

    Args:
        outputs: Named output arrays
        labels: Class-label table
        confidence_threshold: Minimum best-class score to keep a detection
        iou_threshold: NMS overlap threshold
        label_offset: Added to the class index before the table lookup
        confidence_outputs: Accepted names for the score tensor
        coordinate_outputs: Accepted names for the box tensor
        strict: Raise MalformedOutputError instead of returning []

    Returns:
        Suppressed detections, highest confidence first
    """
    try:
        confidence = find_output(outputs, confidence_outputs)
        coordinates = find_output(outputs, coordinate_outputs)
        num_detections, num_classes = expect_shape(
            confidence, (None, None), "confidence")
        expect_shape(coordinates, (num_detections, 4), "coordinates")
        if num_classes < 1:
            raise MalformedOutputError("Confidence output has no class columns")
    except MalformedOutputError as e:
        return _fail_soft(e, outputs, strict)

    if num_detections == 0:
        logger.debug("Model returned an empty detection list")
        return []

    class_ids, best_scores = _best_classes(confidence)

    candidates = []
    for idx in np.flatnonzero(best_scores >= confidence_threshold):
        y_min, x_min, y_max, x_max = coordinates[idx]
        candidates.append(Detection(
            bbox=BoundingBox.from_yxyx(y_min, x_min, y_max, x_max),
            label=label_or_fallback(labels, int(class_ids[idx]) + label_offset),
            confidence=float(best_scores[idx]),
        ))

    logger.debug(f"Found {len(candidates)} of {num_detections} detections above threshold")
    return non_max_suppression(candidates, iou_threshold)


def decode_outputs(config: BackendConfig,
                   outputs: OutputBundle,
                   strict: bool = False) -> List[Detection]:
    """
    Decode outputs with the decoder selected by the backend's architecture

    Args:
        config: Backend configuration carrying the architecture tag and
            decoding parameters
        outputs: Named output arrays
        strict: Raise MalformedOutputError instead of returning []

    Returns:
        Suppressed detections
    """
    params = dict(
        labels=config.labels,
        confidence_threshold=config.confidence_threshold,
        iou_threshold=config.iou_threshold,
        label_offset=config.label_offset,
        confidence_outputs=config.confidence_outputs,
        coordinate_outputs=config.coordinate_outputs,
        strict=strict,
    )

    if config.architecture == Architecture.ANCHOR_GRID:
        return decode_anchor_grid(outputs, **params)
    elif config.architecture == Architecture.PREFILTERED:
        return decode_prefiltered(outputs, **params)
    raise ValueError(f"Unsupported architecture: {config.architecture}")
