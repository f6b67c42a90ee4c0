"""Test module for IoU, suppression and diagnostics utilities"""

import itertools
import logging
from unittest.mock import patch

import numpy as np
import pytest

from rtdetect.core import BoundingBox, Detection
from rtdetect.utils import (
    DetectorStats,
    calculate_iou,
    non_max_suppression,
    setup_logging,
)


def _random_detections(rng, count):
    detections = []
    for _ in range(count):
        x, y = rng.uniform(0.0, 0.8, size=2)
        w, h = rng.uniform(0.05, 0.3, size=2)
        detections.append(Detection(
            bbox=BoundingBox(float(x), float(y), float(w), float(h)),
            label="person",
            confidence=float(rng.uniform(0.3, 1.0)),
        ))
    return detections


class TestIoU:
    """Test IoU computation"""

    def test_identical_boxes(self):
        box = (0.1, 0.2, 0.3, 0.4)
        assert calculate_iou(box, box) == pytest.approx(1.0)

    def test_partial_overlap(self):
        # Intersection 0.2, union 0.25
        a = (0.1, 0.1, 0.5, 0.5)
        b = (0.1, 0.1, 0.5, 0.4)
        assert calculate_iou(a, b) == pytest.approx(0.8)

    def test_disjoint_boxes(self):
        a = (0.0, 0.0, 0.2, 0.2)
        b = (0.5, 0.5, 0.2, 0.2)
        assert calculate_iou(a, b) == 0.0

    def test_touching_boxes(self):
        a = (0.0, 0.0, 0.2, 0.2)
        b = (0.2, 0.0, 0.2, 0.2)
        assert calculate_iou(a, b) == 0.0

    def test_degenerate_boxes(self):
        assert calculate_iou((0.1, 0.1, 0.0, 0.0), (0.1, 0.1, 0.0, 0.0)) == 0.0

    def test_negative_extent_is_standardized(self):
        a = (0.1, 0.1, 0.4, 0.4)
        b = (0.5, 0.5, -0.4, -0.4)
        assert calculate_iou(a, b) == pytest.approx(1.0)

    def test_symmetry(self):
        rng = np.random.default_rng(7)
        boxes = [tuple(rng.uniform(0.0, 0.6, size=4)) for _ in range(12)]

        for a, b in itertools.combinations(boxes, 2):
            assert calculate_iou(a, b) == pytest.approx(calculate_iou(b, a))
            assert 0.0 <= calculate_iou(a, b) <= 1.0


class TestNonMaxSuppression:
    """Test Non-Maximum Suppression"""

    def test_empty_input(self):
        assert non_max_suppression([], 0.5) == []

    def test_keeps_highest_of_overlapping_pair(self):
        low = Detection(BoundingBox(0.1, 0.1, 0.5, 0.4), "person", 0.7)
        high = Detection(BoundingBox(0.1, 0.1, 0.5, 0.5), "person", 0.9)

        assert non_max_suppression([low, high], 0.5) == [high]

    def test_overlap_below_threshold_is_kept(self):
        a = Detection(BoundingBox(0.1, 0.1, 0.5, 0.5), "person", 0.9)
        b = Detection(BoundingBox(0.1, 0.1, 0.5, 0.4), "person", 0.7)

        assert len(non_max_suppression([a, b], 0.9)) == 2

    def test_compares_only_against_kept(self):
        # b overlaps a, c overlaps b but not a: b is dropped so c survives
        a = Detection(BoundingBox(0.0, 0.0, 0.4, 0.4), "person", 0.9)
        b = Detection(BoundingBox(0.1, 0.0, 0.4, 0.4), "person", 0.8)
        c = Detection(BoundingBox(0.3, 0.0, 0.4, 0.4), "person", 0.7)

        assert non_max_suppression([c, b, a], 0.5) == [a, c]

    def test_class_agnostic(self):
        a = Detection(BoundingBox(0.1, 0.1, 0.5, 0.5), "cat", 0.9)
        b = Detection(BoundingBox(0.1, 0.1, 0.5, 0.5), "dog", 0.8)

        assert non_max_suppression([a, b], 0.5) == [a]

    def test_stable_for_equal_confidence(self):
        a = Detection(BoundingBox(0.0, 0.0, 0.2, 0.2), "cat", 0.5)
        b = Detection(BoundingBox(0.5, 0.5, 0.2, 0.2), "dog", 0.5)

        assert non_max_suppression([a, b], 0.5) == [a, b]
        assert non_max_suppression([b, a], 0.5) == [b, a]

    def test_properties_on_random_input(self):
        rng = np.random.default_rng(0)
        detections = _random_detections(rng, 40)

        kept = non_max_suppression(detections, 0.5)

        assert len(kept) <= len(detections)
        assert non_max_suppression(kept, 0.5) == kept
        confidences = [d.confidence for d in kept]
        assert confidences == sorted(confidences, reverse=True)
        for a, b in itertools.combinations(kept, 2):
            assert calculate_iou(a.bbox, b.bbox) <= 0.5


class TestDetectorStats:
    """Test per-backend diagnostics"""

    def test_distinguishes_empty_from_malformed(self):
        stats = DetectorStats()
        stats.record_result(0, 0.01)
        stats.record_result(2, 0.03)
        stats.record_malformed_output(0.02)

        metrics = stats.get_metrics()
        assert metrics.frames == 3
        assert metrics.empty_frames == 1
        assert metrics.malformed_outputs == 1
        assert metrics.detections == 2
        assert metrics.avg_inference_time == pytest.approx(0.02)
        assert stats.last_inference_time == pytest.approx(0.02)

    def test_failures_and_reset(self):
        stats = DetectorStats()
        stats.record_model_unavailable()
        stats.record_preprocess_failure()
        stats.record_inference_failure(0.005)

        metrics = stats.get_metrics()
        assert metrics.model_unavailable == 1
        assert metrics.preprocess_failures == 1
        assert metrics.inference_failures == 1

        stats.reset()
        assert stats.get_metrics().frames == 0
        assert stats.last_inference_time == 0.0


class TestSetupLogging:
    """Test logging setup"""

    def test_file_handler_added(self, tmp_path):
        log_file = tmp_path / "rtdetect.log"

        with patch('logging.basicConfig') as mock_config:
            setup_logging(str(log_file), level=logging.DEBUG)

        kwargs = mock_config.call_args[1]
        assert kwargs['level'] == logging.DEBUG
        assert [type(h) for h in kwargs['handlers']] == [
            logging.StreamHandler, logging.FileHandler]
        kwargs['handlers'][1].close()
