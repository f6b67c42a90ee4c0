"""Test module for core data structures"""

import dataclasses

import numpy as np
import pytest

from rtdetect.core import COCO_LABELS, BoundingBox, Detection, load_class_names
from rtdetect.core.labels import (
    COCO_80_LABELS,
    FALLBACK_LABEL,
    clamped_label,
    label_or_fallback,
)
from rtdetect.core.tensors import expect_shape, find_output
from rtdetect.exceptions import MalformedOutputError


class TestBoundingBox:
    """Test BoundingBox class"""

    def test_from_yxyx(self):
        """Test conversion from the SSD coordinate encoding"""
        box = BoundingBox.from_yxyx(0.1, 0.2, 0.5, 0.6)

        assert box.x == pytest.approx(0.2)
        assert box.y == pytest.approx(0.1)
        assert box.width == pytest.approx(0.4)
        assert box.height == pytest.approx(0.4)

    def test_box_properties(self):
        """Test box property calculations"""
        box = BoundingBox(0.1, 0.2, 0.3, 0.4)

        assert box.x_max == pytest.approx(0.4)
        assert box.y_max == pytest.approx(0.6)
        assert box.area == pytest.approx(0.12)
        np.testing.assert_allclose(box.to_xyxy(), [0.1, 0.2, 0.4, 0.6])


class TestDetection:
    """Test Detection class"""

    def test_detection_creation(self, sample_detection):
        """Test creating a detection"""
        assert sample_detection.label == "person"
        assert sample_detection.confidence == 0.95
        assert sample_detection.bbox == (0.1, 0.2, 0.3, 0.4)

    def test_detection_is_immutable(self, sample_detection):
        """Test that detections cannot be mutated"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_detection.confidence = 0.1

    def test_detection_serialization(self, sample_detection):
        """Test detection to/from dict"""
        det_dict = sample_detection.to_dict()
        assert det_dict == {
            "bbox": [0.1, 0.2, 0.3, 0.4],
            "label": "person",
            "confidence": 0.95,
        }

        assert Detection.from_dict(det_dict) == sample_detection

    def test_flipped_vertically(self, sample_detection):
        """Test mirroring into a display with the opposite vertical origin"""
        flipped = sample_detection.flipped_vertically()

        assert flipped.bbox.x == pytest.approx(0.1)
        assert flipped.bbox.y == pytest.approx(0.4)
        assert flipped.bbox.height == pytest.approx(0.4)
        assert flipped.flipped_vertically().bbox.y == pytest.approx(0.2)


class TestLabels:
    """Test class-label tables"""

    def test_coco_tables(self):
        assert COCO_LABELS[0] == "background"
        assert COCO_LABELS[1] == "person"
        assert len(COCO_80_LABELS) == 80
        assert COCO_80_LABELS[0] == "person"
        assert COCO_80_LABELS[-1] == "toothbrush"

    def test_clamped_label(self):
        labels = ("background", "cat", "dog")

        assert clamped_label(labels, 1) == "cat"
        assert clamped_label(labels, 10) == "dog"
        assert clamped_label((), 0) == FALLBACK_LABEL

    def test_label_or_fallback(self):
        labels = ("background", "cat", "dog")

        assert label_or_fallback(labels, 2) == "dog"
        assert label_or_fallback(labels, 3) == FALLBACK_LABEL

    def test_load_class_names(self, tmp_path):
        names_path = tmp_path / "classes.names"
        names_path.write_text("background\ncat\n\ndog\n")

        labels = load_class_names(names_path)

        assert labels == ("background", "cat", "dog")


class TestTensors:
    """Test output bundle validation"""

    def test_find_output_uses_aliases_in_order(self):
        scores = np.zeros((2, 3))
        outputs = {"scores": scores}

        assert find_output(outputs, ("confidence", "scores")) is not None

    def test_find_output_missing(self):
        with pytest.raises(MalformedOutputError, match="available outputs"):
            find_output({"other": np.zeros(1)}, ("confidence", "scores"))

    def test_expect_shape(self):
        array = np.zeros((1, 5, 4))

        assert expect_shape(array, (1, None, 4), "coordinates") == (1, 5, 4)

        with pytest.raises(MalformedOutputError, match="rank"):
            expect_shape(array, (None, 4), "coordinates")

        with pytest.raises(MalformedOutputError, match="axis 2"):
            expect_shape(array, (1, None, 3), "coordinates")
