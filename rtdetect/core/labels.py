"""Class-label tables shared by detector backends"""

import logging
from pathlib import Path
from typing import Tuple, Union

logger = logging.getLogger(__name__)

# Index 0 is reserved for the background class.
COCO_LABELS: Tuple[str, ...] = (
    "background", "person", "bicycle", "car", "motorcycle", "airplane", "bus",
    "train", "truck", "boat", "traffic light", "fire hydrant", "street sign",
    "stop sign", "parking meter", "bench", "bird", "cat", "dog", "horse",
    "sheep", "cow", "elephant", "bear", "zebra", "giraffe", "hat", "backpack",
    "umbrella", "shoe", "eye glasses", "handbag", "tie", "suitcase", "frisbee",
    "skis", "snowboard", "sports ball", "kite", "baseball bat",
    "baseball glove", "skateboard", "surfboard", "tennis racket", "bottle",
    "plate", "wine glass", "cup", "fork", "knife", "spoon", "bowl", "banana",
    "apple", "sandwich", "orange", "broccoli", "carrot", "hot dog", "pizza",
    "donut", "cake", "chair", "couch", "potted plant", "bed", "mirror",
    "dining table", "window", "desk", "toilet", "door", "tv", "laptop",
    "mouse", "remote", "keyboard", "cell phone", "microwave", "oven",
    "toaster", "sink", "refrigerator", "blender", "book", "clock", "vase",
    "scissors", "teddy bear", "hair drier", "toothbrush", "hair brush",
)

# Entries of the 91-id table that the 80-class training set never uses
_UNUSED_COCO_IDS = frozenset({
    "background", "street sign", "hat", "shoe", "eye glasses", "plate",
    "mirror", "window", "desk", "door", "blender", "hair brush",
})

# Contiguous 80-class table used by Darknet/YOLO models, person at index 0.
COCO_80_LABELS: Tuple[str, ...] = tuple(
    name for name in COCO_LABELS if name not in _UNUSED_COCO_IDS
)

FALLBACK_LABEL = "object"


def load_class_names(names_path: Union[str, Path]) -> Tuple[str, ...]:
    """
    Load a class-label table from a .names file

    Args:
        names_path: Text file with one label per line

    Returns:
        Immutable label table in file order
    """
    names_path = Path(names_path)
    with open(names_path, 'r') as f:
        names = tuple(line.strip() for line in f.readlines() if line.strip())

    logger.info(f"Loaded {len(names)} class names from {names_path}")
    return names


def clamped_label(labels: Tuple[str, ...], index: int) -> str:
    """Label at index, clamped into the table bounds"""
    if not labels:
        return FALLBACK_LABEL
    return labels[max(0, min(index, len(labels) - 1))]


def label_or_fallback(labels: Tuple[str, ...], index: int) -> str:
    """Label at index, or the generic fallback when out of range"""
    if 0 <= index < len(labels):
        return labels[index]
    return FALLBACK_LABEL
