"""Detection data structure"""

from dataclasses import dataclass
from typing import NamedTuple


class BoundingBox(NamedTuple):
    """Axis-aligned box in normalized [0, 1] coordinates"""

    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        """Calculate bounding box area"""
        return self.width * self.height

    def to_xyxy(self) -> tuple:
        """Get bounding box in top-left, bottom-right format"""
        return (self.x, self.y, self.x_max, self.y_max)

    @classmethod
    def from_yxyx(cls, y_min: float, x_min: float,
                  y_max: float, x_max: float) -> "BoundingBox":
        """Build from the (yMin, xMin, yMax, xMax) encoding used by SSD models"""
        return cls(
            x=float(x_min),
            y=float(y_min),
            width=float(x_max - x_min),
            height=float(y_max - y_min),
        )


@dataclass(frozen=True)
class Detection:
    """Single labeled object detection for one frame"""

    bbox: BoundingBox  # normalized (x, y, width, height)
    label: str  # Entry from the backend's class-label table
    confidence: float  # Confidence score [0, 1]

    def flipped_vertically(self) -> "Detection":
        """
        Mirror the box about the horizontal center line

        Callers whose display origin is on the opposite vertical edge from
        the frame source use this before drawing.
        """
        x, y, w, h = self.bbox
        return Detection(
            bbox=BoundingBox(x, 1.0 - y - h, w, h),
            label=self.label,
            confidence=self.confidence,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation"""
        return {
            "bbox": list(self.bbox),
            "label": self.label,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Detection":
        """Create from dictionary representation"""
        return cls(
            bbox=BoundingBox(*(float(v) for v in data["bbox"])),
            label=data["label"],
            confidence=float(data["confidence"]),
        )
