"""Frame preprocessing for model input"""

import logging
from typing import Tuple

import cv2
import numpy as np

from ..config import ResizeMode
from ..exceptions import PreprocessingError


class ImagePreprocessor:
    """
    Resize a camera frame and pack it as an NCHW float blob

    The reference policy stretches the frame to the target size without
    preserving aspect ratio, so normalized output boxes map straight back to
    the full frame. Letterbox mode pads to preserve aspect ratio instead; box
    coordinates then refer to the padded square, not the original frame.
    """

    def __init__(self,
                 target_width: int,
                 target_height: int,
                 scale: float = 1.0 / 255.0,
                 mean: Tuple[float, float, float] = (0.0, 0.0, 0.0),
                 swap_rb: bool = True,
                 resize_mode: ResizeMode = ResizeMode.STRETCH,
                 interpolation: int = cv2.INTER_LINEAR):
        """
        Initialize preprocessor

        Args:
            target_width: Model input width
            target_height: Model input height
            scale: Multiplier applied to pixel values
            mean: Per-channel mean subtracted before scaling
            swap_rb: Swap the first and third channels (BGR to RGB)
            resize_mode: Stretch or letterbox
            interpolation: OpenCV interpolation flag
        """
        self.logger = logging.getLogger(f"{__name__}.ImagePreprocessor")
        self.target_width = target_width
        self.target_height = target_height
        self.scale = scale
        self.mean = mean
        self.swap_rb = swap_rb
        self.resize_mode = ResizeMode(resize_mode)
        self.interpolation = interpolation

    def resize(self, frame: np.ndarray) -> np.ndarray:
        """
        Resize frame to the target dimensions

        Raises:
            PreprocessingError: If the frame is empty or not 3-channel
        """
        if frame is None or getattr(frame, "size", 0) == 0:
            raise PreprocessingError("Empty frame")

        if frame.ndim != 3 or frame.shape[2] != 3:
            raise PreprocessingError(f"Expected HxWx3 frame, got shape {frame.shape}")

        try:
            if self.resize_mode == ResizeMode.LETTERBOX:
                return self._letterbox(frame)
            return cv2.resize(frame, (self.target_width, self.target_height),
                              interpolation=self.interpolation)
        except cv2.error as e:
            raise PreprocessingError(f"Resize failed: {e}") from e

    def preprocess(self, frame: np.ndarray) -> np.ndarray:
        """
        Convert a frame into the model input blob

        Args:
            frame: HxWx3 BGR image of any size

        Returns:
            Float32 array of shape [1, 3, target_height, target_width]

        Raises:
            PreprocessingError: If the frame cannot be converted
        """
        resized = self.resize(frame)

        try:
            return cv2.dnn.blobFromImage(
                resized, self.scale, (self.target_width, self.target_height),
                self.mean, self.swap_rb, crop=False
            )
        except cv2.error as e:
            raise PreprocessingError(f"Blob conversion failed: {e}") from e

    def _letterbox(self, frame: np.ndarray) -> np.ndarray:
        height, width = frame.shape[:2]

        scale = min(self.target_width / width, self.target_height / height)
        new_width = int(width * scale)
        new_height = int(height * scale)

        resized = cv2.resize(frame, (new_width, new_height),
                             interpolation=self.interpolation)

        # Pad to target size
        top = (self.target_height - new_height) // 2
        bottom = self.target_height - new_height - top
        left = (self.target_width - new_width) // 2
        right = self.target_width - new_width - left

        return cv2.copyMakeBorder(
            resized, top, bottom, left, right,
            cv2.BORDER_CONSTANT, value=(114, 114, 114)
        )
