"""OpenCV DNN detector decoding raw output tensors"""

from typing import List, Optional

import numpy as np

from ..config import BackendConfig
from ..core import Detection
from ..exceptions import ModelLoadError
from .base import ObjectDetector
from .decoders import decode_outputs
from .preprocess import ImagePreprocessor
from .runtime import DnnRuntime, ModelRuntime


class DnnDetector(ObjectDetector):
    """Detector that runs a raw-output model and decodes it by architecture"""

    def __init__(self, config: BackendConfig,
                 runtime: Optional[ModelRuntime] = None):
        """
        Initialize DNN detector

        A model that fails to load is logged once; the detector then returns
        empty results for every frame.

        Args:
            config: Backend configuration
            runtime: Pre-built runtime, loaded from config.model_path when None
        """
        super().__init__(config)
        self.preprocessor = ImagePreprocessor(
            target_width=config.input_size,
            target_height=config.input_size,
            scale=config.scale,
            mean=config.mean,
            swap_rb=config.swap_rb,
            resize_mode=config.resize_mode,
        )

        self.runtime = runtime
        if self.runtime is None:
            try:
                self.runtime = DnnRuntime(
                    config.model_path, config.config_path, config.compute_backend)
            except ModelLoadError as e:
                self.logger.error(f"Failed to load model for backend '{config.name}': {e}")

        if self.runtime is not None:
            self.logger.info(
                f"Initialized {config.architecture.value} detector '{config.name}' "
                f"with {len(config.labels)} classes, input {config.input_size}"
            )

    @property
    def is_loaded(self) -> bool:
        return self.runtime is not None

    def set_backend(self, backend: str = 'cpu') -> None:
        """
        Set computation backend

        Args:
            backend: 'cpu', 'cuda', or 'opencl'
        """
        if isinstance(self.runtime, DnnRuntime):
            self.runtime.set_backend(backend)

    def _preprocess(self, frame: np.ndarray) -> np.ndarray:
        return self.preprocessor.preprocess(frame)

    def _infer(self, model_input: np.ndarray, frame: np.ndarray) -> List[Detection]:
        outputs = self.runtime.run(model_input)
        return decode_outputs(self.config, outputs, strict=True)
