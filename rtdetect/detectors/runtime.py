"""Model runtime adapters around OpenCV's DNN module"""

import logging
from typing import Dict, List, Optional, Protocol

import cv2
import numpy as np

from ..exceptions import InferenceError, ModelLoadError


class ModelRuntime(Protocol):
    """Opaque inference entity returning named output arrays"""

    output_names: List[str]

    def run(self, blob: np.ndarray) -> Dict[str, np.ndarray]:
        ...


_COMPUTE_BACKENDS = {
    'cpu': (cv2.dnn.DNN_BACKEND_OPENCV, cv2.dnn.DNN_TARGET_CPU),
    'cuda': (cv2.dnn.DNN_BACKEND_CUDA, cv2.dnn.DNN_TARGET_CUDA),
    'opencl': (cv2.dnn.DNN_BACKEND_OPENCV, cv2.dnn.DNN_TARGET_OPENCL),
}


def read_net(model_path: str, config_path: Optional[str] = None) -> "cv2.dnn.Net":
    """
    Load a network with cv2.dnn.readNet

    Raises:
        ModelLoadError: If OpenCV cannot read the model or returns an empty net
    """
    try:
        net = cv2.dnn.readNet(model_path, config_path or "")
    except cv2.error as e:
        raise ModelLoadError(f"Could not read model {model_path}: {e}") from e

    if net is None or net.empty():
        raise ModelLoadError(f"Model {model_path} loaded as an empty network")
    return net


def set_compute_backend(net: "cv2.dnn.Net", backend: str = 'cpu') -> None:
    """
    Set computation backend

    Args:
        net: OpenCV network
        backend: 'cpu', 'cuda', or 'opencl'
    """
    preferable_backend, target = _COMPUTE_BACKENDS.get(
        backend.lower(), _COMPUTE_BACKENDS['cpu'])
    net.setPreferableBackend(preferable_backend)
    net.setPreferableTarget(target)


class DnnRuntime:
    """Named-output runtime over a cv2.dnn.Net"""

    def __init__(self, model_path: str, config_path: Optional[str] = None,
                 compute_backend: str = 'cpu'):
        """
        Load the network and resolve its output layer names

        Args:
            model_path: Model weights (ONNX, TensorFlow .pb, Caffe, Darknet...)
            config_path: Optional text graph / config for two-file formats
            compute_backend: 'cpu', 'cuda', or 'opencl'

        Raises:
            ModelLoadError: If the model cannot be loaded
        """
        self.logger = logging.getLogger(f"{__name__}.DnnRuntime")
        self.net = read_net(model_path, config_path)
        self.output_names = list(self.net.getUnconnectedOutLayersNames())
        self.set_backend(compute_backend)
        self.logger.info(f"Loaded {model_path} with outputs {self.output_names}")

    def set_backend(self, backend: str = 'cpu') -> None:
        set_compute_backend(self.net, backend)
        self.logger.info(f"Set backend to: {backend}")

    def run(self, blob: np.ndarray) -> Dict[str, np.ndarray]:
        """
        Run a forward pass

        Args:
            blob: NCHW input tensor

        Returns:
            Output arrays keyed by output layer name

        Raises:
            InferenceError: If OpenCV fails during the forward pass
        """
        try:
            self.net.setInput(blob)
            outputs = self.net.forward(self.output_names)
        except cv2.error as e:
            raise InferenceError(f"Forward pass failed: {e}") from e

        return dict(zip(self.output_names, outputs))
