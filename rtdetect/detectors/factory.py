"""Backend construction from configuration"""

import logging
from typing import Any, Optional

from ..config import BackendConfig, BackendKind
from .base import ObjectDetector
from .dnn import DnnDetector
from .observation import ObservationDetector

logger = logging.getLogger(__name__)


def create_detector(config: BackendConfig, runtime: Optional[Any] = None) -> ObjectDetector:
    """
    Create the detector backend described by a configuration

    Args:
        config: Backend configuration
        runtime: Optional pre-built model runtime (DNN) or detection model
            (observation), mainly for tests

    Returns:
        ObjectDetector instance, possibly without a loaded model
    """
    if config.kind == BackendKind.DNN:
        detector = DnnDetector(config, runtime=runtime)
    elif config.kind == BackendKind.OBSERVATION:
        detector = ObservationDetector(config, model=runtime)
    else:
        raise ValueError(f"Unsupported backend kind: {config.kind}")

    logger.info(f"Created {config.kind.value} backend '{config.name}' (loaded={detector.is_loaded})")
    return detector
