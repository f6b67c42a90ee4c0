# rtdetect/config.py

"""Backend configuration for RT Detect"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .core.labels import COCO_80_LABELS, COCO_LABELS, load_class_names
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BackendKind(str, Enum):
    """How a backend gets from model outputs to detections"""

    DNN = "dnn"  # raw tensors decoded here
    OBSERVATION = "observation"  # runtime returns decoded, suppressed boxes


class Architecture(str, Enum):
    """Raw output layout of a DNN backend's model"""

    ANCHOR_GRID = "anchor_grid"  # [1, anchors, classes] with background at 0
    PREFILTERED = "prefiltered"  # [detections, classes] without background


class ResizeMode(str, Enum):
    STRETCH = "stretch"
    LETTERBOX = "letterbox"


@dataclass(frozen=True)
class BackendConfig:
    """Configuration of one detector backend, fixed for its lifetime"""

    name: str
    model_path: str
    kind: BackendKind = BackendKind.DNN
    architecture: Architecture = Architecture.ANCHOR_GRID
    config_path: Optional[str] = None  # second file for two-file formats

    # === MODEL INPUT ===
    input_size: int = 300  # square model input dimension
    scale: float = 1.0 / 255.0  # pixel scale applied before inference
    mean: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    swap_rb: bool = True  # frames are BGR, most models expect RGB
    resize_mode: ResizeMode = ResizeMode.STRETCH

    # === DECODING ===
    confidence_threshold: float = 0.3
    iou_threshold: float = 0.5
    label_offset: Optional[int] = None  # None picks the architecture default
    labels: Tuple[str, ...] = COCO_LABELS
    confidence_outputs: Tuple[str, ...] = ("confidence", "scores")
    coordinate_outputs: Tuple[str, ...] = ("coordinates", "boxes")

    # === RUNTIME ===
    compute_backend: str = "cpu"  # cpu, cuda or opencl

    def __post_init__(self):
        # Accept plain strings from YAML or keyword arguments
        object.__setattr__(self, "kind", BackendKind(self.kind))
        object.__setattr__(self, "architecture", Architecture(self.architecture))
        object.__setattr__(self, "resize_mode", ResizeMode(self.resize_mode))
        object.__setattr__(self, "labels", tuple(self.labels))
        object.__setattr__(self, "mean", tuple(self.mean))
        object.__setattr__(self, "confidence_outputs", tuple(self.confidence_outputs))
        object.__setattr__(self, "coordinate_outputs", tuple(self.coordinate_outputs))

        if self.label_offset is None:
            # Pre-filtered models drop the background class from their class
            # space while the label table keeps it at index 0.
            default_offset = 1 if (
                self.kind == BackendKind.DNN
                and self.architecture == Architecture.PREFILTERED
            ) else 0
            object.__setattr__(self, "label_offset", default_offset)

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for logging and model info"""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["kind"] = self.kind.value
        data["architecture"] = self.architecture.value
        data["resize_mode"] = self.resize_mode.value
        data["labels"] = len(self.labels)
        return data


@dataclass(frozen=True)
class ModelPreset:
    """Known model with its display metadata and backend defaults"""

    display_name: str
    framework: str
    model_size: str
    kind: BackendKind
    architecture: Architecture
    input_size: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def input_size_label(self) -> str:
        return f"{self.input_size}x{self.input_size}"

    def create_config(self, name: str, model_path: str, **overrides) -> BackendConfig:
        """Build a BackendConfig for this preset"""
        params = dict(
            name=name,
            model_path=model_path,
            kind=self.kind,
            architecture=self.architecture,
            input_size=self.input_size,
        )
        params.update(self.extra)
        params.update(overrides)
        return BackendConfig(**params)


MODEL_PRESETS: Dict[str, ModelPreset] = {
    "ssd_mobilenet": ModelPreset(
        display_name="SSD MobileNet (anchor grid)",
        framework="OpenCV DNN",
        model_size="27.0 MB",
        kind=BackendKind.DNN,
        architecture=Architecture.ANCHOR_GRID,
        input_size=300,
    ),
    "mobilenet_v2_ssdlite": ModelPreset(
        display_name="MobileNetV2 SSDLite (pre-filtered)",
        framework="OpenCV DNN",
        model_size="8.8 MB",
        kind=BackendKind.DNN,
        architecture=Architecture.PREFILTERED,
        input_size=300,
    ),
    "yolov3_tiny": ModelPreset(
        display_name="YOLOv3-Tiny (detection model)",
        framework="OpenCV DNN DetectionModel",
        model_size="35.5 MB",
        kind=BackendKind.OBSERVATION,
        architecture=Architecture.ANCHOR_GRID,
        input_size=416,
        extra={"labels": COCO_80_LABELS},
    ),
}


def validate_backend_config(config: BackendConfig) -> List[str]:
    """
    Validate a backend configuration

    Args:
        config: BackendConfig instance

    Returns:
        List of validation errors
    """
    errors = []

    if not config.name:
        errors.append("name must not be empty")

    if not config.model_path:
        errors.append("model_path must not be empty")

    if config.input_size <= 0:
        errors.append(f"input_size must be positive, got {config.input_size}")

    if not 0 <= config.confidence_threshold <= 1:
        errors.append(
            f"confidence_threshold must be between 0 and 1, got {config.confidence_threshold}"
        )

    if not 0 <= config.iou_threshold <= 1:
        errors.append(f"iou_threshold must be between 0 and 1, got {config.iou_threshold}")

    if config.label_offset < 0:
        errors.append(f"label_offset must be non-negative, got {config.label_offset}")

    if not config.labels:
        errors.append("labels is empty, detections cannot be named")

    if not config.confidence_outputs or not config.coordinate_outputs:
        errors.append("output name aliases must not be empty")

    if config.compute_backend.lower() not in ("cpu", "cuda", "opencl"):
        errors.append(f"compute_backend must be cpu, cuda or opencl, got {config.compute_backend}")

    return errors


def _config_from_entry(name: str, entry: Dict[str, Any], base_dir: Path) -> BackendConfig:
    entry = dict(entry or {})
    preset_name = entry.pop("preset", None)
    labels_path = entry.pop("labels_path", None)

    if labels_path is not None:
        entry["labels"] = load_class_names(base_dir / labels_path)

    model_path = entry.pop("model_path", None)
    if model_path is None:
        raise ConfigurationError(f"Backend '{name}' is missing model_path")
    model_path = str(base_dir / model_path)
    if entry.get("config_path"):
        entry["config_path"] = str(base_dir / entry["config_path"])

    known = {f.name for f in fields(BackendConfig)}
    unknown = sorted(set(entry) - known)
    if unknown:
        raise ConfigurationError(f"Backend '{name}' has unknown keys: {unknown}")

    try:
        if preset_name is not None:
            if preset_name not in MODEL_PRESETS:
                raise ConfigurationError(
                    f"Backend '{name}' uses unknown preset '{preset_name}', "
                    f"available: {sorted(MODEL_PRESETS)}"
                )
            return MODEL_PRESETS[preset_name].create_config(name, model_path, **entry)
        return BackendConfig(name=name, model_path=model_path, **entry)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Backend '{name}' is invalid: {e}") from e


def load_backend_configs(config_path: Union[str, Path]) -> Dict[str, BackendConfig]:
    """
    Load backend configurations from a YAML file

    Relative model and label paths are resolved against the file's directory.

    Args:
        config_path: YAML file with a top-level 'backends' mapping

    Returns:
        Configurations keyed by backend name

    Raises:
        ConfigurationError: If the file is malformed or a backend is invalid
    """
    config_path = Path(config_path)
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    backends = data.get("backends")
    if not isinstance(backends, dict) or not backends:
        raise ConfigurationError(f"No 'backends' mapping found in {config_path}")

    configs = {}
    for name, entry in backends.items():
        config = _config_from_entry(str(name), entry, config_path.parent)
        errors = validate_backend_config(config)
        if errors:
            raise ConfigurationError(f"Backend '{name}': " + "; ".join(errors))
        configs[config.name] = config

    logger.info(f"Loaded {len(configs)} backend configurations from {config_path}")
    return configs
