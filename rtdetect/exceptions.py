"""Custom exceptions for RT Detect"""


class RTDetectError(Exception):
    """Base exception for RT Detect"""
    pass


class DetectorError(RTDetectError):
    """Raised when detector operations fail"""
    pass


class ModelLoadError(DetectorError):
    """Raised when a backend cannot load its model"""
    pass


class PreprocessingError(DetectorError):
    """Raised when a frame cannot be converted to a model input tensor"""
    pass


class InferenceError(DetectorError):
    """Raised when the model runtime fails during a forward pass"""
    pass


class MalformedOutputError(DetectorError):
    """Raised when model outputs are missing or shaped unexpectedly"""
    pass


class ConfigurationError(RTDetectError):
    """Raised when configuration is invalid"""
    pass
