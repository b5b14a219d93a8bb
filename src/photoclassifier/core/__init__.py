"""Core components for PhotoClassifier."""

from .camera import Camera
from .classifier import Classifier, TFLiteClassifier, create_classifier
from .config import Config
from .errors import (
    ClassificationError,
    ImageAcquisitionError,
    InvalidDimensionError,
    PhotoClassifierError,
)
from .pipeline import ClassificationPipeline
from .renderer import ResultRenderer
from .result import ClassBar, RenderState
from .tensor import TensorPreparer

__all__ = [
    "Camera",
    "Classifier",
    "TFLiteClassifier",
    "create_classifier",
    "Config",
    "ClassificationError",
    "ImageAcquisitionError",
    "InvalidDimensionError",
    "PhotoClassifierError",
    "ClassificationPipeline",
    "ResultRenderer",
    "ClassBar",
    "RenderState",
    "TensorPreparer",
]
