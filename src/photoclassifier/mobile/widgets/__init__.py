"""Widget modules for PhotoClassifier mobile UI."""

from .confidence_bar import ConfidenceBar, ConfidencePanel
from .image_preview import ImagePreview

__all__ = ["ConfidenceBar", "ConfidencePanel", "ImagePreview"]
