"""
PhotoClassifier - Photo Classification App

Takes or picks a photo, runs it through a bundled image classification
model and shows the confidence of every class as a colored bar.
"""

__version__ = "0.1.0"
__author__ = "PhotoClassifier Team"

from .core.pipeline import ClassificationPipeline
from .core.result import ClassBar, RenderState

__all__ = ["ClassificationPipeline", "ClassBar", "RenderState", "__version__"]
