"""Screen modules for PhotoClassifier mobile UI."""

from .gallery_picker import GalleryPicker
from .main_screen import MainScreen

__all__ = ["GalleryPicker", "MainScreen"]
