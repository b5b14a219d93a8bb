"""
PhotoClassifier Mobile - Cross-platform Kivy UI.

Works on desktop (Windows, macOS, Linux) and Android:
- Take a picture with the camera or pick one from the gallery
- Show the photo, the top class and a confidence bar per class
"""

from .app import PhotoClassifierApp

__all__ = ["PhotoClassifierApp"]
