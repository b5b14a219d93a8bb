"""
Photo preview widget for PhotoClassifier.

Shows the square thumbnail of the photo being classified.
"""

import logging

import cv2
import numpy as np
from kivy.graphics.texture import Texture
from kivy.uix.image import Image

logger = logging.getLogger(__name__)


class ImagePreview(Image):
    """
    Kivy Image widget that displays RGB numpy arrays.
    """

    def __init__(self, **kwargs):
        """Initialize the preview widget."""
        kwargs.setdefault("fit_mode", "contain")
        super().__init__(**kwargs)

        self._create_placeholder()

    def _create_placeholder(self):
        """Show a gray square until the first photo arrives."""
        placeholder = np.full((224, 224, 3), 220, dtype=np.uint8)
        cv2.putText(
            placeholder,
            "No photo",
            (55, 118),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.7,
            (140, 140, 140),
            2,
        )
        self.show(placeholder)

    def show(self, image: np.ndarray) -> None:
        """
        Display an image (must be called from main thread).

        Args:
            image: (H, W, 3) uint8 RGB array.
        """
        height, width = image.shape[:2]

        # Kivy textures are bottom-up
        flipped = cv2.flip(image, 0)

        if (
            self.texture is None
            or self.texture.width != width
            or self.texture.height != height
        ):
            self.texture = Texture.create(size=(width, height), colorfmt="rgb")

        self.texture.blit_buffer(
            np.ascontiguousarray(flipped).tobytes(), colorfmt="rgb", bufferfmt="ubyte"
        )
        self.canvas.ask_update()

    def clear(self) -> None:
        """Go back to the placeholder."""
        self._create_placeholder()
