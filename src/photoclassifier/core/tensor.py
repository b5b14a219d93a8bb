"""
Image to tensor conversion for the classification model.

The model expects a 1 x S x S x 3 float32 input with each RGB channel
scaled to [0, 1]. The tensor is kept flat (length 3 * S * S, row-major,
R, G, B per pixel) until it is handed to the classifier.
"""

from typing import Any

import cv2
import numpy as np

from .errors import InvalidDimensionError

DEFAULT_SIZE = 224


class TensorPreparer:
    """
    Converts RGB images into normalized model input tensors.

    Usage:
        preparer = TensorPreparer(config['model'])
        tensor = preparer.prepare(preparer.resize(image))
    """

    def __init__(self, config: dict[str, Any] | None = None):
        """
        Initialize the tensor preparer.

        Args:
            config: Model configuration with keys:
                - size: int - Target edge length S (default 224)
        """
        config = config or {}
        self.size = int(config.get("size", DEFAULT_SIZE))

    @property
    def tensor_length(self) -> int:
        """Number of floats in a prepared tensor."""
        return 3 * self.size * self.size

    def resize(self, image: np.ndarray) -> np.ndarray:
        """
        Resize an image to exactly S x S.

        Aspect ratio is not preserved, matching how the model was fed
        during training.
        """
        height, width = image.shape[:2]
        if (height, width) == (self.size, self.size):
            return image

        if height > self.size or width > self.size:
            interpolation = cv2.INTER_AREA
        else:
            interpolation = cv2.INTER_LINEAR
        return cv2.resize(image, (self.size, self.size), interpolation=interpolation)

    def prepare(self, image: np.ndarray) -> np.ndarray:
        """
        Normalize an S x S RGB image into a flat float32 tensor.

        Args:
            image: (S, S, 3) uint8 RGB array

        Returns:
            Array of length 3 * S * S with values in [0, 1]

        Raises:
            InvalidDimensionError: If the image is not (S, S, 3).
        """
        if image.ndim != 3 or image.shape != (self.size, self.size, 3):
            raise InvalidDimensionError(image.shape, self.size)

        # C-order ravel of (row, col, channel) is row-major, RGB interleaved
        pixels = np.ascontiguousarray(image, dtype=np.uint8).ravel()
        return pixels.astype(np.float32) / np.float32(255.0)

    def to_model_input(self, tensor: np.ndarray) -> np.ndarray:
        """Reshape a flat tensor to the model's (1, S, S, 3) input shape."""
        return tensor.reshape(1, self.size, self.size, 3)
