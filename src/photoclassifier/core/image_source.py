"""
Image loading for gallery picks and files.

All loaders return RGB uint8 arrays; OpenCV's BGR order never leaves
this module.
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from .errors import ImageAcquisitionError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".webp")


def to_rgb(image: np.ndarray) -> np.ndarray:
    """
    Convert an OpenCV-decoded image (gray, BGR or BGRA) to RGB.

    Raises:
        ImageAcquisitionError: If the array is not a recognizable image.
    """
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
    raise ImageAcquisitionError(f"Unsupported image shape: {image.shape}")


def load_image(path: str | Path) -> np.ndarray:
    """
    Load an image file as RGB.

    Args:
        path: Image file path (from the gallery picker or command line)

    Returns:
        (H, W, 3) uint8 RGB array

    Raises:
        ImageAcquisitionError: If the file is missing or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageAcquisitionError(f"Image file not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageAcquisitionError(f"Could not decode image: {path}")

    logger.info(f"Loaded image {path.name} ({image.shape[1]}x{image.shape[0]})")
    return to_rgb(image)


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode an encoded image (JPEG, PNG, ...) from memory as RGB.

    Raises:
        ImageAcquisitionError: If the bytes are not a decodable image.
    """
    if not data:
        raise ImageAcquisitionError("Empty image data")

    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageAcquisitionError("Could not decode image data")
    return to_rgb(image)


def crop_center_square(image: np.ndarray) -> np.ndarray:
    """Crop the largest centered square, used for the on-screen thumbnail."""
    height, width = image.shape[:2]
    side = min(height, width)
    top = (height - side) // 2
    left = (width - side) // 2
    return image[top : top + side, left : left + side]


def is_image_file(path: str | Path) -> bool:
    """Check the extension against the formats the gallery offers."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS
