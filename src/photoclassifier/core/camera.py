"""
Still capture from a camera.

Opens the device only for the duration of one capture, so the camera
is free again as soon as the photo is taken.
"""

import logging
from typing import Any

import cv2
import numpy as np

from .errors import ImageAcquisitionError
from .image_source import to_rgb

logger = logging.getLogger(__name__)


class Camera:
    """
    Camera abstraction for taking single photos.

    Supports:
    - USB webcams and built-in cameras
    - Video files for testing
    - Configurable resolution, backend and warm-up frames

    Usage:
        camera = Camera(config['camera'])
        image = camera.capture()

    Or as context manager:
        with Camera(config['camera']) as camera:
            image = camera.read()
    """

    # Backend mappings for OpenCV
    BACKENDS = {
        "CAP_ANY": cv2.CAP_ANY,
        "CAP_MSMF": cv2.CAP_MSMF,
        "CAP_DSHOW": cv2.CAP_DSHOW,
        "CAP_V4L2": cv2.CAP_V4L2,
        "CAP_AVFOUNDATION": cv2.CAP_AVFOUNDATION,
        "CAP_ANDROID": cv2.CAP_ANDROID,
    }

    def __init__(self, config: dict[str, Any] | None = None):
        """
        Initialize camera with configuration.

        Args:
            config: Camera configuration dictionary with keys:
                - source: int (device index) or str (video file path)
                - backend: str (CAP_ANY, CAP_DSHOW, etc.)
                - width: int
                - height: int
                - warmup: int - frames discarded before the capture
        """
        config = config or {}
        self.source = config.get("source", 0)
        self.backend_name = config.get("backend", "CAP_ANY")
        self.width = config.get("width", 1280)
        self.height = config.get("height", 720)
        self.warmup = max(0, int(config.get("warmup", 5)))

        self._cap: cv2.VideoCapture | None = None

    @property
    def backend(self) -> int:
        """Get OpenCV backend constant."""
        return self.BACKENDS.get(self.backend_name, cv2.CAP_ANY)

    @property
    def is_open(self) -> bool:
        """Check if camera is open and ready."""
        return self._cap is not None and self._cap.isOpened()

    def open(self) -> None:
        """
        Open the camera.

        Raises:
            ImageAcquisitionError: If the source cannot be opened.
        """
        if self.is_open:
            return

        if isinstance(self.source, str):
            self._cap = cv2.VideoCapture(self.source)
        else:
            self._cap = cv2.VideoCapture(self.source, self.backend)

        if not self._cap.isOpened():
            self.release()
            raise ImageAcquisitionError(f"Failed to open camera source: {self.source}")

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        logger.info(f"Camera opened: source={self.source}, resolution={self.width}x{self.height}")

    def read(self) -> np.ndarray:
        """
        Read one frame as RGB.

        Raises:
            ImageAcquisitionError: If the camera is closed or the read fails.
        """
        if not self.is_open:
            raise ImageAcquisitionError("Camera is not open")

        ret, frame = self._cap.read()  # type: ignore
        if not ret or frame is None:
            raise ImageAcquisitionError("Failed to read frame from camera")
        return to_rgb(frame)

    def capture(self) -> np.ndarray:
        """
        Take a single photo: open, warm up, read, release.

        Returns:
            (H, W, 3) uint8 RGB array
        """
        self.open()
        try:
            for _ in range(self.warmup):
                self._cap.grab()  # type: ignore
            image = self.read()
        finally:
            self.release()

        logger.info(f"Captured photo {image.shape[1]}x{image.shape[0]}")
        return image

    def release(self) -> None:
        """Release camera resources."""
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.debug("Camera released")

    def __enter__(self) -> "Camera":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.release()

    @staticmethod
    def list_available_cameras(max_index: int = 5) -> list[int]:
        """
        List available camera indices.

        Args:
            max_index: Maximum camera index to check.

        Returns:
            List of available camera indices.
        """
        available = []
        for i in range(max_index):
            cap = cv2.VideoCapture(i)
            if cap.isOpened():
                available.append(i)
                cap.release()
        return available
