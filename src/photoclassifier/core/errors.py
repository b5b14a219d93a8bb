"""
Exception types for PhotoClassifier.
"""


class PhotoClassifierError(Exception):
    """Base class for all PhotoClassifier errors."""


class ImageAcquisitionError(PhotoClassifierError):
    """Camera or gallery did not produce a usable image."""


class InvalidDimensionError(PhotoClassifierError):
    """Image handed to the tensor preparer is not S x S x 3."""

    def __init__(self, shape: tuple[int, ...], size: int):
        self.shape = tuple(shape)
        self.size = size
        super().__init__(f"Expected image of shape ({size}, {size}, 3), got {self.shape}")


class ClassificationError(PhotoClassifierError):
    """The classifier failed to produce confidences."""
