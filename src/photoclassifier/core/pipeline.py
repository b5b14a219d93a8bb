"""
Classification pipeline orchestrator.

Coordinates one classification:
1. Resize to the model input size
2. Tensor preparation
3. Model inference
4. Render state construction
"""

import dataclasses
import logging
import time
from pathlib import Path
from typing import Any

import numpy as np

from .classifier import Classifier, create_classifier
from .errors import ClassificationError
from .image_source import load_image
from .labels import CLASSES
from .renderer import ResultRenderer
from .result import RenderState
from .tensor import TensorPreparer

logger = logging.getLogger(__name__)


class ClassificationPipeline:
    """
    Runs an image through preparation, the classifier and the renderer.

    Classifier failures never escape: they come back as a failed
    RenderState so the UI can show them and accept the next photo.

    Usage:
        pipeline = ClassificationPipeline(config.as_dict)
        state = pipeline.classify_image(image)
    """

    def __init__(self, config: dict[str, Any], classifier: Classifier | None = None):
        """
        Initialize the pipeline.

        Args:
            config: Full configuration dictionary containing:
                - model: Model path and input size
                - labels: Ordered class names (optional)
                - display: Bar scale and palette
            classifier: Classifier to use. Built from the model section if omitted.
        """
        self.config = config
        model_config = config.get("model", {})

        self.labels: tuple[str, ...] = tuple(config.get("labels") or CLASSES)
        self.preparer = TensorPreparer(model_config)
        self.renderer = ResultRenderer(self.labels, config.get("display", {}))
        self.classifier = classifier if classifier is not None else create_classifier(model_config)

    def classify_image(self, image: np.ndarray) -> RenderState:
        """
        Classify an RGB image of any size.

        Args:
            image: (H, W, 3) uint8 RGB array

        Returns:
            RenderState, failed if the classifier could not run
        """
        start_time = time.perf_counter()

        resized = self.preparer.resize(image)
        tensor = self.preparer.prepare(resized)

        try:
            confidences = np.asarray(self.classifier.classify(tensor), dtype=np.float32).ravel()
            if confidences.size != len(self.labels):
                raise ClassificationError(
                    f"Model returned {confidences.size} confidences "
                    f"for {len(self.labels)} classes"
                )
            if not np.all(np.isfinite(confidences)):
                raise ClassificationError("Model returned non-finite confidences")
        except ClassificationError as e:
            logger.error(f"Classification error: {e}")
            state = self.renderer.failure(str(e))
        else:
            state = self.renderer.render(confidences)
            logger.info(f"Classified as {state.top_label} ({state.top_confidence:.2f})")

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        return dataclasses.replace(state, processing_time_ms=elapsed_ms)

    def classify_file(self, path: str | Path) -> RenderState:
        """
        Load an image file and classify it.

        Raises:
            ImageAcquisitionError: If the file cannot be loaded.
        """
        return self.classify_image(load_image(path))
