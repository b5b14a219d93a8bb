"""
Image classifier backed by a bundled TFLite model.

The interpreter is created for each classification and dropped right
after it, so no model state survives between calls.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable

import numpy as np

from .errors import ClassificationError
from .tensor import DEFAULT_SIZE

logger = logging.getLogger(__name__)


@runtime_checkable
class Classifier(Protocol):
    """Protocol for image classifiers."""

    def classify(self, tensor: np.ndarray) -> np.ndarray:
        """
        Classify a prepared tensor.

        Args:
            tensor: Flat float32 array of length 3 * S * S.

        Returns:
            1-D float32 array with one confidence per class.

        Raises:
            ClassificationError: If the model cannot be run.
        """
        ...


def _load_interpreter_class() -> type:
    """Return the TFLite Interpreter class from whichever runtime is installed."""
    try:
        from tflite_runtime.interpreter import Interpreter
    except ImportError:
        try:
            from tensorflow.lite import Interpreter
        except ImportError as e:
            raise ClassificationError(
                "No TFLite runtime available. Run: pip install tflite-runtime"
            ) from e
    return Interpreter


class TFLiteClassifier:
    """
    Classifier running a .tflite model.

    Usage:
        classifier = TFLiteClassifier("models/model.tflite")
        confidences = classifier.classify(tensor)
    """

    def __init__(
        self,
        model_path: str | Path,
        input_size: int = DEFAULT_SIZE,
        num_threads: int | None = None,
    ):
        """
        Initialize the classifier.

        Args:
            model_path: Path to the .tflite model file.
            input_size: Model input edge length S.
            num_threads: Interpreter threads (None lets the runtime decide).
        """
        self.model_path = Path(model_path)
        self.input_size = input_size
        self.num_threads = num_threads

    @contextmanager
    def _open_interpreter(self) -> Iterator[Any]:
        """Create an interpreter for one call and release it afterwards."""
        if not self.model_path.is_file():
            raise ClassificationError(f"Model file not found: {self.model_path}")

        interpreter_class = _load_interpreter_class()
        try:
            interpreter = interpreter_class(
                model_path=str(self.model_path), num_threads=self.num_threads
            )
            interpreter.allocate_tensors()
        except (OSError, ValueError, RuntimeError) as e:
            raise ClassificationError(f"Failed to load model {self.model_path}: {e}") from e

        try:
            yield interpreter
        finally:
            del interpreter

    def classify(self, tensor: np.ndarray) -> np.ndarray:
        """Run the model on a flat tensor and return its confidences."""
        expected = 3 * self.input_size * self.input_size
        if tensor.size != expected:
            raise ClassificationError(
                f"Tensor has {tensor.size} values, model expects {expected}"
            )

        input_data = np.asarray(tensor, dtype=np.float32).reshape(
            1, self.input_size, self.input_size, 3
        )

        with self._open_interpreter() as interpreter:
            try:
                input_details = interpreter.get_input_details()[0]
                output_details = interpreter.get_output_details()[0]

                # Quantized models (uint8 or int8) take integer input
                input_dtype = input_details["dtype"]
                if np.issubdtype(input_dtype, np.integer):
                    scale, zero_point = input_details["quantization"]
                    limits = np.iinfo(input_dtype)
                    quantized = np.round(input_data / scale + zero_point)
                    input_data = np.clip(quantized, limits.min, limits.max).astype(input_dtype)

                interpreter.set_tensor(input_details["index"], input_data)
                interpreter.invoke()
                output = np.array(interpreter.get_tensor(output_details["index"]))
            except (ValueError, RuntimeError) as e:
                raise ClassificationError(f"Inference failed: {e}") from e

            if np.issubdtype(output_details["dtype"], np.integer):
                scale, zero_point = output_details["quantization"]
                output = (output.astype(np.float32) - zero_point) * scale

        confidences = output.reshape(-1).astype(np.float32)
        logger.debug(f"Model returned {confidences.size} confidences")
        return confidences


def create_classifier(config: dict[str, Any]) -> TFLiteClassifier:
    """
    Build the classifier described by the model configuration.

    Args:
        config: Model configuration with keys path, size and threads.
    """
    model_path = config.get("path", "models/model.tflite")
    size = int(config.get("size", DEFAULT_SIZE))
    threads = config.get("threads")
    logger.info(f"Using TFLite model {model_path} (input {size}x{size})")
    return TFLiteClassifier(model_path, input_size=size, num_threads=threads)
