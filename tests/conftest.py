"""
Pytest fixtures for PhotoClassifier tests.

Provides common test fixtures including:
- Test configuration
- Synthetic solid-color images
- Fake classifiers and a fake TFLite interpreter
"""

import numpy as np
import pytest

from photoclassifier.core.errors import ClassificationError
from photoclassifier.core.labels import CLASSES


@pytest.fixture
def test_config():
    """Test configuration dictionary."""
    return {
        "model": {
            "path": "models/test.tflite",
            "size": 224,
            "threads": 1,
        },
        "labels": list(CLASSES),
        "display": {
            "scale": 3.0,
            "palette": ["#FFA500", "#FFC0CB", "#ADD8E6", "#0000FF"],
            "track": "#F0F0F0",
            "radius": 15,
            "height": 50,
        },
    }


def solid_image(color: tuple[int, int, int], width: int = 224, height: int = 224) -> np.ndarray:
    """
    Generate a single-color RGB image.

    Args:
        color: RGB color tuple
        width: Image width
        height: Image height

    Returns:
        (height, width, 3) uint8 RGB array
    """
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :] = color
    return image


@pytest.fixture
def black_image():
    return solid_image((0, 0, 0))


@pytest.fixture
def red_image():
    return solid_image((255, 0, 0))


def one_hot_confidences(index: int, value: float = 0.95, rest: float = 0.0) -> list[float]:
    """Confidence vector with one dominant class."""
    confidences = [rest] * len(CLASSES)
    confidences[index] = value
    return confidences


class FixedClassifier:
    """Classifier returning the same confidences every call."""

    def __init__(self, confidences):
        self.confidences = np.asarray(confidences, dtype=np.float32)
        self.tensors: list[np.ndarray] = []

    def classify(self, tensor: np.ndarray) -> np.ndarray:
        self.tensors.append(tensor)
        return self.confidences


class FailingClassifier:
    """Classifier whose model cannot be loaded."""

    def __init__(self, message: str = "Model file not found"):
        self.message = message
        self.calls = 0

    def classify(self, tensor: np.ndarray) -> np.ndarray:
        self.calls += 1
        raise ClassificationError(self.message) from OSError(self.message)


class FakeInterpreter:
    """
    Stand-in for tflite Interpreter.

    Records the input tensor and returns the configured output.
    """

    instances: list["FakeInterpreter"] = []
    output = np.zeros((1, len(CLASSES)), dtype=np.float32)
    input_dtype = np.float32
    output_dtype = np.float32
    quantization = (0.0, 0)
    fail_invoke = False

    def __init__(self, model_path: str, num_threads: int | None = None):
        self.model_path = model_path
        self.num_threads = num_threads
        self.allocated = False
        self.input = None
        type(self).instances.append(self)

    def allocate_tensors(self):
        self.allocated = True

    def get_input_details(self):
        return [{"index": 0, "dtype": self.input_dtype, "quantization": self.quantization}]

    def get_output_details(self):
        return [{"index": 1, "dtype": self.output_dtype, "quantization": self.quantization}]

    def set_tensor(self, index, value):
        self.input = value

    def invoke(self):
        if self.fail_invoke:
            raise RuntimeError("Interpreter invoke failed")

    def get_tensor(self, index):
        return self.output


@pytest.fixture
def fake_interpreter(monkeypatch):
    """Patch the TFLite runtime lookup to return FakeInterpreter."""

    class Interpreter(FakeInterpreter):
        instances: list[FakeInterpreter] = []

    monkeypatch.setattr(
        "photoclassifier.core.classifier._load_interpreter_class", lambda: Interpreter
    )
    return Interpreter


@pytest.fixture
def model_file(tmp_path):
    """An existing (dummy) model file path."""
    path = tmp_path / "model.tflite"
    path.write_bytes(b"TFL3")
    return path
