"""
Maps model confidences to display state.

Classes are always listed in label declaration order; the renderer
never sorts by score.
"""

import logging
from typing import Any, Sequence

import numpy as np

from .labels import BAR_PALETTE, CLASSES
from .result import ClassBar, RenderState

logger = logging.getLogger(__name__)

FAILED_TEXT = "Classification failed"


def select_top_index(confidences: Sequence[float] | np.ndarray) -> int:
    """
    Return the index of the highest confidence.

    The running maximum starts at 0 and only a strictly greater value
    replaces it, so ties go to the lowest index and an empty, all-zero
    or all-negative vector yields 0.
    """
    max_index = 0
    max_confidence = 0.0
    for i, confidence in enumerate(confidences):
        if confidence > max_confidence:
            max_confidence = float(confidence)
            max_index = i
    return max_index


def percent_of(confidence: float) -> int:
    """
    Convert a confidence to a whole percentage, truncating down.

    Computed in float32, the model's output precision, so that a score
    of 0.95 shows as 95 rather than 94.
    """
    return int(np.floor(np.float32(confidence) * np.float32(100.0)))


class ResultRenderer:
    """
    Builds a RenderState from a confidence vector.

    Usage:
        renderer = ResultRenderer(labels, config['display'])
        state = renderer.render(confidences)
    """

    def __init__(
        self,
        labels: Sequence[str] | None = None,
        config: dict[str, Any] | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            labels: Ordered class names (defaults to CLASSES)
            config: Display configuration with keys:
                - scale: float - Bar pixels per percentage point (default 3.0)
                - palette: list[str] - Hex colors cycled by class index
        """
        config = config or {}
        self.labels: tuple[str, ...] = tuple(labels) if labels else CLASSES
        self.scale = float(config.get("scale", 3.0))
        self.palette: tuple[str, ...] = tuple(config.get("palette") or BAR_PALETTE)

    @property
    def num_classes(self) -> int:
        return len(self.labels)

    def color_for(self, index: int) -> str:
        """Palette color for a class position."""
        return self.palette[index % len(self.palette)]

    def bar_width(self, percent: int) -> int:
        return int(percent * self.scale)

    def render(self, confidences: Sequence[float] | np.ndarray) -> RenderState:
        """
        Build the display state for one classification.

        Args:
            confidences: One score per label, in label order

        Returns:
            RenderState with exactly one bar per label

        Raises:
            ValueError: If the vector length does not match the label count.
        """
        scores = np.asarray(confidences, dtype=np.float32).ravel()
        if scores.size != self.num_classes:
            raise ValueError(
                f"Got {scores.size} confidences for {self.num_classes} classes"
            )

        top_index = select_top_index(scores)

        bars = []
        for i, label in enumerate(self.labels):
            percent = percent_of(scores[i])
            bars.append(
                ClassBar(
                    index=i,
                    label=label,
                    confidence=float(scores[i]),
                    percent=percent,
                    bar_width=self.bar_width(percent),
                    color=self.color_for(i),
                )
            )

        logger.debug(f"Top class: {self.labels[top_index]} ({scores[top_index]:.3f})")

        return RenderState(
            top_index=top_index,
            top_label=self.labels[top_index],
            top_confidence=float(scores[top_index]),
            bars=tuple(bars),
        )

    def failure(self, message: str = "") -> RenderState:
        """Display state for a classification that produced no confidences."""
        return RenderState(
            top_index=0,
            top_label=FAILED_TEXT,
            top_confidence=0.0,
            bars=(),
            failed=True,
            message=message,
        )
