"""
Classification result data structures.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ClassBar:
    """
    Display record for one class.

    Attributes:
        index: Position of the class in the label list
        label: Human-readable class name
        confidence: Raw model score
        percent: floor(confidence * 100)
        bar_width: Width of the colored bar in pixels
        color: Bar color as '#RRGGBB'
    """

    index: int
    label: str
    confidence: float
    percent: int
    bar_width: int
    color: str

    @property
    def percent_text(self) -> str:
        """Text shown next to the bar."""
        return f"{self.percent}%"

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "index": self.index,
            "label": self.label,
            "confidence": round(self.confidence, 4),
            "percent": self.percent,
            "bar_width": self.bar_width,
            "color": self.color,
        }


@dataclass(frozen=True)
class RenderState:
    """
    Everything the UI needs to show one classification.

    Attributes:
        top_index: Index of the selected class (0 when failed)
        top_label: Text for the result label
        top_confidence: Score of the selected class
        bars: One ClassBar per class, in label declaration order
        failed: True if classification did not produce confidences
        message: Error description when failed
        processing_time_ms: Time spent in the pipeline
    """

    top_index: int
    top_label: str
    top_confidence: float
    bars: tuple[ClassBar, ...] = field(default_factory=tuple)
    failed: bool = False
    message: str = ""
    processing_time_ms: float = 0.0

    @property
    def top_bar(self) -> ClassBar | None:
        """Display record of the selected class, if any."""
        if self.failed or not self.bars:
            return None
        return self.bars[self.top_index]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "top_index": self.top_index,
            "top_label": self.top_label,
            "top_confidence": round(self.top_confidence, 4),
            "failed": self.failed,
            "message": self.message,
            "processing_time_ms": round(self.processing_time_ms, 2),
            "classes": [bar.to_dict() for bar in self.bars],
        }
