"""
Visualization utilities for PhotoClassifier.

Draws a result card (photo thumbnail plus one confidence bar per class)
with OpenCV, for saving classifications from the command line.
"""

from typing import Any

import cv2
import numpy as np

from ..core.image_source import crop_center_square
from ..core.labels import TRACK_COLOR
from ..core.result import RenderState


def hex_to_bgr(color: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' to an OpenCV BGR tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color}")
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)


def render_result_card(
    image: np.ndarray,
    state: RenderState,
    config: dict[str, Any] | None = None,
    thumbnail_size: int = 320,
) -> np.ndarray:
    """
    Draw the classification result as a single image.

    Args:
        image: RGB photo that was classified
        state: RenderState from the pipeline
        config: Display configuration (track color, row height)
        thumbnail_size: Edge length of the square thumbnail

    Returns:
        BGR image ready for cv2.imwrite
    """
    config = config or {}
    track_color = hex_to_bgr(config.get("track", TRACK_COLOR))
    row_height = int(config.get("height", 50))
    padding = 16
    label_width = 160
    bar_area = max((bar.bar_width for bar in state.bars), default=0)
    bar_area = max(bar_area, 300)

    width = max(thumbnail_size, label_width + bar_area + 80) + padding * 2
    header = thumbnail_size + 70
    height = header + len(state.bars) * (row_height + 8) + padding

    card = np.full((height, width, 3), 255, dtype=np.uint8)

    # Thumbnail
    thumb = crop_center_square(image)
    thumb = cv2.resize(thumb, (thumbnail_size, thumbnail_size), interpolation=cv2.INTER_AREA)
    thumb = cv2.cvtColor(thumb, cv2.COLOR_RGB2BGR)
    x0 = (width - thumbnail_size) // 2
    card[padding : padding + thumbnail_size, x0 : x0 + thumbnail_size] = thumb

    # Top label
    title_color = (0, 0, 200) if state.failed else (0, 0, 0)
    cv2.putText(
        card,
        state.top_label,
        (padding, padding + thumbnail_size + 40),
        cv2.FONT_HERSHEY_SIMPLEX,
        1.0,
        title_color,
        2,
    )

    # One row per class, in declaration order
    y = header
    for bar in state.bars:
        color = hex_to_bgr(bar.color)
        mid_y = y + row_height // 2

        cv2.putText(
            card, bar.label, (padding, mid_y + 6), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2
        )

        track_x = padding + label_width
        cv2.rectangle(card, (track_x, y), (track_x + bar_area, y + row_height), track_color, -1)
        if bar.bar_width > 0:
            cv2.rectangle(card, (track_x, y), (track_x + bar.bar_width, y + row_height), color, -1)

        cv2.putText(
            card,
            bar.percent_text,
            (track_x + bar_area + 8, mid_y + 6),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.5,
            (0, 0, 0),
            1,
        )
        y += row_height + 8

    return card
