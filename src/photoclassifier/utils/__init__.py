"""Utility functions for PhotoClassifier."""

from .visualization import hex_to_bgr, render_result_card

__all__ = ["hex_to_bgr", "render_result_card"]
