"""
Unit tests for ResultRenderer.
"""

import pytest

from conftest import one_hot_confidences
from photoclassifier.core.labels import CLASSES
from photoclassifier.core.renderer import (
    FAILED_TEXT,
    ResultRenderer,
    percent_of,
    select_top_index,
)


class TestSelectTopIndex:
    """Tests for top label selection."""

    def test_single_maximum(self):
        confidences = [0.2, 0.9, 0.1] + [0.0] * 9
        assert select_top_index(confidences) == 1

    def test_tie_goes_to_first(self):
        """Equal maxima resolve to the lowest index."""
        confidences = [0.5, 0.5] + [0.0] * 10
        assert select_top_index(confidences) == 0

    def test_later_tie_goes_to_first(self):
        confidences = [0.1, 0.3, 0.7, 0.7, 0.2]
        assert select_top_index(confidences) == 2

    def test_empty_vector_falls_back_to_zero(self):
        assert select_top_index([]) == 0

    def test_all_zero_falls_back_to_zero(self):
        assert select_top_index([0.0] * 12) == 0

    def test_all_negative_falls_back_to_zero(self):
        assert select_top_index([-0.5, -0.1, -0.3]) == 0

    def test_last_index(self):
        assert select_top_index([0.1] * 11 + [0.2]) == 11


class TestPercent:
    """Tests for confidence to percent conversion."""

    def test_floor_not_round(self):
        assert percent_of(0.837) == 83

    def test_just_below_next_point(self):
        assert percent_of(0.999) == 99

    @pytest.mark.parametrize(
        "confidence, percent",
        [(0.0, 0), (0.05, 5), (0.5, 50), (0.95, 95), (1.0, 100)],
    )
    def test_exact_points(self, confidence, percent):
        assert percent_of(confidence) == percent

    def test_above_one_is_not_clamped(self):
        assert percent_of(1.5) == 150


class TestResultRenderer:
    """Tests for building the render state."""

    @pytest.fixture
    def renderer(self, test_config):
        return ResultRenderer(test_config["labels"], test_config["display"])

    def test_one_bar_per_class(self, renderer):
        state = renderer.render([0.0] * len(CLASSES))
        assert len(state.bars) == len(CLASSES)

    def test_declaration_order_not_sorted(self, renderer):
        """Bars follow label order, whatever the scores."""
        confidences = [0.01 * i for i in range(len(CLASSES))][::-1]

        state = renderer.render(confidences)

        assert [bar.label for bar in state.bars] == list(CLASSES)
        assert [bar.index for bar in state.bars] == list(range(len(CLASSES)))

    def test_top_label(self, renderer):
        state = renderer.render(one_hot_confidences(4, 0.95, 0.05))

        assert state.top_index == 4
        assert state.top_label == "Butterfly"
        assert state.top_confidence == pytest.approx(0.95)
        assert state.top_bar.percent == 95
        assert not state.failed

    def test_bar_width_scales_with_percent(self, renderer):
        state = renderer.render(one_hot_confidences(0, 0.5))

        assert state.bars[0].percent == 50
        assert state.bars[0].bar_width == 150
        assert state.bars[1].bar_width == 0

    def test_custom_scale(self):
        renderer = ResultRenderer(["a", "b"], {"scale": 2.0})
        state = renderer.render([0.25, 0.75])
        assert [bar.bar_width for bar in state.bars] == [50, 150]

    def test_palette_cycles(self, renderer):
        """Colors repeat every palette length."""
        state = renderer.render([0.0] * len(CLASSES))
        colors = [bar.color for bar in state.bars]

        assert colors[:4] == ["#FFA500", "#FFC0CB", "#ADD8E6", "#0000FF"]
        assert colors[4:8] == colors[:4]
        assert colors[8:12] == colors[:4]

    def test_palette_shorter_than_classes(self):
        renderer = ResultRenderer(["a", "b", "c"], {"palette": ["#111111"]})
        state = renderer.render([0.1, 0.2, 0.3])
        assert {bar.color for bar in state.bars} == {"#111111"}

    def test_empty_palette_uses_default(self):
        renderer = ResultRenderer(["a"], {"palette": []})
        assert renderer.palette == ("#FFA500", "#FFC0CB", "#ADD8E6", "#0000FF")

    def test_length_mismatch_rejected(self, renderer):
        with pytest.raises(ValueError):
            renderer.render([0.5, 0.5])

    def test_percent_text(self, renderer):
        state = renderer.render(one_hot_confidences(2, 0.837))
        assert state.bars[2].percent_text == "83%"

    def test_failure_state(self, renderer):
        state = renderer.failure("Model file not found")

        assert state.failed
        assert state.top_label == FAILED_TEXT
        assert state.message == "Model file not found"
        assert state.bars == ()
        assert state.top_bar is None

    def test_to_dict(self, renderer):
        data = renderer.render(one_hot_confidences(1, 0.9)).to_dict()

        assert data["top_label"] == "Dog"
        assert data["failed"] is False
        assert len(data["classes"]) == len(CLASSES)
        assert data["classes"][1]["percent"] == 90
