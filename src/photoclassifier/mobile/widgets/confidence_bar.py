"""
Confidence bar widgets for PhotoClassifier.

One row per class: the class name in the bar color, a rounded light gray
track, a rounded colored bar sized by the percentage, and the percentage
text at the right.
"""

import logging

from kivy.graphics import Color, RoundedRectangle
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.relativelayout import RelativeLayout
from kivy.utils import get_color_from_hex

from ...core.labels import TRACK_COLOR
from ...core.result import ClassBar, RenderState

logger = logging.getLogger(__name__)


class ConfidenceBar(BoxLayout):
    """
    A single class row.

    Layout:
    ┌──────────────────────────────────────────┐
    │  Cat   [██████████░░░░░░░░░░░░░░░░]  34% │
    └──────────────────────────────────────────┘
    """

    def __init__(
        self,
        bar: ClassBar,
        bar_height: int = 50,
        radius: float = 15,
        track_color: str = TRACK_COLOR,
        **kwargs,
    ):
        kwargs.setdefault("orientation", "horizontal")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("height", bar_height + 24)
        kwargs.setdefault("padding", [0, 16, 0, 8])
        super().__init__(**kwargs)

        self.bar = bar
        self._radius = radius
        self._color = get_color_from_hex(bar.color)
        self._track_color = get_color_from_hex(track_color)

        label = Label(
            text=bar.label,
            font_size="18sp",
            color=self._color,
            halign="left",
            valign="middle",
            size_hint_x=None,
            width=140,
            padding=[16, 0],
        )
        label.bind(size=label.setter("text_size"))
        self.add_widget(label)

        self._track = RelativeLayout(size_hint=(1, None), height=bar_height)
        self._percent_label = Label(
            text=bar.percent_text,
            font_size="14sp",
            color=(0, 0, 0, 1),
            halign="right",
            valign="middle",
            padding=[8, 0],
        )
        self._percent_label.bind(size=self._percent_label.setter("text_size"))
        self._track.add_widget(self._percent_label)
        self.add_widget(self._track)

        self._draw_bar()
        self._track.bind(size=self._update_bar)

    def _draw_bar(self):
        """Draw the rounded track and the colored bar."""
        self._track.canvas.before.clear()
        with self._track.canvas.before:
            Color(*self._track_color)
            RoundedRectangle(pos=(0, 0), size=self._track.size, radius=[self._radius])

            width = min(self.bar.bar_width, self._track.width)
            if width > 0:
                Color(*self._color)
                RoundedRectangle(
                    pos=(0, 0),
                    size=(width, self._track.height),
                    radius=[self._radius],
                )

    def _update_bar(self, *args):
        """Redraw when the track is resized."""
        self._draw_bar()


class ConfidencePanel(BoxLayout):
    """
    Vertical list of ConfidenceBar rows built from a RenderState.
    """

    def __init__(
        self,
        bar_height: int = 50,
        radius: float = 15,
        track_color: str = TRACK_COLOR,
        **kwargs,
    ):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("spacing", 4)
        super().__init__(**kwargs)
        self.bind(minimum_height=self.setter("height"))

        self.bar_height = bar_height
        self.radius = radius
        self.track_color = track_color

    def update(self, state: RenderState) -> None:
        """
        Replace all rows with the bars of a new classification.

        Args:
            state: RenderState from the pipeline.
        """
        self.clear_widgets()
        for bar in state.bars:
            self.add_widget(
                ConfidenceBar(
                    bar,
                    bar_height=self.bar_height,
                    radius=self.radius,
                    track_color=self.track_color,
                )
            )
        logger.debug(f"Confidence panel shows {len(state.bars)} classes")
