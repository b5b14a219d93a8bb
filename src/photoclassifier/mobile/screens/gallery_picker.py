"""
Gallery picker for PhotoClassifier.

Popup file chooser limited to image files.
"""

import logging
from pathlib import Path
from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.filechooser import FileChooserIconView
from kivy.uix.popup import Popup

from ...core.image_source import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)


def default_gallery_directory(platform_type: str) -> str:
    """Get the platform-appropriate folder to start browsing from."""
    if platform_type == "android":
        return "/sdcard/DCIM/"

    pictures = Path.home() / "Pictures"
    if pictures.is_dir():
        return str(pictures)
    return str(Path.home())


class GalleryPicker(Popup):
    """
    Popup for picking a photo from storage.

    Calls on_select with the chosen path. Dismissing the popup without a
    choice calls nothing.
    """

    def __init__(
        self,
        on_select: Callable[[str], None],
        start_dir: str,
        **kwargs,
    ):
        kwargs.setdefault("title", "Choose a photo")
        kwargs.setdefault("size_hint", (0.95, 0.9))
        super().__init__(**kwargs)

        self._on_select = on_select

        layout = BoxLayout(orientation="vertical", spacing=10)

        self._chooser = FileChooserIconView(
            path=start_dir,
            filters=[f"*{ext}" for ext in IMAGE_EXTENSIONS],
            size_hint=(1, 1),
        )
        self._chooser.bind(on_submit=self._on_submit)
        layout.add_widget(self._chooser)

        buttons = BoxLayout(orientation="horizontal", size_hint=(1, None), height=60, spacing=10)

        cancel_btn = Button(text="Cancel", font_size="16sp")
        cancel_btn.bind(on_press=lambda instance: self.dismiss())
        buttons.add_widget(cancel_btn)

        open_btn = Button(
            text="Open",
            font_size="16sp",
            background_color=(0.2, 0.6, 0.2, 1),
        )
        open_btn.bind(on_press=self._on_open_press)
        buttons.add_widget(open_btn)

        layout.add_widget(buttons)
        self.content = layout

    def _on_open_press(self, instance):
        """Handle open button press."""
        self._choose(self._chooser.selection)

    def _on_submit(self, chooser, selection, touch=None):
        """Handle double tap on a file."""
        self._choose(selection)

    def _choose(self, selection: list[str]) -> None:
        if not selection:
            logger.debug("Gallery: nothing selected")
            return

        path = selection[0]
        logger.info(f"Gallery: selected {path}")
        self.dismiss()
        self._on_select(path)
