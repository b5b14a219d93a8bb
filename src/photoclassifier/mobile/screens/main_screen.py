"""
Main screen for PhotoClassifier mobile app.

Shows the photo, the top class, one confidence bar per class and the
camera/gallery buttons.
"""

import logging

import numpy as np
from kivy.clock import Clock
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.scrollview import ScrollView

from ...core.camera import Camera
from ...core.config import Config
from ...core.errors import ImageAcquisitionError
from ...core.image_source import crop_center_square, load_image
from ...core.pipeline import ClassificationPipeline
from ...core.result import RenderState
from ...utils.permissions import camera_permissions, gallery_permissions
from ..widgets.confidence_bar import ConfidencePanel
from ..widgets.image_preview import ImagePreview
from .gallery_picker import GalleryPicker, default_gallery_directory

logger = logging.getLogger(__name__)


class MainScreen(BoxLayout):
    """
    Main screen with photo preview and classification results.

    Layout:
    ┌─────────────────────────────────────┐
    │          PHOTO THUMBNAIL            │
    │                                     │
    │               Cat                   │
    │  Cat     [████████░░░░░░]  61%      │
    │  Dog     [██░░░░░░░░░░░░]  12%      │
    │  ...                                │
    │  [Take Picture]        [Gallery]    │
    └─────────────────────────────────────┘

    Only one photo is processed at a time; both buttons are disabled
    until the current classification has been shown.
    """

    def __init__(
        self,
        pipeline: ClassificationPipeline,
        config: Config,
        platform_type: str = "desktop",
        **kwargs,
    ):
        """
        Initialize the main screen.

        Args:
            pipeline: Classification pipeline instance.
            config: Application configuration.
            platform_type: "desktop" or "android".
        """
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", [10, 10, 10, 10])
        kwargs.setdefault("spacing", 10)
        super().__init__(**kwargs)

        self.pipeline = pipeline
        self.config = config
        self.platform_type = platform_type
        self.camera = Camera(config.get("camera", {}))

        self._busy = False
        self._create_ui()

    def _create_ui(self):
        """Create all UI components."""
        self.preview = ImagePreview(size_hint=(1, 0.4))
        self.add_widget(self.preview)

        self.result_label = Label(
            text="Take or choose a photo",
            font_size="26sp",
            bold=True,
            size_hint=(1, None),
            height=50,
        )
        self.add_widget(self.result_label)

        display = self.config.get("display", {})
        self.confidence_panel = ConfidencePanel(
            bar_height=display.get("height", 50),
            radius=display.get("radius", 15),
            track_color=display.get("track", "#F0F0F0"),
        )
        scroll = ScrollView(size_hint=(1, 0.45))
        scroll.add_widget(self.confidence_panel)
        self.add_widget(scroll)

        self._create_control_bar()

    def _create_control_bar(self):
        """Create bottom control bar with buttons."""
        control_bar = BoxLayout(
            orientation="horizontal",
            size_hint=(1, None),
            height=80,
            spacing=20,
        )

        self.camera_button = Button(text="Take Picture", font_size="16sp")
        self.camera_button.bind(on_press=self._on_camera_press)
        control_bar.add_widget(self.camera_button)

        self.gallery_button = Button(text="Gallery", font_size="16sp")
        self.gallery_button.bind(on_press=self._on_gallery_press)
        control_bar.add_widget(self.gallery_button)

        self.add_widget(control_bar)

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.camera_button.disabled = busy
        self.gallery_button.disabled = busy

    # -- Camera -------------------------------------------------------------

    def _on_camera_press(self, instance):
        """Handle take picture button press."""
        if self._busy:
            return

        if not self._ensure_permissions(
            camera_permissions(), self._on_camera_press, "Camera permission denied"
        ):
            return

        self._start(lambda dt: self._capture_and_classify())

    def _capture_and_classify(self) -> None:
        try:
            image = self.camera.capture()
        except ImageAcquisitionError as e:
            logger.error(f"Camera capture failed: {e}")
            self.show_error("Could not take a picture")
            return
        self._classify(image)

    # -- Gallery ------------------------------------------------------------

    def _on_gallery_press(self, instance):
        """Handle gallery button press."""
        if self._busy:
            return

        if not self._ensure_permissions(
            self._gallery_permissions(), self._on_gallery_press, "Storage permission denied"
        ):
            return

        picker = GalleryPicker(
            on_select=self._on_gallery_select,
            start_dir=default_gallery_directory(self.platform_type),
        )
        picker.open()

    def _gallery_permissions(self) -> list[str]:
        if self.platform_type != "android":
            return []

        from android import api_version

        return gallery_permissions(api_version)

    def _on_gallery_select(self, path: str) -> None:
        self._start(lambda dt: self._load_and_classify(path))

    def _load_and_classify(self, path: str) -> None:
        try:
            image = load_image(path)
        except ImageAcquisitionError as e:
            logger.error(f"Gallery image failed: {e}")
            self.show_error("Could not open the photo")
            return
        self._classify(image)

    # -- Permissions --------------------------------------------------------

    def _ensure_permissions(self, permissions, retry, denied_message: str) -> bool:
        """
        Check Android runtime permissions, requesting any that are missing.

        Returns True when the action can go ahead now. Otherwise the request
        is sent and retry(None) runs once everything has been granted.
        """
        if self.platform_type != "android":
            return True

        from android.permissions import check_permission, request_permissions

        missing = [p for p in permissions if not check_permission(p)]
        if not missing:
            return True

        def on_result(requested, grants):
            if grants and all(grants):
                Clock.schedule_once(lambda dt: retry(None), 0)
            else:
                Clock.schedule_once(lambda dt: self.show_error(denied_message), 0)

        logger.info(f"Requesting permissions: {missing}")
        request_permissions(missing, on_result)
        return False

    # -- Classification -----------------------------------------------------

    def _start(self, task) -> None:
        """Disable input, then run the task on the next frame so the UI can repaint."""
        self._set_busy(True)
        self.result_label.text = "Classifying..."
        self.result_label.color = (1, 1, 1, 1)

        def run(dt):
            try:
                task(dt)
            finally:
                self._set_busy(False)

        Clock.schedule_once(run, 0)

    def _classify(self, image: np.ndarray) -> None:
        self.preview.show(crop_center_square(image))
        state = self.pipeline.classify_image(image)
        self.apply_state(state)

    def apply_state(self, state: RenderState) -> None:
        """
        Update the UI with a classification result.

        Args:
            state: RenderState from the pipeline.
        """
        self.result_label.text = state.top_label
        if state.failed:
            self.result_label.color = (0.9, 0.2, 0.2, 1)
        else:
            self.result_label.color = (1, 1, 1, 1)
        self.confidence_panel.update(state)

    def show_error(self, message: str) -> None:
        """Show a short error and keep the screen ready for another try."""
        self.result_label.text = message
        self.result_label.color = (0.9, 0.2, 0.2, 1)
