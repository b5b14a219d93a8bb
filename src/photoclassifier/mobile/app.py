"""
PhotoClassifier Kivy Application - Cross-platform photo classification.

Main entry point for the Kivy-based mobile/desktop application.
"""

import logging
import os
import platform as sys_platform

# Prevent Kivy from consuming command-line arguments
os.environ["KIVY_NO_ARGS"] = "1"

from kivy.app import App
from kivy.core.window import Window
from kivy.logger import Logger

from ..core.classifier import Classifier
from ..core.config import Config
from ..core.pipeline import ClassificationPipeline
from .screens.main_screen import MainScreen

logger = logging.getLogger(__name__)


class PhotoClassifierApp(App):
    """
    Main PhotoClassifier Kivy application.

    Coordinates:
    - Classification pipeline (via ClassificationPipeline)
    - Photo acquisition and result display (via MainScreen)
    """

    def __init__(
        self,
        app_config: Config | None = None,
        classifier: Classifier | None = None,
        **kwargs,
    ):
        """
        Initialize the app.

        Args:
            app_config: Optional Config object. If not provided, loads from default location.
            classifier: Optional classifier overriding the configured model.
        """
        super().__init__(**kwargs)

        # app_config avoids clashing with Kivy's own App.config
        if app_config is None:
            app_config = Config()
        self.app_config = app_config
        self._classifier = classifier

        self.platform_type = self._detect_platform()

        self.pipeline: ClassificationPipeline | None = None
        self.main_screen: MainScreen | None = None

        Logger.info(f"PhotoClassifier: Initialized on {sys_platform.system()} ({self.platform_type})")

    def _detect_platform(self) -> str:
        """Detect current platform type."""
        if sys_platform.system() == "Linux":
            try:
                import android  # noqa: F401
                return "android"
            except ImportError:
                return "desktop"
        return "desktop"

    def build(self):
        """Build the application UI."""
        if self.platform_type == "desktop":
            Window.size = (480, 900)
        self.title = self.app_config.get("app.name", "PhotoClassifier")

        self.pipeline = ClassificationPipeline(self.app_config.as_dict, classifier=self._classifier)
        Logger.info(
            f"PhotoClassifier: Pipeline ready ({len(self.pipeline.labels)} classes, "
            f"input {self.pipeline.preparer.size}x{self.pipeline.preparer.size})"
        )

        self.main_screen = MainScreen(
            pipeline=self.pipeline,
            config=self.app_config,
            platform_type=self.platform_type,
        )
        return self.main_screen

    def on_start(self):
        """Called when the application starts."""
        Logger.info("PhotoClassifier: Application starting")

    def on_stop(self):
        """Called when the application stops."""
        if self.main_screen:
            self.main_screen.camera.release()
        Logger.info("PhotoClassifier: Application stopped")


def run_mobile_app(config: Config | None = None):
    """
    Run the PhotoClassifier mobile/desktop Kivy application.

    Args:
        config: Optional Config object.
    """
    app = PhotoClassifierApp(app_config=config)
    app.run()
