"""
PhotoClassifier CLI entry point.

Usage:
    python -m photoclassifier                      # Launch the app
    python -m photoclassifier --image cat.jpg      # Classify a file
    python -m photoclassifier --help               # Show help
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import cv2

from .core.camera import Camera
from .core.config import Config
from .core.errors import ImageAcquisitionError
from .core.image_source import load_image
from .core.pipeline import ClassificationPipeline
from .core.result import RenderState
from .utils.visualization import render_result_card


def setup_logging(config: Config) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    # stdout carries only results
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = log_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=handlers,
        force=True,
    )


def format_state(state: RenderState) -> str:
    """Plain text report: the top label, then one line per class."""
    lines = [state.top_label]
    if state.failed and state.message:
        lines.append(f"  ({state.message})")
    for bar in state.bars:
        lines.append(f"  {bar.label}: {bar.percent_text}")
    return "\n".join(lines)


def classify_file(
    config: Config,
    image_path: str,
    save_path: str | None = None,
    as_json: bool = False,
) -> int:
    """
    Classify one image file and print the result.

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    logger = logging.getLogger(__name__)

    try:
        image = load_image(image_path)
    except ImageAcquisitionError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    pipeline = ClassificationPipeline(config.as_dict)
    state = pipeline.classify_image(image)

    if as_json:
        print(json.dumps(state.to_dict(), indent=2))
    else:
        print(format_state(state))

    if save_path:
        card = render_result_card(image, state, config.get("display", {}))
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(save_path, card)
        logger.info(f"Result card saved: {save_path}")

    return 1 if state.failed else 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="PhotoClassifier - classify photos with a bundled TFLite model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m photoclassifier                          Launch the app
    python -m photoclassifier --image cat.jpg          Classify a file
    python -m photoclassifier --image cat.jpg --json   Print JSON
    python -m photoclassifier --image cat.jpg --save result.png
        """,
    )

    parser.add_argument("--image", type=str, help="Classify this image file and exit")
    parser.add_argument("--save", type=str, help="With --image, write a result card image here")
    parser.add_argument("--json", action="store_true", help="With --image, print JSON output")
    parser.add_argument("--model", type=str, help="Path to the .tflite model (overrides config)")
    parser.add_argument("--camera", type=int, help="Camera index to use (overrides config)")
    parser.add_argument(
        "--list-cameras", action="store_true", help="List available camera indices and exit"
    )
    parser.add_argument("--config", type=str, help="Path to configuration directory")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)

    # Apply command-line overrides
    if args.model is not None:
        os.environ["PHOTOCLASSIFIER_MODEL_PATH"] = args.model
        config.reload()
    if args.camera is not None:
        os.environ["PHOTOCLASSIFIER_CAMERA_SOURCE"] = str(args.camera)
        config.reload()
    if args.debug:
        os.environ["PHOTOCLASSIFIER_LOGGING_LEVEL"] = "DEBUG"
        config.reload()

    setup_logging(config)

    logger = logging.getLogger(__name__)
    logger.info("PhotoClassifier starting...")
    logger.info(f"Environment: {config.env}")

    if args.list_cameras:
        cameras = Camera.list_available_cameras()
        print(json.dumps({"cameras": cameras}))
        return 0

    if args.image:
        return classify_file(config, args.image, save_path=args.save, as_json=args.json)

    from .mobile.app import run_mobile_app

    run_mobile_app(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
