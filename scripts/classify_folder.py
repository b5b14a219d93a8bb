#!/usr/bin/env python3
"""
Batch classification tool for PhotoClassifier.

Runs every image in a folder through the classification pipeline and
prints one CSV row per image, to check the bundled model against a set
of sample photos.

Usage:
    python scripts/classify_folder.py samples/
    python scripts/classify_folder.py samples/ --output results.csv
"""

import argparse
import csv
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from photoclassifier.core.config import Config
from photoclassifier.core.errors import ImageAcquisitionError
from photoclassifier.core.image_source import is_image_file
from photoclassifier.core.pipeline import ClassificationPipeline


def main():
    parser = argparse.ArgumentParser(description="PhotoClassifier Batch Classification Tool")
    parser.add_argument("folder", type=str, help="Folder containing images")
    parser.add_argument("--output", type=str, help="Write CSV here instead of stdout")
    parser.add_argument("--config", type=str, help="Path to config directory")

    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)
    pipeline = ClassificationPipeline(config.as_dict)

    folder = Path(args.folder)
    images = sorted(p for p in folder.rglob("*") if p.is_file() and is_image_file(p))
    if not images:
        print(f"Error: No images found in {folder}", file=sys.stderr)
        sys.exit(1)

    out = open(args.output, "w", newline="", encoding="utf-8") if args.output else sys.stdout
    try:
        writer = csv.writer(out)
        writer.writerow(["file", "top_label", "confidence", "failed"] + list(pipeline.labels))

        failures = 0
        for path in images:
            try:
                state = pipeline.classify_file(path)
            except ImageAcquisitionError as e:
                print(f"Skipping {path}: {e}", file=sys.stderr)
                failures += 1
                continue

            failures += int(state.failed)
            percents = [bar.percent for bar in state.bars]
            writer.writerow(
                [str(path.relative_to(folder)), state.top_label, f"{state.top_confidence:.4f}", state.failed]
                + percents
            )
    finally:
        if out is not sys.stdout:
            out.close()

    print(f"Classified {len(images) - failures}/{len(images)} images", file=sys.stderr)


if __name__ == "__main__":
    main()
