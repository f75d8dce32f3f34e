"""Command that turns a numbered PNG frame sequence into a contrast map."""

from __future__ import annotations

import argparse
import fnmatch
import logging
import os
import sys
from collections.abc import Iterable, Sequence

import numpy as np

from .config import load_config
from .contrast import Runner
from .imageutils import convert_to_gray, extract_number, load_image, save_image

DEFAULT_CONFIG_PATH = "go-tlasca.json"

_LOG_FORMAT = "[GO-TLASCA] %(asctime)s %(message)s"
_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def sort_by_number(paths: Iterable[str]) -> list[str]:
    """Order frame files by the number in their names, keeping ties in place.

    Raises ``ValueError`` when a name does not hold a number.
    """
    items = list(paths)
    if len(items) < 2:
        return items

    def key(path: str) -> int:
        try:
            return extract_number(path)
        except ValueError as exc:
            raise ValueError(f"invalid filename format: {path} -> {exc}") from exc

    return sorted(items, key=key)


def load_and_process_images(paths: Iterable[str]) -> list[np.ndarray]:
    """Load every image and convert it to grayscale, failing on the first bad file."""
    frames = []
    for path in paths:
        try:
            image = load_image(path)
        except (OSError, ValueError) as exc:
            raise RuntimeError(f"failed to load image '{path}': {exc}") from exc
        frames.append(convert_to_gray(image))
    return frames


def _png_files(directory: str) -> list[str]:
    try:
        names = os.listdir(directory)
    except OSError:
        return []
    return [
        os.path.join(directory, name)
        for name in sorted(names)
        if fnmatch.fnmatchcase(name, "*.png")
    ]


def run(
    logger: logging.Logger | None = None, config_path: str = DEFAULT_CONFIG_PATH
) -> str:
    """Load the settings, process the frame sequence and save the map.

    Returns the path of the written image.
    """
    log = logger if logger is not None else logging.getLogger(__name__)

    try:
        config = load_config(config_path, log)
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"error loading config: {exc}") from exc

    runner = Runner(config, log)
    data_dir = config.paths.data_dir

    log.info("searching for image files...")
    if not os.path.lexists(data_dir):
        raise RuntimeError(f"data directory '{data_dir}' not found")
    files = _png_files(data_dir)
    if not files:
        raise RuntimeError(f"no png files found in '{data_dir}'")
    files = sort_by_number(files)
    log.info("found and sorted %d files.", len(files))

    log.info("loading and converting images...")
    frames = load_and_process_images(files)

    change_map = runner.run(frames)

    log.info("saving result...")
    results_dir = config.paths.results_dir
    try:
        os.makedirs(results_dir, mode=0o755, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(
            f"error creating results directory '{results_dir}': {exc}"
        ) from exc

    output = os.path.join(results_dir, config.paths.output_filename)
    try:
        save_image(output, change_map)
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"error saving result image to '{output}': {exc}") from exc
    log.info("image saving completed: %s", output)
    return output


def _make_logger() -> logging.Logger:
    logger = logging.getLogger("tlasca")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        logger.addHandler(handler)
    return logger


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the command; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="tlasca",
        description="Compute a temporal speckle contrast map from numbered PNG frames.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="path of the JSON settings file (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logger = _make_logger()
    try:
        run(logger, args.config)
    except (RuntimeError, ValueError, OSError) as exc:
        logger.critical("application failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())