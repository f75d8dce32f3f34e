"""Temporal laser speckle contrast analysis over a sequence of grayscale frames."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .config import Config


def _frames(images: Sequence[np.ndarray]) -> list[np.ndarray]:
    """Validate the frame sequence and return it as a list of 2-D arrays."""
    frames = [np.asarray(img) for img in images]
    if not frames:
        raise ValueError("no frames given")
    if len(frames) < 2:
        raise ValueError("at least two frames are required for the sample variance")
    for frame in frames:
        if frame.ndim != 2:
            raise ValueError(
                f"expected 2-D grayscale frames, got {frame.ndim} dimensions"
            )
    return frames


def _check_window(window_size: int) -> None:
    if window_size < 1:
        raise ValueError(f"window size must be at least 1, got {window_size}")


def _frame_stack(
    frames: list[np.ndarray], x: int, y: int, width: int, height: int
) -> np.ndarray:
    """Cut the same region out of every frame; pixels outside a frame read as zero."""
    stack = np.zeros((len(frames), height, width), dtype=np.float64)
    for layer, frame in zip(stack, frames):
        rows, cols = frame.shape
        top, bottom = max(y, 0), min(y + height, rows)
        left, right = max(x, 0), min(x + width, cols)
        if top < bottom and left < right:
            layer[top - y : bottom - y, left - x : right - x] = frame[
                top:bottom, left:right
            ]
    return stack


def _pixel_contrast(stack: np.ndarray) -> np.ndarray:
    """Per-pixel temporal contrast: sample standard deviation over mean.

    Pixels whose mean intensity is zero contribute zero.
    """
    mean = stack.mean(axis=0)
    std = np.sqrt(stack.var(axis=0, ddof=1))
    ratio = np.zeros_like(mean)
    np.divide(std, mean, out=ratio, where=mean > 0)
    return ratio


def temporal_window_contrast(
    images: Sequence[np.ndarray], x: int, y: int, window_size: int
) -> float:
    """Average temporal contrast over the square window whose top-left corner is (x, y)."""
    _check_window(window_size)
    frames = _frames(images)
    stack = _frame_stack(frames, x, y, window_size, window_size)
    return float(_pixel_contrast(stack).sum() / (window_size * window_size))


def contrast_map(images: Sequence[np.ndarray], window_size: int) -> np.ndarray:
    """Build the 8-bit contrast map of a frame sequence.

    Each output pixel is the averaged temporal contrast of the window starting
    there, scaled by 255 and capped at 255. The map is smaller than the frames
    by ``window_size - 1`` in each direction.
    """
    _check_window(window_size)
    frames = _frames(images)
    height, width = frames[0].shape
    if window_size > height or window_size > width:
        raise ValueError(
            f"window size {window_size} exceeds frame size {width}x{height}"
        )
    ratio = _pixel_contrast(_frame_stack(frames, 0, 0, width, height))
    windows = sliding_window_view(ratio, (window_size, window_size))
    averaged = windows.sum(axis=(-2, -1)) / (window_size * window_size)
    return np.minimum(averaged * 255, 255).astype(np.uint8)


class Runner:
    """Runs the contrast analysis with the configured algorithm parameters."""

    def __init__(self, config: Config, logger: logging.Logger | None = None) -> None:
        self.algorithm = config.algorithm
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def run(self, gray_images: Sequence[np.ndarray]) -> np.ndarray:
        """Compute the contrast map of ``gray_images``."""
        self.logger.info("starting contrast map calculation...")
        result = contrast_map(gray_images, self.algorithm.window_size)
        self.logger.info("calculation finished.")
        return result