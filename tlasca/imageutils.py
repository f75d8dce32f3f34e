"""Loading, saving and converting images, and reading frame numbers from file names."""

from __future__ import annotations

import os
import re

import numpy as np
from PIL import Image

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")

_SIXTEEN_BIT_MODES = frozenset({"I;16", "I;16B", "I;16L", "I;16N", "I"})


def extract_number(filename: str | os.PathLike[str]) -> int:
    """Return the integer that names a frame file, e.g. ``10`` for ``"dir/10.png"``.

    Raises ``ValueError`` when the base name, without a ``.png`` suffix, is
    not a plain decimal integer.
    """
    name = os.fspath(filename)
    stripped = name.rstrip("/" + os.sep)
    base = os.path.basename(stripped) if stripped else (name[:1] or ".")
    if base.endswith(".png"):
        base = base[: -len(".png")]
    if not _DECIMAL.fullmatch(base):
        raise ValueError(f"parsing {base!r}: invalid syntax")
    number = int(base)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"parsing {base!r}: value out of range")
    return number


def load_image(filename: str | os.PathLike[str]) -> Image.Image:
    """Decode the PNG image stored at ``filename``."""
    with Image.open(filename, formats=["PNG"]) as img:
        img.load()
        return img.copy()


def convert_to_gray(img: Image.Image) -> np.ndarray:
    """Convert an image to an 8-bit grayscale array of shape (height, width).

    Colours are premultiplied by alpha and weighted by luminance, so fully
    transparent pixels become black.
    """
    if img.mode == "L":
        return np.array(img, dtype=np.uint8)

    if img.mode in _SIXTEEN_BIT_MODES:
        values = np.clip(np.array(img, dtype=np.int64), 0, 0xFFFF)
        return (values >> 8).astype(np.uint8)

    rgba = np.array(img.convert("RGBA"), dtype=np.uint64)
    alpha = rgba[..., 3]
    # Widen 8-bit channels to 16 bits and premultiply by alpha.
    red, green, blue = (
        (rgba[..., channel] * 0x101 * alpha) // 0xFF for channel in range(3)
    )
    luma = (19595 * red + 38470 * green + 7471 * blue + (1 << 15)) >> 24
    return luma.astype(np.uint8)


def save_image(filename: str | os.PathLike[str], img: np.ndarray) -> None:
    """Write a 2-D grayscale array to ``filename`` as a PNG file."""
    array = np.asarray(img)
    if array.ndim != 2:
        raise ValueError(f"expected a 2-D grayscale array, got {array.ndim} dimensions")
    gray = Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8))
    with open(filename, "wb") as handle:
        gray.save(handle, format="PNG")