from __future__ import annotations
import os

import cv2
import numpy as np

from .errors import ImageReadFailure, ImageWriteFailure


def load_image(path: str) -> np.ndarray:
    """Decode an image keeping its channel count, alpha and bit depth."""
    image = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageReadFailure(f"Failed to load image: {path}")
    return image


def masked_output_path(path: str) -> str:
    base, ext = os.path.splitext(path)
    return base + "_masked" + ext


def write_image(path: str, image: np.ndarray) -> str:
    try:
        ok = cv2.imwrite(path, image)
    except cv2.error as exc:
        raise ImageWriteFailure(f"Failed to write image {path}: {exc}") from exc
    if not ok:
        raise ImageWriteFailure(f"Failed to write image: {path}")
    return path
