"""Find rectangles in an image that are likely to hold a short line of text.

Text strokes are dark, achromatic and thin. Thresholding HSV for such
pixels and dilating the result merges the strokes of a word into a single
blob, whose bounding box is then filtered with a few geometric rules.
"""
from __future__ import annotations
import logging
from typing import List

import cv2
import numpy as np

from .errors import MaskingFailure
from .types import Region, ResolutionProfile

logger = logging.getLogger(__name__)

HIGH_RES_MIN_ROWS = 720
HIGH_RES_VALUE_UPPER = 30
LOW_RES_VALUE_UPPER = 80
HIGH_RES_DILATE_ITERATIONS = 5
LOW_RES_DILATE_ITERATIONS = 3
MIN_HEIGHT_DIVISOR = 72
MAX_ASPECT_RATIO = 15
DILATE_KERNEL_SIZE = (5, 3)  # (width, height)


def resolution_profile(height: int) -> ResolutionProfile:
    """Masking and filtering thresholds for an image with ``height`` rows.

    Low resolution images get a looser value bound, since antialiasing
    smears stroke edges over more of each glyph, and fewer dilation passes.
    """
    high_res = height >= HIGH_RES_MIN_ROWS
    return ResolutionProfile(
        value_upper=HIGH_RES_VALUE_UPPER if high_res else LOW_RES_VALUE_UPPER,
        dilate_iterations=HIGH_RES_DILATE_ITERATIONS if high_res else LOW_RES_DILATE_ITERATIONS,
        min_region_height=height / MIN_HEIGHT_DIVISOR,
    )


def _to_bgr8(image: np.ndarray) -> np.ndarray:
    if image is None or image.size == 0:
        raise MaskingFailure("Cannot mask an empty image")
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise MaskingFailure(f"Unsupported pixel type: {image.dtype}")

    channels = 1 if image.ndim == 2 else image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if channels == 3:
        return image
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    raise MaskingFailure(f"Unsupported channel count: {channels}")


def mask_text(image: np.ndarray) -> np.ndarray:
    """Binary mask (0/255) of dark achromatic pixels, dilated into line blobs."""
    try:
        bgr = _to_bgr8(image)
        profile = resolution_profile(bgr.shape[0])
        hsv = cv2.cvtColor(bgr, cv2.COLOR_BGR2HSV)
        lower = np.array([0, 0, 0], dtype=np.uint8)
        upper = np.array([0, 0, profile.value_upper], dtype=np.uint8)
        mask = cv2.inRange(hsv, lower, upper)
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, DILATE_KERNEL_SIZE)
        mask = cv2.dilate(mask, kernel, iterations=profile.dilate_iterations)
    except cv2.error as exc:
        raise MaskingFailure(f"Failed to build text mask: {exc}") from exc
    logger.debug("Text mask: value<=%d, %d dilation passes, %d foreground px",
                 profile.value_upper, profile.dilate_iterations, cv2.countNonZero(mask))
    return mask


def is_text_like(w: int, h: int, image_width: int, min_height: float) -> bool:
    """Geometric filter for a single short line of text.

    Wider than tall, taller than noise, not a thin sliver, and narrower than
    half the image (a short token rather than a sentence or a banner).
    """
    if h <= 0 or w <= 0:
        return False
    return (
        h < w
        and h > min_height
        and w / h < MAX_ASPECT_RATIO
        and w < image_width / 2
    )


def find_text_regions(mask: np.ndarray) -> List[Region]:
    img_h, img_w = mask.shape[:2]
    min_height = resolution_profile(img_h).min_region_height
    try:
        contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    except cv2.error as exc:
        raise MaskingFailure(f"Failed to find contours: {exc}") from exc

    regions: List[Region] = []
    for contour in contours:
        x, y, w, h = cv2.boundingRect(contour)
        if is_text_like(w, h, img_w, min_height):
            regions.append(Region(x=int(x), y=int(y), w=int(w), h=int(h)))
    logger.debug("%d contours, %d candidate text regions", len(contours), len(regions))
    return regions


def find_text_regions_in_image(image: np.ndarray) -> List[Region]:
    return find_text_regions(mask_text(image))
