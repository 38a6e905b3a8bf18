from __future__ import annotations
import logging
import os
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np
import pytesseract

from .errors import EngineInitFailure, NoMatchFound, RecognitionFailure
from .image_io import load_image, masked_output_path, write_image
from .patterns import TargetPattern
from .text_regions import find_text_regions_in_image
from .types import MaskConfig, RedactionResult, Region, RegionOutcome

logger = logging.getLogger(__name__)


# Default install locations of the Windows Tesseract installer
WINDOWS_TESSERACT_PATHS = (
    r"C:\Program Files\Tesseract-OCR\tesseract.exe",
    r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
)


def _find_tesseract_cmd(cfg: MaskConfig) -> Optional[str]:
    if cfg.tesseract_cmd:
        return cfg.tesseract_cmd
    return next((p for p in WINDOWS_TESSERACT_PATHS if os.path.exists(p)), None)


def _to_ocr_input(roi: np.ndarray) -> np.ndarray:
    """8-bit RGB(A)/gray copy of an OpenCV BGR(A) region, as PIL expects."""
    if roi.dtype == np.uint16:
        roi = (roi >> 8).astype(np.uint8)
    if roi.ndim == 3 and roi.shape[2] == 1:
        roi = roi[:, :, 0]
    if roi.ndim == 3 and roi.shape[2] == 3:
        return cv2.cvtColor(roi, cv2.COLOR_BGR2RGB)
    if roi.ndim == 3 and roi.shape[2] == 4:
        return cv2.cvtColor(roi, cv2.COLOR_BGRA2RGBA)
    return np.ascontiguousarray(roi)


class TesseractEngine:
    """Tesseract bound to one language, reused for every region of a run.

    Not safe to share between concurrent runs.
    """

    def __init__(self, lang: str = "eng", config: str = ""):
        self.lang = lang
        self.config = config
        self.regions_scanned = 0

    def recognize(self, roi: np.ndarray) -> str:
        self.regions_scanned += 1
        h, w = roi.shape[:2]
        try:
            return pytesseract.image_to_string(_to_ocr_input(roi), lang=self.lang, config=self.config)
        except (pytesseract.TesseractError, cv2.error) as exc:
            raise RecognitionFailure(f"OCR failed on {w}x{h} region: {exc}") from exc


def init_engine(cfg: MaskConfig) -> TesseractEngine:
    """Check Tesseract runs and has ``cfg.lang``, and return an engine for it."""
    cmd = _find_tesseract_cmd(cfg)
    if cmd:
        pytesseract.pytesseract.tesseract_cmd = cmd
    try:
        version = pytesseract.get_tesseract_version()
        available = set(pytesseract.get_languages(config=''))
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as exc:
        raise EngineInitFailure(f"Tesseract is not usable: {exc}") from exc

    missing = [lang for lang in cfg.lang.split('+') if lang not in available]
    if missing:
        raise EngineInitFailure(
            f"Tesseract language data not installed: {', '.join(missing)}"
        )
    logger.debug("Tesseract %s ready (lang=%s)", version, cfg.lang)
    return TesseractEngine(lang=cfg.lang, config=cfg.ocr_config)


def recognize(engine, image: np.ndarray, region: Region) -> str:
    # Only the region itself is copied, never the whole image
    roi = np.ascontiguousarray(image[region.slices()])
    try:
        return engine.recognize(roi)
    except RecognitionFailure as exc:
        if exc.region is None:
            exc.region = region
        raise


def _fill_value(image: np.ndarray, color: Sequence[int]):
    """Per-pixel value for an opaque 8-bit BGR ``color`` in ``image``'s layout."""
    scale = 257 if image.dtype == np.uint16 else 1
    b, g, r = (int(c) * scale for c in color)
    gray = round((b + g + r) / 3)
    channels = 1 if image.ndim == 2 else image.shape[2]
    if channels == 3:
        return [b, g, r]
    if channels == 4:
        opaque = np.iinfo(image.dtype).max if np.issubdtype(image.dtype, np.integer) else 1.0
        return [b, g, r, opaque]
    if image.ndim == 2:
        return gray
    return [gray] * channels


def redact(image: np.ndarray, region: Region, color: Sequence[int] = (0, 0, 0)) -> None:
    """Overwrite ``region`` of ``image`` in place with an opaque bar."""
    image[region.slices()] = _fill_value(image, color)


def redact_target(image: np.ndarray, target: str, engine, cfg: Optional[MaskConfig] = None) -> RedactionResult:
    """Black out every candidate text region whose OCR text contains ``target``.

    ``image`` is modified in place and returned inside the result. Raises
    ``NoMatchFound`` (leaving the image untouched) when no region matches.
    A region the engine cannot read aborts the run, unless
    ``cfg.skip_unreadable`` is set.
    """
    cfg = cfg or MaskConfig()
    pattern = TargetPattern.from_string(target)
    regions = find_text_regions_in_image(image)

    outcomes: List[RegionOutcome] = []
    for region in regions:
        try:
            text = recognize(engine, image, region)
        except RecognitionFailure as exc:
            if not cfg.skip_unreadable:
                raise
            logger.warning("Skipping unreadable region %s: %s", region, exc)
            continue
        matched = pattern.matches(text)
        logger.debug("Region %s -> %r (matched=%s)", region, text.strip(), matched)
        outcomes.append(RegionOutcome(region=region, text=text, matched=matched))

    result = RedactionResult(image=image, outcomes=outcomes)
    if not result.found:
        raise NoMatchFound(target, outcomes)

    # Redact after the loop so no region is read after a neighbour was blacked out
    img_h, img_w = image.shape[:2]
    for region in result.matched_regions:
        redact(image, region.expand(cfg.mask_padding, img_w, img_h), cfg.mask_color)
    return result


def mask_image_file(path: str, target: str, cfg: MaskConfig) -> Tuple[str, RedactionResult]:
    """
    Returns: (masked_image_path, result). Nothing is written on NoMatchFound.
    """
    image = load_image(path)
    engine = init_engine(cfg)
    result = redact_target(image, target, engine, cfg)

    out_path = masked_output_path(path)
    write_image(out_path, result.image)
    return out_path, result
