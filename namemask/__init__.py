"""Find a word or name in an image with OCR and black it out."""

from .errors import (
    EngineInitFailure,
    ImageReadFailure,
    ImageWriteFailure,
    MaskingFailure,
    NameMaskError,
    NoMatchFound,
    RecognitionFailure,
)
from .ocr_mask import mask_image_file, redact_target
from .types import MaskConfig, Region

__version__ = "0.1.0"
