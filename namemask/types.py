from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    w: int
    h: int

    @property
    def aspect_ratio(self) -> float:
        return self.w / self.h

    def slices(self) -> Tuple[slice, slice]:
        """Row/column slices selecting this region from an image array."""
        return slice(self.y, self.y + self.h), slice(self.x, self.x + self.w)

    def expand(self, pad: int, width: int, height: int) -> 'Region':
        """Grow by ``pad`` pixels on every side, clamped to a width x height image."""
        x1 = max(self.x - pad, 0)
        y1 = max(self.y - pad, 0)
        x2 = min(self.x + self.w + pad, width)
        y2 = min(self.y + self.h + pad, height)
        return Region(x=x1, y=y1, w=x2 - x1, h=y2 - y1)

    def as_dict(self):
        return {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h}


@dataclass(frozen=True)
class ResolutionProfile:
    value_upper: int  # max HSV value (0-255) counted as a text pixel
    dilate_iterations: int
    min_region_height: float  # regions must be strictly taller than this


@dataclass
class RegionOutcome:
    region: Region
    text: str
    matched: bool


@dataclass
class RedactionResult:
    image: np.ndarray
    outcomes: List[RegionOutcome] = field(default_factory=list)

    @property
    def matched_regions(self) -> List[Region]:
        return [o.region for o in self.outcomes if o.matched]

    @property
    def found(self) -> bool:
        return any(o.matched for o in self.outcomes)


@dataclass
class MaskConfig:
    lang: str = "eng"
    mask_color: Tuple[int, int, int] = (0, 0, 0)  # BGR for OpenCV
    mask_padding: int = 0
    tesseract_cmd: Optional[str] = None
    ocr_config: str = "--psm 7"  # candidate regions hold a single text line
    skip_unreadable: bool = False
