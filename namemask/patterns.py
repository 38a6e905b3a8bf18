from dataclasses import dataclass
from typing import Tuple


# OCR tends to sprinkle these into recognized text
NOISE_CHARS = ".,"

_NOISE_TABLE = str.maketrans('', '', NOISE_CHARS)


def normalize_text(text: str) -> str:
    return text.lower().translate(_NOISE_TABLE)


@dataclass(frozen=True)
class TargetPattern:
    raw: str
    candidates: Tuple[str, ...]

    @classmethod
    def from_string(cls, raw: str):
        # Same normalization as the OCR side, so "j.doe" can still match
        candidates = [normalize_text(raw)]
        # Usernames stored with underscores are often shown with spaces in UIs
        if '_' in raw:
            spaced = normalize_text(raw.replace('_', ' '))
            if spaced not in candidates:
                candidates.append(spaced)
        return cls(raw=raw, candidates=tuple(candidates))

    def matches(self, text: str) -> bool:
        """True if any candidate occurs inside the normalized OCR text.

        Substring containment rather than equality, since OCR frequently
        picks up neighbouring characters along with the target.
        """
        normalized = normalize_text(text)
        return any(c in normalized for c in self.candidates)
