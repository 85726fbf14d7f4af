import re
from typing import NamedTuple, Optional, Pattern, Tuple


class PlatePattern(NamedTuple):
    name: str
    regex: Pattern
    # Partial shapes only validate single OCR fragments
    partial: bool = False


PLATE_PATTERNS: Tuple[PlatePattern, ...] = (
    PlatePattern("current", re.compile(r"^[A-Z]{2}\d{2}[A-Z]{3}$")),   # AB12CDE
    PlatePattern("prefix", re.compile(r"^[A-Z]\d{1,3}[A-Z]{3}$")),     # A123BCD
    PlatePattern("suffix", re.compile(r"^[A-Z]{3}\d{1,3}[A-Z]$")),     # ABC123D
    PlatePattern("dateless", re.compile(r"^[A-Z]{1,3}\d{1,4}$")),      # ABC1234
    PlatePattern("current_front", re.compile(r"^[A-Z]{2}\d{2}$"), partial=True),  # AB12
    PlatePattern("current_back", re.compile(r"^[A-Z]{3}$"), partial=True),        # CDE
)

# Current-format plate inside free text, with optional spaces between groups
FULL_TEXT_PLATE_RE = re.compile(r"[A-Z]{2}\s?\d{2}\s?[A-Z]{3}")


def normalize_plate(text: str) -> str:
    return re.sub(r"\s+", "", text or "").upper()


def match_format(candidate: str) -> Optional[PlatePattern]:
    """
    Returns the first pattern the candidate matches, complete shapes first.
    The candidate must already be uppercased and whitespace-free.
    """
    for pattern in PLATE_PATTERNS:
        if pattern.regex.match(candidate or ""):
            return pattern
    return None


def is_valid_plate(candidate: str) -> bool:
    return match_format(candidate) is not None


def is_complete_plate(candidate: str) -> bool:
    pattern = match_format(candidate)
    return pattern is not None and not pattern.partial
