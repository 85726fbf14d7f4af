import logging
import re
from typing import Iterable, List, Optional, Sequence, Union

from motordex.domain.models import ExtractionStrategy, PlateCandidate, TextAnnotation
from motordex.domain.patterns import FULL_TEXT_PLATE_RE, is_complete_plate, normalize_plate

logger = logging.getLogger(__name__)

# =========================
# DOMAIN LOGIC (Pure Python)
# =========================

TIMESTAMP_RE = re.compile(r"^\d{2}\.\d{2}\.\d{2,4}\s+\d{1,2}:\d{2}:\d{2}$")


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").replace("\n", " ")).strip()


def fragment_texts(annotations: Sequence[TextAnnotation]) -> List[str]:
    """Trimmed, non-empty texts of every annotation after the full-text one."""
    return [a.text.strip() for a in annotations[1:] if a.text and a.text.strip()]


def _candidate(text: str, strategy: ExtractionStrategy) -> Optional[PlateCandidate]:
    plate = normalize_plate(text)
    if not is_complete_plate(plate):
        return None
    return PlateCandidate(value=plate, strategy=strategy)


def scan_full_text(annotations: Sequence[TextAnnotation]) -> List[PlateCandidate]:
    if not annotations:
        return []
    clean = collapse_whitespace(annotations[0].text)
    found = []
    for match in FULL_TEXT_PLATE_RE.finditer(clean):
        plate = normalize_plate(match.group(0))
        logger.debug("Found plate in full text: %s", plate)
        found.append(PlateCandidate(value=plate, strategy=ExtractionStrategy.FULL_TEXT))
    return found


def validate_fragments(fragments: Sequence[str]) -> List[PlateCandidate]:
    found = []
    for frag in fragments:
        cand = _candidate(frag, ExtractionStrategy.SINGLE_FRAGMENT)
        if cand:
            found.append(cand)
    return found


def combine_pairs(fragments: Sequence[str]) -> List[PlateCandidate]:
    found = []
    for i in range(len(fragments) - 1):
        combined = f"{fragments[i]} {fragments[i + 1]}"
        cand = _candidate(combined, ExtractionStrategy.FRAGMENT_PAIR)
        if cand:
            logger.debug("Valid 2-fragment plate: %r -> %s", combined, cand.value)
            found.append(cand)
    return found


def combine_triples(fragments: Sequence[str]) -> List[PlateCandidate]:
    # Region code and age identifier tend to merge, the suffix letters stay apart
    found = []
    for i in range(len(fragments) - 2):
        combined = f"{fragments[i]}{fragments[i + 1]} {fragments[i + 2]}"
        cand = _candidate(combined, ExtractionStrategy.FRAGMENT_TRIPLE)
        if cand:
            logger.debug("Valid 3-fragment plate: %r -> %s", combined, cand.value)
            found.append(cand)
    return found


def extract_candidates(annotations: Sequence[TextAnnotation]) -> List[PlateCandidate]:
    """
    Runs every extraction strategy over an OCR result and returns the
    candidates in strategy order: full text, single fragment, pairs, triples.
    No strategy short-circuits the others.
    """
    fragments = fragment_texts(annotations)
    logger.debug("Text fragments for plate detection: %s", fragments)

    candidates: List[PlateCandidate] = []
    candidates.extend(scan_full_text(annotations))
    candidates.extend(validate_fragments(fragments))
    candidates.extend(combine_pairs(fragments))
    candidates.extend(combine_triples(fragments))
    # Same plate from the same strategy counts once
    return list(dict.fromkeys(candidates))


def dedupe_candidates(candidates: Iterable[Union[PlateCandidate, str]]) -> List[str]:
    """Unique normalized plates, keeping the order they were first seen in."""
    seen = set()
    plates = []
    for cand in candidates:
        value = cand.value if isinstance(cand, PlateCandidate) else cand
        plate = normalize_plate(value)
        if plate and plate not in seen:
            seen.add(plate)
            plates.append(plate)
    return plates


def is_timestamp(text: str) -> bool:
    return bool(TIMESTAMP_RE.match((text or "").strip()))


def meaningful_text(full_text: Optional[str]) -> Optional[str]:
    """
    General OCR text worth surfacing when no plate was found, or None for
    camera timestamps and one-character noise.
    """
    text = (full_text or "").strip()
    if len(text) < 2 or is_timestamp(text):
        return None
    return text
