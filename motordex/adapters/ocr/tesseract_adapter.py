from typing import Dict, List, Optional, Tuple
import logging
import os
import pytesseract
from pytesseract import Output
from motordex.domain import image_utils
from motordex.domain.errors import OcrFailed
from motordex.domain.models import TextAnnotation, Vertex
from motordex.ports.ocr_port import OcrPort

logger = logging.getLogger(__name__)

# Configure Tesseract executable path for Windows
if os.name == 'nt':  # Windows
    tesseract_cmd = os.getenv(
        'TESSERACT_CMD',
        r'C:\Program Files\Tesseract-OCR\tesseract.exe'
    )
    if os.path.exists(tesseract_cmd):
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd


def _box(left: int, top: int, width: int, height: int, scale: float) -> List[Vertex]:
    x1, y1 = int(left / scale), int(top / scale)
    x2, y2 = int((left + width) / scale), int((top + height) / scale)
    return [Vertex(x=x1, y=y1), Vertex(x=x2, y=y1), Vertex(x=x2, y=y2), Vertex(x=x1, y=y2)]


class TesseractAdapter(OcrPort):
    """
    Local OCR producing the same shape as Cloud Vision: full text first,
    then one annotation per word with its bounding box.
    """
    def __init__(self, config: Optional[str] = None):
        # Sparse text: plates sit anywhere in a photo
        self.config = config or r"--oem 3 --psm 11 -c preserve_interword_spaces=1"

    def annotate(self, image: bytes) -> List[TextAnnotation]:
        img = image_utils.decode_image(image)
        if img is None:
            raise OcrFailed("Could not decode image")

        scale = image_utils.upscale_factor(img)
        try:
            prepared = image_utils.preprocess_for_ocr(img, scale=scale)
            data = pytesseract.image_to_data(prepared, config=self.config, output_type=Output.DICT)
        except (ValueError, pytesseract.TesseractError) as exc:
            raise OcrFailed(f"Tesseract failed: {exc}") from exc

        words: List[TextAnnotation] = []
        lines: Dict[Tuple[int, int, int], List[str]] = {}
        bounds = None
        for i, text in enumerate(data["text"]):
            text = (text or "").strip()
            if not text:
                continue
            left, top = data["left"][i], data["top"][i]
            width, height = data["width"][i], data["height"][i]
            words.append(TextAnnotation(text=text, vertices=_box(left, top, width, height, scale)))

            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(key, []).append(text)

            right, bottom = left + width, top + height
            if bounds is None:
                bounds = [left, top, right, bottom]
            else:
                bounds = [min(bounds[0], left), min(bounds[1], top),
                          max(bounds[2], right), max(bounds[3], bottom)]

        if not words:
            return []

        full_text = "\n".join(" ".join(ws) for ws in lines.values())
        x1, y1, x2, y2 = bounds
        full = TextAnnotation(text=full_text, vertices=_box(x1, y1, x2 - x1, y2 - y1, scale))
        logger.debug("Tesseract found %d words", len(words))
        return [full] + words
