import base64
import logging
from typing import List, Optional

import requests

from motordex.core.config import Settings
from motordex.domain.errors import OcrFailed
from motordex.domain.models import TextAnnotation
from motordex.ports.ocr_port import OcrPort

logger = logging.getLogger(__name__)


class GoogleVisionAdapter(OcrPort):
    """
    TEXT_DETECTION through the Cloud Vision REST API. The first annotation
    returned is the full text, the rest are single words.
    """
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.api_key = settings.require("google_api_key")
        self.url = settings.vision_url
        self.timeout = settings.ocr_timeout
        self.session = session or requests.Session()

    def annotate(self, image: bytes) -> List[TextAnnotation]:
        body = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image).decode("ascii")},
                    "features": [{"type": "TEXT_DETECTION"}],
                }
            ]
        }
        try:
            resp = self.session.post(
                self.url,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as exc:
            raise OcrFailed(f"Vision API request failed: {exc}") from exc
        except ValueError as exc:
            raise OcrFailed("Vision API returned a non-JSON body") from exc

        if not isinstance(payload, dict):
            raise OcrFailed("Vision API returned an unexpected body")

        responses = payload.get("responses") or [{}]
        if not isinstance(responses, list):
            raise OcrFailed("Vision API returned an unexpected body")
        first = responses[0] or {}
        if not isinstance(first, dict):
            raise OcrFailed("Vision API returned an unexpected body")

        if "error" in first:
            error = first["error"]
            detail = error.get("message", error) if isinstance(error, dict) else str(error)
            raise OcrFailed(f"Vision API error: {detail}")

        raw = first.get("textAnnotations") or []
        if not isinstance(raw, list):
            raise OcrFailed("Vision API returned an unexpected body")
        logger.debug("Text annotations count: %d", len(raw))
        return [TextAnnotation.from_vision(a) for a in raw]
