from typing import List, Protocol
from motordex.domain.models import TextAnnotation


class OcrPort(Protocol):
    def annotate(self, image: bytes) -> List[TextAnnotation]:
        ...
