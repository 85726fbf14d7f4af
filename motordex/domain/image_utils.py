from typing import Optional

import numpy as np
import cv2

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp")

# Small phone crops are upscaled until the short side reaches this
MIN_OCR_HEIGHT = 720


def decode_image(data: bytes) -> Optional[np.ndarray]:
    """Decodes uploaded bytes into a BGR image, or None when OpenCV cannot read them."""
    if not data:
        return None
    img_array = np.frombuffer(data, np.uint8)
    return cv2.imdecode(img_array, cv2.IMREAD_COLOR)


def upscale_factor(img_bgr: np.ndarray, min_height: int = MIN_OCR_HEIGHT) -> float:
    h = img_bgr.shape[0]
    if h <= 0 or h >= min_height:
        return 1.0
    return min_height / float(h)


def preprocess_for_ocr(img_bgr: np.ndarray, scale: float = 1.0) -> np.ndarray:
    """
    Grayscale, denoised, binarised copy of a whole photo for word-level OCR
    (dark text on light background, which is what Tesseract expects).
    """
    if img_bgr is None or img_bgr.size == 0:
        raise ValueError("Empty image for OCR preprocessing")

    img = img_bgr
    if scale != 1.0:
        img = cv2.resize(img_bgr, None, fx=scale, fy=scale, interpolation=cv2.INTER_CUBIC)

    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=40, sigmaSpace=40)

    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    gray = clahe.apply(gray)

    _, thr = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

    # Plates are dark on light; flip when most of the frame came out dark
    if thr.mean() < 127:
        thr = cv2.bitwise_not(thr)
    return thr
