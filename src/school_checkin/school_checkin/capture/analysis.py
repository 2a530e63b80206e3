from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional, Protocol

import cv2
import numpy as np

from ..core.constants import ANALYSIS_UNAVAILABLE_NOTE
from ..core.exceptions import AnalysisUnavailable

logger = logging.getLogger(__name__)


class ImageAnalyzer(Protocol):
    def analyze(self, image_ref: str) -> str:
        """Short note about the photo; raise AnalysisUnavailable on failure."""

        raise NotImplementedError


def decode_image(image_ref: str) -> np.ndarray:
    """Decode a data URI (or bare base64) into a BGR image."""

    try:
        payload = image_ref.split(",", 1)[1] if "," in image_ref else image_ref
        img_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AnalysisUnavailable("ภาพไม่ถูกต้อง") from e

    nparr = np.frombuffer(img_bytes, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED) if nparr.size else None
    if img is None:
        raise AnalysisUnavailable("ภาพไม่ถูกต้อง")

    # RGBA -> BGR
    if len(img.shape) == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    # Grayscale -> BGR
    elif len(img.shape) == 2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    return img


class FaceImageAnalyzer:
    """Checks that a real face is in the selfie (OpenCV Haar cascade)."""

    def __init__(self, *, cascade_path: Optional[str] = None, min_face_size: int = 40):
        self._cascade_path = cascade_path or (cv2.data.haarcascades + "haarcascade_frontalface_default.xml")
        self._min_face_size = int(min_face_size)
        self._classifier = None

    def _get_classifier(self):
        if self._classifier is None:
            classifier = cv2.CascadeClassifier(self._cascade_path)
            if classifier.empty():
                raise AnalysisUnavailable(f"cannot load face cascade: {self._cascade_path}")
            self._classifier = classifier
        return self._classifier

    def analyze(self, image_ref: str) -> str:
        img = decode_image(image_ref)
        try:
            gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
            faces = self._get_classifier().detectMultiScale(
                gray,
                scaleFactor=1.1,
                minNeighbors=5,
                minSize=(self._min_face_size, self._min_face_size),
            )
        except cv2.error as e:
            raise AnalysisUnavailable(str(e)) from e

        count = len(faces)
        if count == 0:
            return "No person visible"
        return f"Yes: {count} person visible" if count == 1 else f"Yes: {count} people visible"


def analyze_or_placeholder(analyzer: ImageAnalyzer, image_ref: str) -> str:
    """Analysis never blocks a commit: failures become a fixed note."""

    try:
        return analyzer.analyze(image_ref) or "Analysis failed."
    except AnalysisUnavailable as e:
        logger.warning("image analysis unavailable: %s", e)
        return ANALYSIS_UNAVAILABLE_NOTE
    except Exception:
        logger.exception("image analysis crashed")
        return ANALYSIS_UNAVAILABLE_NOTE
