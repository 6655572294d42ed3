from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import cv2
from PIL import Image

logger = logging.getLogger(__name__)


class FrameDecoder(Protocol):
    def decode(self, frame: Any) -> Optional[str]:
        """Return the QR text found in ``frame`` or None."""
        raise NotImplementedError


def decode_image(img: Image.Image) -> Optional[str]:
    # pyzbar loads the zbar shared library on import; only pay for it when decoding.
    from pyzbar.pyzbar import decode as pyzbar_decode

    for symbol in pyzbar_decode(img):
        try:
            text = symbol.data.decode("utf-8").strip()
        except UnicodeDecodeError:
            logger.debug("Skipping QR symbol that is not UTF-8 text")
            continue
        if text:
            return text
    return None


class PyzbarFrameDecoder:
    """Decode OpenCV BGR frames with pyzbar."""

    def decode(self, frame: Any) -> Optional[str]:
        if frame is None:
            return None
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return decode_image(Image.fromarray(rgb))
