from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import cv2

from ..core.constants import DEFAULT_QR_CAMERA_PROBE_LIMIT
from ..core.exceptions import CameraError
from .camera import CameraHandle, CameraInfo, CameraProvider

logger = logging.getLogger(__name__)

_V4L_SYSFS = Path("/sys/class/video4linux")


def _device_label(index: int) -> str:
    # Linux exposes the device name in sysfs; elsewhere OpenCV gives us nothing.
    name_file = _V4L_SYSFS / f"video{index}" / "name"
    try:
        return name_file.read_text(encoding="utf-8").strip()
    except OSError:
        return f"Camera {index}"


class OpenCVCameraHandle(CameraHandle):
    def __init__(self, capture: "cv2.VideoCapture"):
        super().__init__()
        self._capture = capture

    def read_frame(self) -> Any:
        ok, frame = self._capture.read()
        if not ok:
            raise CameraError("Camera stream stopped delivering frames")
        return frame

    def _close(self) -> None:
        self._capture.release()


class OpenCVCameraProvider(CameraProvider):
    def __init__(self, *, probe_limit: int = DEFAULT_QR_CAMERA_PROBE_LIMIT, fps: int = 10):
        super().__init__()
        self._probe_limit = int(probe_limit)
        self._fps = int(fps)

    def list_cameras(self) -> List[CameraInfo]:
        if self.busy:
            raise CameraError("Camera is already in use by another scan session")
        found: List[CameraInfo] = []
        for index in range(self._probe_limit):
            capture = cv2.VideoCapture(index)
            try:
                if capture.isOpened():
                    found.append(CameraInfo(camera_id=index, label=_device_label(index)))
            finally:
                capture.release()
        logger.debug("Found %d camera(s)", len(found))
        return found

    def _start(self, capture: "cv2.VideoCapture", what: str) -> OpenCVCameraHandle:
        if not capture.isOpened():
            capture.release()
            raise CameraError(f"Could not open {what}")
        capture.set(cv2.CAP_PROP_FPS, self._fps)
        return OpenCVCameraHandle(capture)

    def _open(self, camera_id: Any) -> OpenCVCameraHandle:
        return self._start(cv2.VideoCapture(int(camera_id)), f"camera {camera_id}")

    def _open_auto(self) -> OpenCVCameraHandle:
        return self._start(cv2.VideoCapture(0, cv2.CAP_ANY), "default camera")
