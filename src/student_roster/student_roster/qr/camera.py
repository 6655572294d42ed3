from __future__ import annotations

import re
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..core.constants import QR_CAMERA_LABEL_PATTERN
from ..core.exceptions import CameraError

_PREFERRED_LABEL = re.compile(QR_CAMERA_LABEL_PATTERN, re.IGNORECASE)


@dataclass(frozen=True)
class CameraInfo:
    camera_id: Any
    label: str


def select_camera(cameras: Sequence[CameraInfo]) -> Optional[CameraInfo]:
    """Prefer a back/rear/environment facing camera, else the first one."""
    for cam in cameras:
        if _PREFERRED_LABEL.search(cam.label or ""):
            return cam
    return cameras[0] if cameras else None


class CameraHandle(ABC):
    """An open video stream owned by exactly one scan session."""

    def __init__(self, on_release=None):
        self._on_release = on_release
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    @abstractmethod
    def read_frame(self) -> Any:
        """Return the next frame; raise CameraError when the stream is gone."""

    @abstractmethod
    def _close(self) -> None:
        raise NotImplementedError

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            self._close()
        finally:
            if self._on_release:
                self._on_release(self)


class CameraProvider(ABC):
    """Enumerates cameras and leases one open stream at a time."""

    def __init__(self) -> None:
        self._held: Optional[CameraHandle] = None
        self._lease_lock = threading.Lock()

    @abstractmethod
    def list_cameras(self) -> Sequence[CameraInfo]:
        raise NotImplementedError

    @abstractmethod
    def _open(self, camera_id: Any) -> CameraHandle:
        raise NotImplementedError

    @abstractmethod
    def _open_auto(self) -> CameraHandle:
        """Let the capture library pick a device on its own."""

    @property
    def busy(self) -> bool:
        return self._held is not None

    def _lease(self, opener) -> CameraHandle:
        # Check, open and assign happen as one step under the lease lock.
        with self._lease_lock:
            if self._held is not None:
                raise CameraError("Camera is already in use by another scan session")
            handle = opener()
            handle._on_release = self._returned
            self._held = handle
            return handle

    def _returned(self, handle: CameraHandle) -> None:
        with self._lease_lock:
            if self._held is handle:
                self._held = None

    def open(self, camera_id: Any) -> CameraHandle:
        return self._lease(lambda: self._open(camera_id))

    def open_auto(self) -> CameraHandle:
        return self._lease(self._open_auto)
