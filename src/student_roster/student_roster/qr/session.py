"""Camera-backed QR capture session.

A session walks an explicit state machine::

    IDLE -> INITIALIZING -> CAMERA_AVAILABLE | NO_CAMERA_FALLBACK
         -> SCANNING -> DECODED -> STOPPED

``FAILED -> STOPPED`` is taken on any camera failure, and :meth:`cancel`
moves any non-terminal session to ``STOPPED``. The camera handle is released
exactly once on every path out of :meth:`run`, and again guarded by the
context manager for callers that tear down before a decode happens.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..core.enums import ScanState
from ..core.exceptions import CameraError, ScanSessionError
from .camera import CameraHandle, CameraProvider, select_camera
from .decoder import FrameDecoder

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    ScanState.IDLE: {ScanState.INITIALIZING, ScanState.STOPPED},
    ScanState.INITIALIZING: {
        ScanState.CAMERA_AVAILABLE,
        ScanState.NO_CAMERA_FALLBACK,
        ScanState.FAILED,
        ScanState.STOPPED,
    },
    ScanState.CAMERA_AVAILABLE: {ScanState.SCANNING, ScanState.FAILED, ScanState.STOPPED},
    ScanState.NO_CAMERA_FALLBACK: {ScanState.SCANNING, ScanState.FAILED, ScanState.STOPPED},
    ScanState.SCANNING: {ScanState.DECODED, ScanState.FAILED, ScanState.STOPPED},
    ScanState.DECODED: {ScanState.STOPPED},
    ScanState.FAILED: {ScanState.STOPPED},
    ScanState.STOPPED: set(),
}


class QrCaptureSession:
    def __init__(
        self,
        provider: CameraProvider,
        decoder: FrameDecoder,
        on_scan: Callable[[str], None],
        *,
        max_frames: Optional[int] = None,
    ):
        self._provider = provider
        self._decoder = decoder
        self._on_scan = on_scan
        self._max_frames = max_frames
        self._state = ScanState.IDLE
        self._handle: Optional[CameraHandle] = None
        self._cancelled = threading.Event()
        self._release_lock = threading.Lock()
        self._running = False
        self.used_fallback = False
        self.decoded_text: Optional[str] = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state == ScanState.STOPPED

    def _move(self, target: ScanState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise ScanSessionError(f"Illegal scan transition {self._state.value} -> {target.value}")
        logger.debug("QR session %s -> %s", self._state.value, target.value)
        self._state = target

    def _release(self) -> None:
        with self._release_lock:
            handle, self._handle = self._handle, None
        if handle is not None:
            handle.release()

    def _acquire(self) -> CameraHandle:
        try:
            cameras = self._provider.list_cameras()
        except CameraError as e:
            logger.warning("Could not enumerate cameras: %s", e)
            cameras = []

        chosen = select_camera(cameras)
        if chosen is not None:
            self._move(ScanState.CAMERA_AVAILABLE)
            logger.info("Using camera %r (%s)", chosen.camera_id, chosen.label)
            return self._provider.open(chosen.camera_id)

        self._move(ScanState.NO_CAMERA_FALLBACK)
        self.used_fallback = True
        return self._provider.open_auto()

    def _decode(self, frame) -> Optional[str]:
        try:
            return self._decoder.decode(frame)
        except Exception as e:
            # Most frames carry no code; a decoder hiccup is not a session failure.
            logger.debug("Frame decode failed: %s", e)
            return None

    def _deliver(self, text: str) -> None:
        self.decoded_text = text
        try:
            self._on_scan(text)
        except Exception:
            logger.exception("QR scan handler failed")

    def run(self) -> Optional[str]:
        """Scan until a code is decoded, the session is cancelled or frames run out.

        Returns the decoded text, or None when nothing was decoded. Camera
        failures move the session through ``FAILED`` and are re-raised as
        ``CameraError`` after the camera has been released.
        """
        if self._cancelled.is_set() and self._state == ScanState.STOPPED:
            return None
        if self._state != ScanState.IDLE:
            raise ScanSessionError("A QR capture session can only be run once")

        self._move(ScanState.INITIALIZING)
        self._running = True
        try:
            handle = self._acquire()
            with self._release_lock:
                self._handle = handle
            if self._cancelled.is_set():
                return None

            self._move(ScanState.SCANNING)
            frames = 0
            while not self._cancelled.is_set():
                if self._max_frames is not None and frames >= self._max_frames:
                    logger.info("No QR code after %d frames, giving up", frames)
                    self._cancelled.set()
                    break
                frame = handle.read_frame()
                frames += 1
                text = self._decode(frame)
                if text:
                    self._move(ScanState.DECODED)
                    self._deliver(text)
                    return text
            return None
        except CameraError:
            self._move(ScanState.FAILED)
            logger.error("QR scanner failed to initialize or lost the camera", exc_info=True)
            raise
        finally:
            self._running = False
            self._release()
            if self._state != ScanState.STOPPED:
                self._move(ScanState.STOPPED)

    def cancel(self) -> None:
        """Request the session to stop; safe from any state and any thread."""
        self._cancelled.set()
        if self._state == ScanState.IDLE:
            self._move(ScanState.STOPPED)

    def __enter__(self) -> "QrCaptureSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
        if not self._running:
            self._release()
