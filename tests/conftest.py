from __future__ import annotations

import itertools
from datetime import date
from typing import Optional

import pytest

from src.student_roster.student_roster.container import assemble_container
from src.student_roster.student_roster.core.exceptions import CameraError, StoreError
from src.student_roster.student_roster.qr.camera import CameraHandle, CameraInfo, CameraProvider


class InMemoryRecordStore:
    """RecordStore fake.

    ``failing`` holds operation names (``"create"``) or operation and collection
    pairs (``"list_all:attendance"``) that raise StoreError.
    """

    def __init__(self):
        self._docs: dict[str, dict[str, dict]] = {}
        self._ids = itertools.count(1)
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, op: str, collection: str) -> None:
        self.calls.append((op, collection))
        if op in self.failing or f"{op}:{collection}" in self.failing:
            raise StoreError(f"{op} failed")

    def list_all(self, collection):
        self._check("list_all", collection)
        return [{"id": doc_id, **body} for doc_id, body in self._docs.get(collection, {}).items()]

    def get(self, collection, doc_id):
        self._check("get", collection)
        body = self._docs.get(collection, {}).get(doc_id)
        return {"id": doc_id, **body} if body is not None else None

    def create(self, collection, fields):
        self._check("create", collection)
        doc_id = f"doc{next(self._ids)}"
        self._docs.setdefault(collection, {})[doc_id] = dict(fields)
        return doc_id

    def update(self, collection, doc_id, fields):
        self._check("update", collection)
        docs = self._docs.get(collection, {})
        if doc_id not in docs:
            raise StoreError("missing")
        for key, value in fields.items():
            if value is None:
                docs[doc_id].pop(key, None)
            else:
                docs[doc_id][key] = value

    def delete(self, collection, doc_id):
        self._check("delete", collection)
        self._docs.get(collection, {}).pop(doc_id, None)

    def put(self, collection, doc_id, fields):
        self._docs.setdefault(collection, {})[doc_id] = dict(fields)


class FakeCameraHandle(CameraHandle):
    def __init__(self, frames, *, fail_after: Optional[int] = None):
        super().__init__()
        self._frames = list(frames)
        self._fail_after = fail_after
        self.reads = 0
        self.close_calls = 0

    def read_frame(self):
        if self._fail_after is not None and self.reads >= self._fail_after:
            raise CameraError("stream lost")
        self.reads += 1
        return self._frames.pop(0) if self._frames else None

    def _close(self):
        self.close_calls += 1


class FakeCameraProvider(CameraProvider):
    def __init__(self, cameras=(), frames=(), *, fail_open=False, fail_list=False, fail_after=None):
        super().__init__()
        self.cameras = [CameraInfo(camera_id=i, label=label) for i, label in enumerate(cameras)]
        self.frames = list(frames)
        self.fail_open = fail_open
        self.fail_list = fail_list
        self.fail_after = fail_after
        self.opened: list = []
        self.handles: list[FakeCameraHandle] = []

    def list_cameras(self):
        if self.fail_list:
            raise CameraError("enumeration failed")
        return list(self.cameras)

    def _make(self, camera_id):
        if self.fail_open:
            raise CameraError("permission denied")
        self.opened.append(camera_id)
        handle = FakeCameraHandle(self.frames, fail_after=self.fail_after)
        self.handles.append(handle)
        return handle

    def _open(self, camera_id):
        return self._make(camera_id)

    def _open_auto(self):
        return self._make("auto")


class FakeDecoder:
    """Frames are plain values: str decodes to itself, Exception instances are raised."""

    def decode(self, frame):
        if isinstance(frame, Exception):
            raise frame
        return frame if isinstance(frame, str) else None


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 3, 1)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def camera() -> FakeCameraProvider:
    return FakeCameraProvider(cameras=["Front Camera", "Back Camera"], frames=[None, "doc1"])


@pytest.fixture
def container(store, camera):
    return assemble_container(store, camera_provider=camera, frame_decoder=FakeDecoder(), qr_scan_max_frames=5)


@pytest.fixture
def app(monkeypatch, container):
    from src.student_roster.student_roster.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    flask_app = create_app(container=container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_camera():
    return FakeCameraProvider


@pytest.fixture
def decoder() -> FakeDecoder:
    return FakeDecoder()
