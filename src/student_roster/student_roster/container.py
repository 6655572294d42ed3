from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .attendance.service import AttendanceService
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .core.constants import (
    DEFAULT_ABSENTEE_LIMIT,
    DEFAULT_BIRTHDAY_WINDOW_DAYS,
    DEFAULT_QR_CAMERA_PROBE_LIMIT,
    DEFAULT_QR_SCAN_MAX_FRAMES,
    DEFAULT_TOP_ATTENDEES,
)
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .qr.camera import CameraProvider
from .qr.decoder import FrameDecoder, PyzbarFrameDecoder
from .qr.opencv_camera import OpenCVCameraProvider
from .qr.session import QrCaptureSession
from .store.mysql_record_store import MySQLRecordStore
from .store.repository import RecordStore
from .students.service import StudentService
from .students.store_student_repository import StoreStudentRepository


@dataclass(frozen=True)
class Container:
    store: RecordStore

    students_repo: StoreStudentRepository
    attendance_repo: StoreAttendanceRepository

    student_service: StudentService
    attendance_service: AttendanceService
    dashboard_service: DashboardService

    camera_provider: CameraProvider
    frame_decoder: FrameDecoder
    qr_scan_max_frames: Optional[int] = DEFAULT_QR_SCAN_MAX_FRAMES

    conn: Optional[DatabaseConnection] = None

    def new_scan_session(self, on_scan: Callable[[str], None]) -> QrCaptureSession:
        return QrCaptureSession(
            self.camera_provider,
            self.frame_decoder,
            on_scan,
            max_frames=self.qr_scan_max_frames,
        )


def assemble_container(
    store: RecordStore,
    *,
    camera_provider: CameraProvider,
    frame_decoder: FrameDecoder,
    absentee_limit: int = DEFAULT_ABSENTEE_LIMIT,
    top_attendees_limit: int = DEFAULT_TOP_ATTENDEES,
    birthday_window_days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS,
    qr_scan_max_frames: Optional[int] = DEFAULT_QR_SCAN_MAX_FRAMES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    students_repo = StoreStudentRepository(store)
    attendance_repo = StoreAttendanceRepository(store)

    return Container(
        store=store,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo),
        dashboard_service=DashboardService(
            students_repo,
            attendance_repo,
            absentee_limit=absentee_limit,
            top_n=top_attendees_limit,
            birthday_window_days=birthday_window_days,
        ),
        camera_provider=camera_provider,
        frame_decoder=frame_decoder,
        qr_scan_max_frames=qr_scan_max_frames,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: object = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        MySQLRecordStore(conn),
        camera_provider=OpenCVCameraProvider(
            probe_limit=int(getattr(settings, "QR_CAMERA_PROBE_LIMIT", DEFAULT_QR_CAMERA_PROBE_LIMIT)),
        ),
        frame_decoder=PyzbarFrameDecoder(),
        absentee_limit=int(getattr(settings, "ABSENTEE_LIMIT", DEFAULT_ABSENTEE_LIMIT)),
        top_attendees_limit=int(getattr(settings, "TOP_ATTENDEES_LIMIT", DEFAULT_TOP_ATTENDEES)),
        birthday_window_days=int(getattr(settings, "BIRTHDAY_WINDOW_DAYS", DEFAULT_BIRTHDAY_WINDOW_DAYS)),
        qr_scan_max_frames=int(getattr(settings, "QR_SCAN_MAX_FRAMES", DEFAULT_QR_SCAN_MAX_FRAMES)),
        conn=conn,
    )
