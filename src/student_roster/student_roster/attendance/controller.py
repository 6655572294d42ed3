from __future__ import annotations

import logging
from datetime import date, datetime

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import CameraError, StoreError, ValidationError
from ..container import Container
from ..qr.decoder import decode_image

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _checkin(payload: str):
        try:
            name = container.attendance_service.record_scan(payload)
            return jsonify({"success": True, "studentId": payload.strip(), "message": f"{name or payload} marked present"}), 200
        except ValidationError as e:
            return _fail(str(e), 400)
        except StoreError:
            return _fail("Error saving attendance", 503)
        except Exception:
            logger.exception("Unexpected error during QR check-in")
            return _fail("System error during check-in", 500)

    @app.route("/qr/scan", endpoint="qr_scan_page")
    def qr_scan_page():
        return render_template("qr_scan.html", active_page="qr_scan")

    @app.route("/api/qr/checkin", methods=["POST"], endpoint="api_qr_checkin")
    def api_qr_checkin():
        data = request.get_json(silent=True) or {}
        qr_code = str(data.get("qr_code") or "").strip()
        if not qr_code:
            return _fail("QR code is empty", 400)
        return _checkin(qr_code)

    @app.route("/api/qr/checkin/image", methods=["POST"], endpoint="api_qr_checkin_image")
    def api_qr_checkin_image():
        file = request.files.get("image")
        if not file:
            return _fail("No image uploaded", 400)
        try:
            img = Image.open(file.stream).convert("RGB")
        except (UnidentifiedImageError, OSError):
            return _fail("Uploaded file is not an image", 400)

        try:
            text = decode_image(img)
        except Exception:
            logger.exception("QR decoding of uploaded image failed")
            return _fail("Could not read QR code", 500)
        if not text:
            return _fail("No QR code found in image", 400)
        return _checkin(text)

    @app.route("/api/qr/camera", methods=["POST"], endpoint="api_qr_camera")
    def api_qr_camera():
        """Scan with a camera attached to the server (kiosk mode)."""
        outcome: dict = {}

        def on_scan(text: str) -> None:
            outcome["response"] = _checkin(text)

        try:
            with container.new_scan_session(on_scan) as session:
                text = session.run()
        except CameraError:
            return _fail("Failed to initialize QR scanner", 503)
        except Exception:
            logger.exception("Unexpected error during camera scan")
            return _fail("System error during camera scan", 500)

        if not text:
            return _fail("No QR code detected", 408)
        return outcome["response"]

    @app.route("/attendance/close-day", methods=["POST"], endpoint="close_day")
    def close_day():
        try:
            raw = request.form.get("day") or date.today().isoformat()
            day = datetime.strptime(raw, "%Y-%m-%d").date()
            marked = container.attendance_service.close_day(day)
            flash(f"Marked {marked} student(s) absent for {day.isoformat()}", "success")
        except ValueError:
            flash("Invalid date", "warning")
        except ValidationError as e:
            flash(str(e), "warning")
        except StoreError:
            flash("Error saving attendance", "danger")
        except Exception:
            logger.exception("Unexpected error closing day")
            flash("System error while closing the day", "danger")
        return redirect(url_for("dashboard"))
