from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, flash, jsonify, redirect, render_template, request, send_file, url_for

from ..common.datetime_utils import calculate_age, days_until_next_anniversary
from ..core.constants import FILTER_ALL
from ..core.enums import Gender, StudentType, YearOfStudy
from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from ..qr.generator import make_qr_png
from .filtering import StudentFilter
from .model import Student, StudentForm

logger = logging.getLogger(__name__)


def student_to_json(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "phone": s.phone,
        "fatherPhone": s.father_phone,
        "motherPhone": s.mother_phone,
        "dateOfBirth": s.date_of_birth_iso,
        "yearOfStudy": s.year_of_study,
        "churchFatherName": s.church_father_name,
        "address": s.address,
        "gender": s.gender,
        "studentType": s.student_type,
    }


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    def _criteria() -> StudentFilter:
        return StudentFilter(
            query=request.args.get("q", ""),
            gender=request.args.get("gender", FILTER_ALL) or FILTER_ALL,
            student_type=request.args.get("type", FILTER_ALL) or FILTER_ALL,
        )

    def _refresh() -> bool:
        try:
            service.refresh()
            return True
        except StoreError:
            flash("Error fetching students", "danger")
            return False

    def _render_roster(form: StudentForm, editing_id: Optional[str], *, form_error: str = "", status: int = 200):
        criteria = _criteria()
        return (
            render_template(
                "students/list.html",
                students=service.search(criteria),
                criteria=criteria,
                form=form,
                editing_id=editing_id,
                form_error=form_error,
                genders=list(Gender),
                student_types=list(StudentType),
                years=list(YearOfStudy),
                active_page="students",
            ),
            status,
        )

    @app.route("/students", methods=["GET"], endpoint="students")
    def students():
        _refresh()
        form = StudentForm()
        editing_id = request.args.get("edit") or None
        if editing_id:
            try:
                form = StudentForm.from_student(service.get(editing_id))
            except ValidationError as e:
                flash(str(e), "warning")
                editing_id = None
            except StoreError:
                flash("Error loading student", "danger")
                editing_id = None
        return _render_roster(form, editing_id)

    @app.route("/students/save", methods=["POST"], endpoint="save_student")
    def save_student():
        form = StudentForm.from_mapping(request.form)
        editing_id = request.form.get("student_id") or None
        try:
            service.save(form, student_id=editing_id)
            flash("Student updated successfully" if editing_id else "Student added successfully", "success")
            return redirect(url_for("students"))
        except ValidationError as e:
            _refresh()
            return _render_roster(form, editing_id, form_error=str(e), status=400)
        except StoreError:
            flash("Error saving student", "danger")
            _refresh()
            return _render_roster(form, editing_id, status=503)
        except Exception:
            logger.exception("Unexpected error saving student")
            flash("System error while saving student", "danger")
            _refresh()
            return _render_roster(form, editing_id, status=500)

    @app.route("/students/<student_id>/delete", methods=["POST"], endpoint="delete_student")
    def delete_student(student_id: str):
        try:
            service.delete(student_id)
            flash("Student deleted successfully", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except StoreError:
            flash("Error deleting student", "danger")
        except Exception:
            logger.exception("Unexpected error deleting student %s", student_id)
            flash("System error while deleting student", "danger")
        return redirect(url_for("students"))

    @app.route("/students/<student_id>", methods=["GET"], endpoint="student_detail")
    def student_detail(student_id: str):
        try:
            student = service.get(student_id)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("students"))
        except StoreError:
            flash("Error loading student", "danger")
            return redirect(url_for("students"))

        days_left = days_until_next_anniversary(student.date_of_birth)
        return render_template(
            "students/detail.html",
            student=student,
            age=calculate_age(student.date_of_birth),
            days_left=None if days_left == float("inf") else days_left,
            active_page="students",
        )

    @app.route("/students/<student_id>/qr.png", methods=["GET"], endpoint="student_qr")
    def student_qr(student_id: str):
        try:
            size = max(1, min(int(request.args.get("box", 10)), 40))
        except ValueError:
            size = 10
        return send_file(make_qr_png(student_id, box_size=size), mimetype="image/png")

    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    def api_students():
        try:
            service.refresh()
        except StoreError:
            return jsonify({"success": False, "message": "Error fetching students"}), 503
        return jsonify({"success": True, "students": [student_to_json(s) for s in service.search(_criteria())]})
