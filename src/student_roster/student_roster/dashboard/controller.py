from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, url_for

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="home")
    def home():
        return redirect(url_for("dashboard"))

    @app.route("/dashboard", endpoint="dashboard")
    def dashboard():
        view = container.dashboard_service.build()
        for message in view.errors:
            flash(message, "danger")
        return render_template("dashboard.html", view=view, active_page="dashboard")

    @app.route("/api/dashboard", endpoint="api_dashboard")
    def api_dashboard():
        view = container.dashboard_service.build()
        return jsonify(
            {
                "success": not view.errors,
                "errors": view.errors,
                "absentees": [{"id": a.student_id, "name": a.name} for a in view.absentees],
                "topAttendees": [{"id": a.student_id, "name": a.name, "count": a.count} for a in view.top_attendees],
                "birthdays": [
                    {
                        "id": b.student.student_id,
                        "name": b.student.name,
                        "phone": b.student.phone,
                        "age": b.age,
                        "daysLeft": b.days_left,
                    }
                    for b in view.birthdays
                ],
                "birthdayWindowDays": view.birthday_window_days,
            }
        )
