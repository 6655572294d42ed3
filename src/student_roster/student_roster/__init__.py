"""Student Roster package.

This package is organized by feature modules (students, attendance, dashboard,
qr) with a thin Flask controller layer over service/repository layers.
"""
