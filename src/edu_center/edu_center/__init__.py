"""Education center administrative backend.

This package is organized by feature modules (users, courses, students,
attendance, payroll) with a thin Flask controller layer over service and
repository layers.
"""
