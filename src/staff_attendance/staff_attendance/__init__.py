"""Staff Attendance package.

This package is organized by feature modules (settings, attendance,
regularization, summary, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
