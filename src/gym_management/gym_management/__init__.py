"""Gym Management package.

Organized by feature modules (students, workouts, attendance, reports, ...)
with a thin Flask JSON controller layer over service and repository layers.
"""
