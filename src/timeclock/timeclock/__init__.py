"""Timeclock package.

Attendance/time-tracking core of the HR dashboard, organized by feature modules
(attendance, work_items, reminders, reports, ...) with a thin Flask controller
layer over service/repository layers.
"""
