"""Attendance Tracker package.

Feature modules (attendance, risk, access, reports, ...) each own their
models, repository protocols and services. Flask controllers are a thin
layer on top; the engine functions never touch the clock or a global store.
"""
