"""fieldclock package.

Attendance reconciliation for field crews, organized by feature modules
(clock, attendance, travel, payroll, admin) with a thin Flask controller
layer on top of pure service classes.
"""
