"""School check-in package.

Feature modules (attendance, staff, holidays, geo, capture, sync, reports)
with a thin Flask controller layer over service/repository layers.
"""
