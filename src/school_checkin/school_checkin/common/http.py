from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CameraUnavailable,
    DomainError,
    OutOfRange,
    PermissionDenied,
    PositionError,
    ReasonRequired,
    UnknownStaff,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_ERROR_CODES = (
    (ReasonRequired, "reason_required", 400),
    (UnknownStaff, "unknown_staff", 400),
    (ValidationError, "validation_error", 400),
    (AuthenticationError, "authentication_failed", 403),
    (AuthorizationError, "forbidden", 403),
    (PermissionDenied, "permission_denied", 503),
    (PositionError, "position_unavailable", 503),
    (CameraUnavailable, "camera_unavailable", 503),
)


def json_error(code: str, message: str, status: int, **extra):
    return jsonify({"success": False, "error": code, "message": message, **extra}), status


def domain_error_response(e: DomainError, **extra):
    if isinstance(e, OutOfRange):
        return json_error("out_of_range", str(e), 403, distance=round(e.distance), allowed=e.allowed, **extra)
    for cls, code, status in _ERROR_CODES:
        if isinstance(e, cls):
            return json_error(code, str(e), status, **extra)
    return json_error("domain_error", str(e), 400, **extra)


def unexpected_error_response(e: Exception, *, debug: bool = False):
    logger.exception("unexpected error while handling request")
    message = f"เกิดข้อผิดพลาดของระบบ: {e}" if debug else "เกิดข้อผิดพลาดของระบบ"
    return json_error("internal_error", message, 500)
