from __future__ import annotations

from flask import Flask, jsonify, request

from ..capture.camera import UploadedFrameCamera
from ..common.datetime_utils import now_local
from ..common.validators import require_date
from ..common.http import domain_error_response, json_error, unexpected_error_response
from ..core.enums import AttendanceType
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from ..geo.position import ReportedPositionSource
from .service import CheckInRequest, failed_step


def _parse_request(payload: dict) -> CheckInRequest:
    try:
        attendance_type = AttendanceType(payload.get("type") or "")
    except ValueError:
        raise ValidationError("ประเภทการลงเวลาไม่ถูกต้อง")
    return CheckInRequest(
        staff_id=str(payload.get("staffId") or "").strip(),
        attendance_type=attendance_type,
        reason=payload.get("reason"),
    )


def register(app: Flask, container: Container) -> None:
    def _debug() -> bool:
        return bool(app.config.get("DEBUG", False))

    @app.route("/api/staff/<staff_id>", methods=["GET"], endpoint="api_staff_lookup")
    def staff_lookup(staff_id: str):
        try:
            member = container.staff_directory.find(staff_id)
            if not member:
                return json_error("unknown_staff", "ไม่พบรหัสบุคลากรนี้ในระบบ", 404)
            return jsonify(
                {
                    "success": True,
                    "staff": member.to_dict(),
                    "isBirthdayToday": member.is_birthday(now_local().date()),
                }
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, debug=_debug())

    @app.route("/api/holiday", methods=["GET"], endpoint="api_holiday")
    def holiday():
        try:
            day = require_date(request.args.get("date"), default=now_local().date())
            return jsonify(
                {
                    "success": True,
                    "date": day.isoformat(),
                    "holiday": container.holiday_resolver.holiday_for(day),
                }
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return unexpected_error_response(e, debug=_debug())

    @app.route("/api/checkin/prepare", methods=["POST"], endpoint="api_checkin_prepare")
    def checkin_prepare():
        payload = request.get_json(silent=True) or {}
        try:
            ticket = container.checkin_service.prepare(
                _parse_request(payload),
                position_source=ReportedPositionSource.from_payload(payload.get("positions")),
            )
            return jsonify(
                {
                    "success": True,
                    "step": ticket.step.value,
                    "reasonRequired": ticket.reason_required,
                    "locationChecked": ticket.geo.checked,
                    "distance": round(ticket.geo.distance_meters),
                    "holiday": ticket.holiday,
                }
            )
        except DomainError as e:
            return domain_error_response(e, step=failed_step(e).value)
        except Exception as e:
            return unexpected_error_response(e, debug=_debug())

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    def checkin():
        payload = request.get_json(silent=True) or {}
        try:
            result = container.checkin_service.check_in(
                _parse_request(payload),
                camera=UploadedFrameCamera(payload.get("image") or ""),
                position_source=ReportedPositionSource.from_payload(payload.get("positions")),
            )
            return jsonify(
                {
                    "success": True,
                    "step": result.step.value,
                    "record": result.record.to_dict(),
                    "message": result.message,
                    "isBirthdayToday": result.is_birthday_today,
                    "displaySeconds": result.display_seconds,
                    "holiday": result.holiday,
                }
            ), 201
        except DomainError as e:
            return domain_error_response(e, step=failed_step(e).value)
        except Exception as e:
            return unexpected_error_response(e, debug=_debug())
