from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.http import domain_error_response, json_error, unexpected_error_response
from ..common.validators import require_date
from ..core.exceptions import AuthorizationError, DomainError
from ..container import Container
from ..reports.service import export_csv

ADMIN_SESSION_KEY = "is_admin"


def register(app: Flask, container: Container) -> None:
    def _debug() -> bool:
        return bool(app.config.get("DEBUG", False))

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                if not session.get(ADMIN_SESSION_KEY):
                    raise AuthorizationError("กรุณาเข้าสู่ระบบผู้ดูแล")
                return view(*args, **kwargs)
            except DomainError as e:
                return domain_error_response(e)
            except Exception as e:
                return unexpected_error_response(e, debug=_debug())

        return wrapper

    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    def login():
        try:
            container.admin_auth_service.authenticate(str(_payload().get("password") or ""))
        except DomainError as e:
            return domain_error_response(e)
        session[ADMIN_SESSION_KEY] = True
        return jsonify({"success": True})

    @app.route("/admin/logout", methods=["POST"], endpoint="admin_logout")
    def logout():
        session.pop(ADMIN_SESSION_KEY, None)
        return jsonify({"success": True})

    # Settings

    @app.route("/admin/settings", methods=["GET"], endpoint="admin_settings")
    @admin_required
    def settings_get():
        return jsonify({"success": True, "settings": container.settings_service.get().to_dict()})

    @app.route("/admin/settings", methods=["PUT"], endpoint="admin_settings_update")
    @admin_required
    def settings_update():
        payload = _payload()
        office = payload.get("officeLocation") or {}
        updated = container.settings_service.update(
            location_mode=payload.get("locationMode"),
            office_lat=office.get("lat"),
            office_lng=office.get("lng"),
            max_distance_meters=payload.get("maxDistanceMeters"),
            remote_endpoint=payload.get("remoteEndpoint"),
        )
        return jsonify({"success": True, "settings": updated.to_dict()})

    @app.route("/admin/settings/sync", methods=["POST"], endpoint="admin_settings_sync")
    @admin_required
    def settings_sync():
        changed = container.settings_service.sync_from_remote()
        return jsonify({"success": True, "changed": changed, "settings": container.settings_service.get().to_dict()})

    # Staff

    @app.route("/admin/staff", methods=["GET"], endpoint="admin_staff")
    @admin_required
    def staff_list():
        return jsonify({"success": True, "staff": [m.to_dict() for m in container.staff_directory.list_all()]})

    @app.route("/admin/staff", methods=["POST"], endpoint="admin_staff_add")
    @admin_required
    def staff_add():
        payload = _payload()
        member = container.staff_directory.add_staff(
            staff_id=str(payload.get("id") or ""),
            name=str(payload.get("name") or ""),
            role=str(payload.get("role") or ""),
            birthday=payload.get("birthday"),
        )
        return jsonify({"success": True, "staff": member.to_dict()}), 201

    @app.route("/admin/staff/<staff_id>", methods=["DELETE"], endpoint="admin_staff_delete")
    @admin_required
    def staff_delete(staff_id: str):
        container.staff_directory.remove_staff(staff_id)
        return jsonify({"success": True})

    # Special holidays

    @app.route("/admin/holidays", methods=["GET"], endpoint="admin_holidays")
    @admin_required
    def holidays_list():
        return jsonify({"success": True, "holidays": [h.to_dict() for h in container.holiday_service.list_holidays()]})

    @app.route("/admin/holidays", methods=["POST"], endpoint="admin_holidays_add")
    @admin_required
    def holidays_add():
        payload = _payload()
        holiday = container.holiday_service.add_holiday(
            start=str(payload.get("startDate") or ""),
            end=str(payload.get("endDate") or ""),
            name=str(payload.get("name") or ""),
        )
        return jsonify({"success": True, "holiday": holiday.to_dict()}), 201

    @app.route("/admin/holidays/<holiday_id>", methods=["DELETE"], endpoint="admin_holidays_delete")
    @admin_required
    def holidays_delete(holiday_id: str):
        container.holiday_service.remove_holiday(holiday_id)
        return jsonify({"success": True})

    # Records

    @app.route("/admin/records", methods=["GET"], endpoint="admin_records")
    @admin_required
    def records_list():
        day = require_date(request.args.get("date"), default=now_local().date())
        records = container.record_admin_service.list_for_date(day)
        return jsonify({"success": True, "date": day.isoformat(), "records": [r.to_dict() for r in records]})

    @app.route("/admin/records/<record_id>", methods=["DELETE"], endpoint="admin_records_delete")
    @admin_required
    def records_delete(record_id: str):
        container.record_admin_service.delete(record_id)
        return jsonify({"success": True})

    @app.route("/admin/records", methods=["DELETE"], endpoint="admin_records_clear")
    @admin_required
    def records_clear():
        removed = container.record_admin_service.clear_all()
        return jsonify({"success": True, "deleted": removed})

    @app.route("/admin/records/<record_id>", methods=["PATCH"], endpoint="admin_records_edit")
    @admin_required
    def records_edit(record_id: str):
        outcome = container.record_admin_service.edit_time(record_id, str(_payload().get("time") or ""))
        if not outcome.success:
            return json_error("remote_unavailable", "ไม่สามารถบันทึกการแก้ไขไปยัง Google Sheets ได้", 502)
        return jsonify(
            {
                "success": True,
                "timestamp": outcome.new_timestamp,
                "status": outcome.new_status.value,
            }
        )

    # Reports

    @app.route("/admin/reports/daily", methods=["GET"], endpoint="admin_report_daily")
    @admin_required
    def report_daily():
        day = require_date(request.args.get("date"), default=now_local().date())
        report = container.report_service.daily_report(day, include_remote=request.args.get("remote") == "1")
        return jsonify(
            {
                "success": True,
                "date": report.day.isoformat(),
                "rows": report.rows,
                "summary": report.summary,
            }
        )

    @app.route("/admin/reports/monthly", methods=["GET"], endpoint="admin_report_monthly")
    @admin_required
    def report_monthly():
        month = request.args.get("month") or now_local().strftime("%Y-%m")
        report = container.report_service.monthly_late_report(month, include_remote=request.args.get("remote") == "1")
        return jsonify({"success": True, "month": report.month, "rows": report.rows})

    @app.route("/admin/reports/daily.csv", methods=["GET"], endpoint="admin_report_daily_csv")
    @admin_required
    def report_daily_csv():
        day = require_date(request.args.get("date"), default=now_local().date())
        report = container.report_service.daily_report(day, include_remote=request.args.get("remote") == "1")

        csv_bytes = export_csv(report.records).encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{day.isoformat()}.csv"},
        )

    @app.route("/admin/sync", methods=["POST"], endpoint="admin_sync")
    @admin_required
    def sync_now():
        synced = container.outbox.drain()
        return jsonify({"success": True, "synced": synced, "pending": container.outbox.pending()})
