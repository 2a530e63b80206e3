from __future__ import annotations

import csv
import io
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from ..attendance.model import CheckInRecord
from ..core.enums import AttendanceType, CheckInStatus
from ..core.exceptions import ValidationError
from ..staff.service import StaffDirectory
from ..sync.gateway import StorageSyncGateway

TYPE_LABELS = {
    AttendanceType.ARRIVAL: "มาทำงาน",
    AttendanceType.DEPARTURE: "กลับบ้าน",
    AttendanceType.DUTY: "ไปราชการ",
    AttendanceType.SICK_LEAVE: "ลาป่วย",
    AttendanceType.PERSONAL_LEAVE: "ลากิจ",
    AttendanceType.OTHER_LEAVE: "ลาอื่นๆ",
    AttendanceType.AUTHORIZED_LATE: "เข้าสายโดยได้รับอนุญาต",
}

_LEAVE_TYPES = (
    AttendanceType.DUTY,
    AttendanceType.SICK_LEAVE,
    AttendanceType.PERSONAL_LEAVE,
    AttendanceType.OTHER_LEAVE,
)
_LEAVE_STATUSES = (
    CheckInStatus.DUTY,
    CheckInStatus.SICK_LEAVE,
    CheckInStatus.PERSONAL_LEAVE,
    CheckInStatus.OTHER_LEAVE,
)

CSV_FIELDS = [
    "ID",
    "Staff ID",
    "Name",
    "Role",
    "Type",
    "Reason",
    "Timestamp",
    "Date",
    "Time",
    "Status",
    "Latitude",
    "Longitude",
    "Distance(m)",
    "AI Verification",
]


@dataclass(frozen=True)
class DailyReport:
    day: date
    rows: list[dict]
    summary: dict
    records: list[CheckInRecord]


@dataclass(frozen=True)
class MonthlyReport:
    month: str
    rows: list[dict]


def _hhmm(record: CheckInRecord) -> str:
    return record.moment.strftime("%H:%M")


class ReportService:
    """Use case: daily official report, monthly late report, CSV export."""

    def __init__(self, gateway: StorageSyncGateway, staff: StaffDirectory):
        self._gateway = gateway
        self._staff = staff

    def _records(self, start: date, end: date, *, include_remote: bool) -> list[CheckInRecord]:
        if include_remote:
            return self._gateway.list_merged(start, end)
        return sorted(self._gateway.list_between(start, end), key=lambda r: r.timestamp)

    def daily_report(self, day: date, *, include_remote: bool = False) -> DailyReport:
        records = self._records(day, day, include_remote=include_remote)

        rows = []
        for member in self._staff.list_all():
            own = [r for r in records if member.matches_id(r.staff_id)]
            rows.append(self._daily_row(member.staff_id, member.name, member.role, own))

        return DailyReport(day=day, rows=rows, summary=summarize(records), records=records)

    @staticmethod
    def _daily_row(staff_id: str, name: str, role: str, records: Sequence[CheckInRecord]) -> dict:
        row = {
            "staffId": staff_id,
            "name": name,
            "role": role,
            "arrivalTime": "-",
            "arrivalStatus": "Absent",
            "departureTime": "-",
            "departureStatus": "-",
            "note": "",
        }

        leave = next((r for r in records if r.type in _LEAVE_TYPES), None)
        if leave:
            label = TYPE_LABELS[leave.type]
            row.update(
                arrivalTime=label,
                departureTime=label,
                arrivalStatus="Leave",
                departureStatus="Leave",
                note=leave.reason or "",
            )
            return row

        notes = []
        arrival = next((r for r in records if r.type in (AttendanceType.ARRIVAL, AttendanceType.AUTHORIZED_LATE)), None)
        if arrival:
            row.update(arrivalTime=_hhmm(arrival), arrivalStatus=arrival.status.value)
            if arrival.status in (CheckInStatus.LATE, CheckInStatus.AUTHORIZED_LATE):
                notes.append(f"สาย: {arrival.reason or '-'}")

        departure = next((r for r in records if r.type == AttendanceType.DEPARTURE), None)
        if departure:
            row.update(departureTime=_hhmm(departure), departureStatus=departure.status.value)
            if departure.status == CheckInStatus.EARLY_LEAVE:
                notes.append(f"กลับก่อน: {departure.reason or '-'}")

        row["note"] = " ".join(notes)
        return row

    def monthly_late_report(self, month: str, *, include_remote: bool = False) -> MonthlyReport:
        try:
            first = datetime.strptime(month, "%Y-%m").date()
        except (TypeError, ValueError):
            raise ValidationError("เดือนไม่ถูกต้อง (YYYY-MM)")
        last = first.replace(day=monthrange(first.year, first.month)[1])

        late = [
            r
            for r in self._records(first, last, include_remote=include_remote)
            if r.type == AttendanceType.ARRIVAL and r.status == CheckInStatus.LATE
        ]

        rows = []
        for member in self._staff.list_all():
            own = sorted((r for r in late if member.matches_id(r.staff_id)), key=lambda r: r.timestamp)
            rows.append(
                {
                    "staffId": member.staff_id,
                    "name": member.name,
                    "role": member.role,
                    "lateCount": len(own),
                    "dates": ", ".join(str(r.calendar_date.day) for r in own),
                    "note": "",
                }
            )
        return MonthlyReport(month=month, rows=rows)


def summarize(records: Sequence[CheckInRecord]) -> dict:
    return {
        "total": len(records),
        "arrivals": sum(1 for r in records if r.type == AttendanceType.ARRIVAL),
        "departures": sum(1 for r in records if r.type == AttendanceType.DEPARTURE),
        "onTime": sum(1 for r in records if r.status == CheckInStatus.ON_TIME),
        "late": sum(1 for r in records if r.status == CheckInStatus.LATE),
        "earlyLeave": sum(1 for r in records if r.status == CheckInStatus.EARLY_LEAVE),
        "leave": sum(1 for r in records if r.status in _LEAVE_STATUSES),
    }


def export_csv(records: Sequence[CheckInRecord]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for r in records:
        moment = r.moment
        writer.writerow(
            {
                "ID": r.record_id,
                "Staff ID": r.staff_id or "-",
                "Name": r.name,
                "Role": r.role,
                "Type": TYPE_LABELS.get(r.type, r.type.value),
                "Reason": r.reason or "",
                "Timestamp": r.timestamp,
                "Date": moment.strftime("%d/%m/%Y"),
                "Time": moment.strftime("%H:%M:%S"),
                "Status": r.status.value,
                "Latitude": r.location.lat,
                "Longitude": r.location.lng,
                "Distance(m)": f"{r.distance_from_base:.2f}",
                "AI Verification": r.ai_note or "",
            }
        )
    return out.getvalue()
