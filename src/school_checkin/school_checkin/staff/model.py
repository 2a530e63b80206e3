from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_birthday


@dataclass(frozen=True)
class StaffMember:
    """Domain entity: a staff member (id is unique, compared case-insensitively)."""

    staff_id: str
    name: str
    role: str
    birthday: Optional[str] = None  # DD/MM/YYYY

    def matches_id(self, staff_id: str) -> bool:
        return self.staff_id.upper() == (staff_id or "").strip().upper()

    def is_birthday(self, today: date) -> bool:
        born = parse_birthday(self.birthday)
        return bool(born and born.day == today.day and born.month == today.month)

    def with_role(self, role: str) -> "StaffMember":
        return replace(self, role=role)

    def to_dict(self) -> dict:
        data = {"id": self.staff_id, "name": self.name, "role": self.role}
        if self.birthday:
            data["birthday"] = self.birthday
        return data


@dataclass(frozen=True)
class RolePromotion:
    """Role override applied at read time while `today` is inside the range."""

    staff_id: str
    role: str
    effective_from: date
    effective_until: Optional[date] = None

    def applies(self, staff: StaffMember, today: date) -> bool:
        if not staff.matches_id(self.staff_id):
            return False
        if today < self.effective_from:
            return False
        return self.effective_until is None or today <= self.effective_until
