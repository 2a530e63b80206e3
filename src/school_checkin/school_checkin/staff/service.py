from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_birthday
from ..common.validators import clean_optional, require_non_empty
from ..core.exceptions import UnknownStaff, ValidationError
from .model import RolePromotion, StaffMember
from .repository import StaffRepository
from .seed import DEFAULT_STAFF_LIST, ROLE_PROMOTIONS


class StaffDirectory:
    """Use case: look up and manage staff (seeded on first read)."""

    def __init__(
        self,
        staff: StaffRepository,
        *,
        seed: Sequence[StaffMember] = DEFAULT_STAFF_LIST,
        promotions: Sequence[RolePromotion] = ROLE_PROMOTIONS,
        today: Callable[[], date] = lambda: now_local().date(),
    ):
        self._staff = staff
        self._seed = tuple(seed)
        self._promotions = tuple(promotions)
        self._today = today

    def _apply_promotions(self, member: StaffMember, today: date) -> StaffMember:
        for promotion in self._promotions:
            if promotion.applies(member, today):
                member = member.with_role(promotion.role)
        return member

    def list_all(self) -> list[StaffMember]:
        stored = list(self._staff.list_all())
        if not stored and self._seed:
            self._staff.add_many(self._seed)
            stored = list(self._seed)

        today = self._today()
        return [self._apply_promotions(m, today) for m in stored]

    def find(self, staff_id: str) -> Optional[StaffMember]:
        for member in self.list_all():
            if member.matches_id(staff_id):
                return member
        return None

    def get(self, staff_id: str) -> StaffMember:
        member = self.find(staff_id)
        if not member:
            raise UnknownStaff("ไม่พบรหัสบุคลากรนี้ในระบบ")
        return member

    def add_staff(self, *, staff_id: str, name: str, role: str, birthday: Optional[str] = None) -> StaffMember:
        staff_id = require_non_empty(staff_id, "รหัสบุคลากร")
        name = require_non_empty(name, "ชื่อ-นามสกุล")
        role = require_non_empty(role, "ตำแหน่ง")
        birthday = clean_optional(birthday)
        if birthday and not parse_birthday(birthday):
            raise ValidationError("วันเกิดต้องอยู่ในรูปแบบ DD/MM/YYYY")

        if self.find(staff_id):
            raise ValidationError("รหัสบุคลากรนี้มีอยู่ในระบบแล้ว")

        member = StaffMember(staff_id=staff_id, name=name, role=role, birthday=birthday)
        self._staff.add(member)
        return member

    def remove_staff(self, staff_id: str) -> None:
        member = self.find(staff_id)
        if not member or not self._staff.delete(member.staff_id):
            raise ValidationError("ไม่พบบุคลากรที่ต้องการลบ")
