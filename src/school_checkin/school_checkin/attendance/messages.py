"""Result messages shown after a successful check-in.

Pools are presentation content; a pool is picked by MessageCategory and one
variant drawn uniformly at random. Seasonal greetings live in an override
table keyed by date and staff id so they expire without code changes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceType, CheckInStatus, MessageCategory

MESSAGE_POOLS: dict[MessageCategory, tuple[str, ...]] = {
    MessageCategory.ON_TIME: (
        "มาตรงเวลา ยอดเยี่ยมมาก! ขอให้เป็นวันที่ดีนะคะ",
        "เช้านี้สดใส มาทันเวลาพอดี สู้ ๆ ครับ",
        "ตรงต่อเวลาเป็นแบบอย่างที่ดี ขอบคุณค่ะ",
        "ลงเวลาเรียบร้อย ขอให้สอนสนุกตลอดวัน",
        "มาถึงก่อนเวลา พร้อมลุยงานแล้ว!",
    ),
    MessageCategory.LATE: (
        "ลงเวลาเรียบร้อย พรุ่งนี้มาเช้าขึ้นอีกนิดนะคะ",
        "ไม่เป็นไร วันนี้อาจติดธุระ ขอให้เป็นวันที่ดีครับ",
        "บันทึกเวลาแล้ว เดินทางปลอดภัยนะคะ",
        "มาสายนิดหน่อย แต่ยังมีพลังเต็มเปี่ยม!",
        "บันทึกเหตุผลเรียบร้อย ขอบคุณที่แจ้งครับ",
    ),
    MessageCategory.DEPARTURE: (
        "เลิกงานแล้ว เดินทางกลับบ้านปลอดภัยนะคะ",
        "ขอบคุณสำหรับความทุ่มเทวันนี้ พักผ่อนให้เต็มที่ครับ",
        "บันทึกเวลากลับเรียบร้อย แล้วพบกันใหม่พรุ่งนี้",
        "เหนื่อยมาทั้งวัน กลับไปพักผ่อนนะคะ",
        "ลงเวลากลับแล้ว ขับขี่ปลอดภัยครับ",
    ),
}

LEAVE_MESSAGE = "บันทึกข้อมูล {label} เรียบร้อยแล้ว"


@dataclass(frozen=True)
class GreetingOverride:
    """Replaces the arrival message on `day`; staff_id None is the default for everyone else."""

    day: date
    message: str
    staff_id: Optional[str] = None
    attendance_type: AttendanceType = AttendanceType.ARRIVAL


# Sample seasonal content for the first working day of 2026.
GREETING_OVERRIDES: tuple[GreetingOverride, ...] = (
    GreetingOverride(date(2026, 1, 2), "สวัสดีปีใหม่ท่านผู้อำนวยการ ขอให้ปีนี้เป็นปีแห่งความสำเร็จค่ะ", staff_id="PJ001"),
    GreetingOverride(date(2026, 1, 2), "สวัสดีปีใหม่ท่านรองฯ ขอให้สุขภาพแข็งแรงตลอดปีครับ", staff_id="PJ002"),
    GreetingOverride(date(2026, 1, 2), "สวัสดีปีใหม่คุณครูทิวาวรรณ ขอให้มีความสุขมาก ๆ ค่ะ", staff_id="PJ003"),
    GreetingOverride(date(2026, 1, 2), "สวัสดีปีใหม่ 2569 ขอให้มีความสุขตลอดปีนะคะ"),
)


class MessageSelector:
    def __init__(
        self,
        *,
        pools: Optional[dict[MessageCategory, Sequence[str]]] = None,
        overrides: Sequence[GreetingOverride] = GREETING_OVERRIDES,
        rng: Optional[random.Random] = None,
    ):
        self._pools = MESSAGE_POOLS if pools is None else pools
        self._overrides = tuple(overrides)
        self._rng = rng or random.Random()

    def _override(self, *, day: date, staff_id: str, attendance_type: AttendanceType) -> Optional[str]:
        default = None
        for o in self._overrides:
            if o.day != day or o.attendance_type != attendance_type:
                continue
            if o.staff_id is None:
                default = default or o.message
            elif o.staff_id.upper() == staff_id.upper():
                return o.message
        return default

    def select(
        self,
        *,
        day: date,
        staff_id: str,
        attendance_type: AttendanceType,
        status: CheckInStatus,
        category: Optional[MessageCategory],
    ) -> str:
        override = self._override(day=day, staff_id=staff_id, attendance_type=attendance_type)
        if override:
            return override

        pool = self._pools.get(category) if category else None
        if pool:
            return self._rng.choice(list(pool))
        return LEAVE_MESSAGE.format(label=status.value)
