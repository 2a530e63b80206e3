from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} ไม่ถูกต้อง")
    return value.strip()


def has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def clean_optional(value: Optional[str]) -> Optional[str]:
    return value.strip() if has_text(value) else None


def require_date(value: Optional[str], *, default: Optional[date] = None) -> date:
    if not has_text(value):
        if default is None:
            raise ValidationError("วันที่ไม่ถูกต้อง (YYYY-MM-DD)")
        return default
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError("วันที่ไม่ถูกต้อง (YYYY-MM-DD)")
