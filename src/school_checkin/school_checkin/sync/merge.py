"""Merge of remote and local record sets for reporting.

Records sharing (staff id, type, calendar date) are the same check-in; the
one carrying the larger image payload wins, ties keep the remote copy. The
image size is only a proxy for "more complete record".
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..attendance.model import CheckInRecord

Signature = tuple[str, str, date]


def record_signature(record: CheckInRecord) -> Signature:
    return (record.staff_id.upper(), record.type.value, record.calendar_date)


def merge_remote_and_local(remote: Iterable[CheckInRecord], local: Iterable[CheckInRecord]) -> list[CheckInRecord]:
    merged: dict[Signature, CheckInRecord] = {}

    for record in remote:
        key = record_signature(record)
        current = merged.get(key)
        if current is None or record.image_size > current.image_size:
            merged[key] = record

    for record in local:
        key = record_signature(record)
        current = merged.get(key)
        if current is None or record.image_size > current.image_size:
            merged[key] = record

    return sorted(merged.values(), key=lambda r: r.timestamp)
