from __future__ import annotations

from typing import Protocol, Sequence

from .model import StaffMember


class StaffRepository(Protocol):
    """Staff persistence. The service layer only depends on this interface."""

    def list_all(self) -> Sequence[StaffMember]:
        raise NotImplementedError

    def add(self, staff: StaffMember) -> None:
        raise NotImplementedError

    def add_many(self, staff: Sequence[StaffMember]) -> None:
        raise NotImplementedError

    def delete(self, staff_id: str) -> bool:
        raise NotImplementedError
