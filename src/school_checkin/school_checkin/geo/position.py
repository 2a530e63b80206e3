from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Protocol, Union

from ..core.constants import (
    POSITION_GOOD_ACCURACY_METERS,
    POSITION_MAX_ATTEMPTS,
    POSITION_PAUSE_SECONDS,
    POSITION_TIMEOUT_MS,
)
from ..core.exceptions import PermissionDenied, PositionError, PositionTimeout, PositionUnavailable
from .model import PositionSample

logger = logging.getLogger(__name__)


class PositionSource(Protocol):
    # False when the readings were collected before the request and are only replayed.
    live: bool

    def get_position(self, timeout_ms: int) -> PositionSample:
        """Return one sample or raise PermissionDenied/PositionUnavailable/PositionTimeout."""

        raise NotImplementedError


# Browser geolocation error codes as posted by the check-in page.
_REPORTED_ERRORS = {
    "permission_denied": lambda: PermissionDenied("ไม่ได้รับอนุญาตให้เข้าถึงตำแหน่ง"),
    "timeout": lambda: PositionTimeout("หมดเวลาในการค้นหาพิกัด"),
    "unavailable": lambda: PositionUnavailable("ไม่สามารถระบุพิกัดได้"),
}


class ReportedPositionSource:
    """Replays the GPS readings the browser collected, one per attempt.

    A reading is either a PositionSample or the PositionError the browser hit.
    """

    live = False

    def __init__(self, readings: Iterable[Union[PositionSample, PositionError]]):
        self._readings = list(readings)
        self._cursor = 0

    @classmethod
    def from_payload(cls, payload: Optional[list]) -> "ReportedPositionSource":
        readings: list = []
        for item in payload or []:
            if not isinstance(item, dict):
                continue
            error = _REPORTED_ERRORS.get(str(item.get("error") or ""))
            if error:
                readings.append(error())
                continue
            try:
                readings.append(
                    PositionSample(
                        lat=float(item["lat"]),
                        lng=float(item["lng"]),
                        accuracy=float(item.get("accuracy", 0) or 0),
                    )
                )
            except (KeyError, TypeError, ValueError):
                continue
        return cls(readings)

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._readings)

    def get_position(self, timeout_ms: int) -> PositionSample:
        if self.exhausted:
            raise PositionUnavailable("ไม่สามารถดึงข้อมูลพิกัดได้ในขณะนี้")
        reading = self._readings[self._cursor]
        self._cursor += 1
        if isinstance(reading, PositionError):
            raise reading
        return reading


@dataclass
class AccuratePositionFetcher:
    """Best-effort accurate position: keep the most accurate of several samples."""

    max_attempts: int = POSITION_MAX_ATTEMPTS
    good_accuracy_meters: float = POSITION_GOOD_ACCURACY_METERS
    pause_seconds: float = POSITION_PAUSE_SECONDS
    timeout_ms: int = POSITION_TIMEOUT_MS
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def fetch(self, source: PositionSource) -> PositionSample:
        best: Optional[PositionSample] = None
        last_error: Optional[PositionError] = None

        live = getattr(source, "live", True)

        for attempt in range(1, self.max_attempts + 1):
            if getattr(source, "exhausted", False):
                break
            try:
                sample = source.get_position(self.timeout_ms)
            except PermissionDenied:
                raise
            except PositionError as e:
                last_error = e
                logger.debug("position attempt %d failed: %s", attempt, e)
            else:
                if best is None or sample.accuracy < best.accuracy:
                    best = sample
                if sample.accuracy <= self.good_accuracy_meters:
                    break

            if live and attempt < self.max_attempts:
                self.sleep(self.pause_seconds)

        if best is None:
            raise PositionUnavailable("ไม่สามารถระบุพิกัดได้ โปรดเปิด GPS แล้วลองใหม่") from last_error
        return best
