from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..capture.analysis import ImageAnalyzer, analyze_or_placeholder
from ..capture.camera import Camera, camera_session
from ..common.datetime_utils import now_local
from ..common.validators import clean_optional, has_text
from ..core.constants import BIRTHDAY_DISPLAY_SECONDS, RESULT_DISPLAY_SECONDS
from ..core.enums import AttendanceType, CheckInStep, LocationMode
from ..core.exceptions import CameraUnavailable, DomainError, OutOfRange, PositionError, PositionUnavailable, ReasonRequired
from ..geo.distance import distance_meters
from ..geo.model import GeoCheckResult, GeoLocation
from ..geo.position import AccuratePositionFetcher, PositionSource
from ..holidays.service import HolidayResolver
from ..settings.service import SettingsService
from ..staff.model import StaffMember
from ..staff.service import StaffDirectory
from ..sync.gateway import StorageSyncGateway
from ..sync.outbox import SyncOutbox
from .factory import AttendanceStrategyFactory
from .messages import MessageSelector
from .model import CheckInRecord
from .strategies.base import AttendanceStrategy
from .synthesizer import RecordSynthesizer

logger = logging.getLogger(__name__)

BIRTHDAY_TYPES = frozenset({AttendanceType.ARRIVAL, AttendanceType.DUTY, AttendanceType.AUTHORIZED_LATE})


def failed_step(error: DomainError) -> CheckInStep:
    """Step at which a rejected transaction stopped."""

    if isinstance(error, ReasonRequired):
        return CheckInStep.REASON_CHECK
    if isinstance(error, (PositionError, OutOfRange)):
        return CheckInStep.GEO_CHECK
    if isinstance(error, CameraUnavailable):
        return CheckInStep.CAPTURING
    return CheckInStep.COLLECTING_INPUT


@dataclass(frozen=True)
class CheckInRequest:
    staff_id: str
    attendance_type: AttendanceType
    reason: Optional[str] = None


@dataclass(frozen=True)
class CheckInTicket:
    """A transaction that passed the reason and geo gates and may capture."""

    staff: StaffMember
    attendance_type: AttendanceType
    reason: Optional[str]
    reason_required: bool
    geo: GeoCheckResult
    holiday: Optional[str]
    step: CheckInStep = CheckInStep.CAPTURING


@dataclass(frozen=True)
class CheckInResult:
    record: CheckInRecord
    message: str
    is_birthday_today: bool
    display_seconds: int
    holiday: Optional[str]
    step: CheckInStep = CheckInStep.COMMITTED


class CheckInService:
    """Use case: one staff check-in, from typed input to committed record."""

    def __init__(
        self,
        staff: StaffDirectory,
        settings: SettingsService,
        holidays: HolidayResolver,
        gateway: StorageSyncGateway,
        *,
        analyzer: ImageAnalyzer,
        outbox: Optional[SyncOutbox] = None,
        position_fetcher: Optional[AccuratePositionFetcher] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        synthesizer: Optional[RecordSynthesizer] = None,
        messages: Optional[MessageSelector] = None,
        distance: Callable[[GeoLocation, GeoLocation], float] = distance_meters,
        clock: Callable[[], datetime] = now_local,
    ):
        self._staff = staff
        self._settings = settings
        self._holidays = holidays
        self._gateway = gateway
        self._analyzer = analyzer
        self._outbox = outbox
        self._fetcher = position_fetcher or AccuratePositionFetcher()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._synthesizer = synthesizer or RecordSynthesizer(clock=clock)
        self._messages = messages or MessageSelector()
        self._distance = distance
        self._clock = clock

    @staticmethod
    def _enter(step: CheckInStep, staff_id: str) -> None:
        logger.debug("check-in %s: %s", staff_id, step.value)

    def reason_required(self, attendance_type: AttendanceType, *, now: Optional[datetime] = None) -> bool:
        return self._factory.for_type(attendance_type).requires_reason(now=now or self._clock())

    def holiday_today(self) -> Optional[str]:
        return self._holidays.holiday_for(self._clock().date())

    def prepare(self, request: CheckInRequest, *, position_source: Optional[PositionSource] = None) -> CheckInTicket:
        now = self._clock()
        staff = self._staff.get(request.staff_id)
        strategy = self._factory.for_type(request.attendance_type)

        self._enter(CheckInStep.REASON_CHECK, staff.staff_id)
        required = strategy.requires_reason(now=now)
        if required and not has_text(request.reason):
            raise ReasonRequired("กรุณาระบุเหตุผลก่อนบันทึกเวลา")

        self._enter(CheckInStep.GEO_CHECK, staff.staff_id)
        geo = self._check_location(strategy, position_source)
        return CheckInTicket(
            staff=staff,
            attendance_type=request.attendance_type,
            reason=clean_optional(request.reason),
            reason_required=required,
            geo=geo,
            holiday=self._holidays.holiday_for(now.date()),
        )

    def _check_location(self, strategy: AttendanceStrategy, source: Optional[PositionSource]) -> GeoCheckResult:
        settings = self._settings.get()
        if settings.location_mode != LocationMode.GPS or not strategy.requires_location:
            return GeoCheckResult.skipped()

        if source is None:
            raise PositionUnavailable("ไม่ได้รับข้อมูลพิกัดจากอุปกรณ์")

        sample = self._fetcher.fetch(source)
        distance = self._distance(sample.location, settings.office_location)
        if distance > settings.max_distance_meters:
            logger.info("check-in rejected: %.0fm from office (allowed %sm)", distance, settings.max_distance_meters)
            raise OutOfRange(distance, settings.max_distance_meters)

        return GeoCheckResult(location=sample.location, distance_meters=distance, checked=True)

    def complete(self, ticket: CheckInTicket, camera: Camera) -> CheckInResult:
        self._enter(CheckInStep.CAPTURING, ticket.staff.staff_id)
        with camera_session(camera) as stream:
            image_ref = stream.capture()
        captured_at = self._clock()

        decision = self._factory.for_type(ticket.attendance_type).decide(now=captured_at)
        self._enter(CheckInStep.VERIFYING, ticket.staff.staff_id)
        ai_note = analyze_or_placeholder(self._analyzer, image_ref)

        record = self._synthesizer.synthesize(
            staff=ticket.staff,
            attendance_type=ticket.attendance_type,
            reason=ticket.reason,
            geo=ticket.geo,
            status=decision.status,
            image_ref=image_ref,
            ai_note=ai_note,
        )
        self._gateway.save(record)
        self._enter(CheckInStep.COMMITTED, ticket.staff.staff_id)
        if self._outbox is not None:
            self._outbox.kick()

        today = captured_at.date()
        message = self._messages.select(
            day=today,
            staff_id=ticket.staff.staff_id,
            attendance_type=ticket.attendance_type,
            status=decision.status,
            category=decision.category,
        )
        is_birthday = ticket.attendance_type in BIRTHDAY_TYPES and ticket.staff.is_birthday(today)

        return CheckInResult(
            record=record,
            message=message,
            is_birthday_today=is_birthday,
            display_seconds=BIRTHDAY_DISPLAY_SECONDS if is_birthday else RESULT_DISPLAY_SECONDS,
            holiday=ticket.holiday,
        )

    def check_in(
        self,
        request: CheckInRequest,
        *,
        camera: Camera,
        position_source: Optional[PositionSource] = None,
    ) -> CheckInResult:
        ticket = self.prepare(request, position_source=position_source)
        return self.complete(ticket, camera)
