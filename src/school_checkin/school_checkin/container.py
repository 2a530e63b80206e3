from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.security import generate_password_hash

from .admin.service import AdminAuthService
from .attendance.admin_service import RecordAdminService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import CheckInService
from .capture.analysis import FaceImageAnalyzer, ImageAnalyzer
from .core.constants import (
    DEFAULT_MAX_DISTANCE_METERS,
    DEFAULT_OFFICE_LAT,
    DEFAULT_OFFICE_LNG,
    DEFAULT_REMOTE_TIMEOUT_SECONDS,
    DEFAULT_SYNC_INTERVAL_SECONDS,
    POSITION_PAUSE_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .geo.model import GeoLocation
from .geo.position import AccuratePositionFetcher
from .holidays.mysql_holiday_repository import MySQLSpecialHolidayRepository
from .holidays.repository import SpecialHolidayRepository
from .holidays.service import HolidayResolver, HolidayService
from .reports.service import ReportService
from .settings.model import SettingsDefaults
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffDirectory
from .sync.gateway import StorageSyncGateway
from .sync.outbox import SyncOutbox
from .sync.sheets import SheetsClient


@dataclass(frozen=True)
class Container:
    staff_repo: StaffRepository
    holidays_repo: SpecialHolidayRepository
    settings_repo: SettingsRepository
    attendance_repo: AttendanceRepository

    sheets_client: SheetsClient
    gateway: StorageSyncGateway
    outbox: SyncOutbox

    staff_directory: StaffDirectory
    holiday_resolver: HolidayResolver
    holiday_service: HolidayService
    settings_service: SettingsService
    checkin_service: CheckInService
    record_admin_service: RecordAdminService
    report_service: ReportService
    admin_auth_service: AdminAuthService

    sync_interval_seconds: int = DEFAULT_SYNC_INTERVAL_SECONDS
    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    staff_repo: StaffRepository,
    holidays_repo: SpecialHolidayRepository,
    settings_repo: SettingsRepository,
    attendance_repo: AttendanceRepository,
    sheets_client: SheetsClient,
    admin_password_hash: str,
    settings_defaults: Optional[SettingsDefaults] = None,
    analyzer: Optional[ImageAnalyzer] = None,
    position_fetcher: Optional[AccuratePositionFetcher] = None,
    sync_interval_seconds: int = DEFAULT_SYNC_INTERVAL_SECONDS,
    conn: Optional[DatabaseConnection] = None,
    **service_overrides: Any,
) -> Container:
    """Assemble services over the given repositories.

    `service_overrides` is forwarded to CheckInService (clock, messages, distance...).
    """

    strategy_factory = AttendanceStrategyFactory()

    staff_directory = StaffDirectory(staff_repo)
    settings_service = SettingsService(settings_repo, sheets_client, defaults=settings_defaults)
    gateway = StorageSyncGateway(attendance_repo, sheets_client, endpoint=settings_service.remote_endpoint)
    outbox = SyncOutbox(gateway)
    holiday_resolver = HolidayResolver(holidays_repo)

    checkin_service = CheckInService(
        staff_directory,
        settings_service,
        holiday_resolver,
        gateway,
        analyzer=analyzer or FaceImageAnalyzer(),
        outbox=outbox,
        position_fetcher=position_fetcher,
        strategy_factory=strategy_factory,
        **service_overrides,
    )

    return Container(
        staff_repo=staff_repo,
        holidays_repo=holidays_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        sheets_client=sheets_client,
        gateway=gateway,
        outbox=outbox,
        staff_directory=staff_directory,
        holiday_resolver=holiday_resolver,
        holiday_service=HolidayService(holidays_repo),
        settings_service=settings_service,
        checkin_service=checkin_service,
        record_admin_service=RecordAdminService(gateway, strategy_factory=strategy_factory),
        report_service=ReportService(gateway, staff_directory),
        admin_auth_service=AdminAuthService(admin_password_hash),
        sync_interval_seconds=sync_interval_seconds,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    office = getattr(settings, "OFFICE_LOCATION", None) or (DEFAULT_OFFICE_LAT, DEFAULT_OFFICE_LNG)
    defaults = SettingsDefaults(
        office_location=GeoLocation(lat=float(office[0]), lng=float(office[1])),
        max_distance_meters=float(getattr(settings, "MAX_DISTANCE_METERS", DEFAULT_MAX_DISTANCE_METERS)),
        remote_endpoint=getattr(settings, "REMOTE_ENDPOINT", None) or None,
    )

    return wire_container(
        staff_repo=MySQLStaffRepository(conn),
        holidays_repo=MySQLSpecialHolidayRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        sheets_client=SheetsClient(
            timeout=float(getattr(settings, "REMOTE_TIMEOUT_SECONDS", DEFAULT_REMOTE_TIMEOUT_SECONDS)),
        ),
        admin_password_hash=generate_password_hash(str(getattr(settings, "ADMIN_PASSWORD", "admin"))),
        settings_defaults=defaults,
        position_fetcher=AccuratePositionFetcher(
            pause_seconds=float(getattr(settings, "POSITION_PAUSE_SECONDS", POSITION_PAUSE_SECONDS)),
        ),
        sync_interval_seconds=int(getattr(settings, "SYNC_INTERVAL_SECONDS", DEFAULT_SYNC_INTERVAL_SECONDS)),
        conn=conn,
    )
