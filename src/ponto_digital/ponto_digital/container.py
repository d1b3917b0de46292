from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .geofences.mysql_geofence_repository import MySQLGeofenceRepository
from .geofences.repository import GeofenceRepository
from .geofences.service import GeofenceService
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .records.service import ClockService, RecordService
from .settings import AppSettings
from .timebank.factory import ExpectedMinutesPolicyFactory
from .timebank.service import TimeBankReportService
from .users.device_repository import DeviceRepository
from .users.mysql_device_repository import MySQLDeviceRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import DeviceBindingService, UserService


@dataclass(frozen=True)
class Container:
    settings: AppSettings
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    devices_repo: DeviceRepository
    geofences_repo: GeofenceRepository
    records_repo: RecordRepository

    user_service: UserService
    device_binding_service: DeviceBindingService
    geofence_service: GeofenceService
    clock_service: ClockService
    record_service: RecordService
    time_bank_service: TimeBankReportService


def assemble(
    settings: AppSettings,
    *,
    users_repo: UserRepository,
    devices_repo: DeviceRepository,
    geofences_repo: GeofenceRepository,
    records_repo: RecordRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementations."""
    device_binding_service = DeviceBindingService(users_repo, devices_repo)
    policy_factory = ExpectedMinutesPolicyFactory(
        mode=settings.expected_minutes_mode,
        default_minutes=settings.expected_daily_minutes,
    )

    return Container(
        settings=settings,
        conn=conn,
        users_repo=users_repo,
        devices_repo=devices_repo,
        geofences_repo=geofences_repo,
        records_repo=records_repo,
        user_service=UserService(users_repo, devices_repo, public_base_url=settings.public_base_url),
        device_binding_service=device_binding_service,
        geofence_service=GeofenceService(geofences_repo, public_base_url=settings.public_base_url),
        clock_service=ClockService(records_repo, geofences_repo, device_binding_service),
        record_service=RecordService(records_repo, users_repo, tz=settings.tz),
        time_bank_service=TimeBankReportService(
            records_repo,
            users_repo,
            tz=settings.tz,
            policy_factory=policy_factory,
            unpaired_policy=settings.unpaired_policy,
            negative_policy=settings.negative_policy,
        ),
    )


def build_container(*, db_config: dict, settings: AppSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        settings,
        users_repo=MySQLUserRepository(conn),
        devices_repo=MySQLDeviceRepository(conn),
        geofences_repo=MySQLGeofenceRepository(conn),
        records_repo=MySQLRecordRepository(conn),
        conn=conn,
    )
