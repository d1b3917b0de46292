from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..core.enums import Role
from .device_model import DeviceAuthorization


@dataclass(frozen=True)
class Employee:
    """Domain entity: usuário (funcionário ou administrador).

    ``part_time``/``work_start_time``/``work_end_time`` describe the employee's
    shift window; the bank of hours only consults them when the ``shift``
    expected-minutes policy is configured.
    """

    user_id: str
    name: str
    role: Role = Role.EMPLOYEE
    part_time: bool = False
    work_start_time: Optional[time] = None
    work_end_time: Optional[time] = None
    created_at: Optional[datetime] = None
    devices: tuple[DeviceAuthorization, ...] = ()
