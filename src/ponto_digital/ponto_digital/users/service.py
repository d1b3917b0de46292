from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Optional, Sequence

from ..common.qr_codes import binding_url, make_qr_png
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .device_repository import DeviceRepository
from .model import Employee
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _parse_clock_time(value: Any, field_name: str) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(str(value).strip(), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} inválido (use HH:MM)")


def _validate_shift_window(start: Optional[time], end: Optional[time]) -> None:
    if (start is None) != (end is None):
        raise ValidationError("Informe início e fim do expediente, ou nenhum dos dois")
    if start is not None and end is not None and start >= end:
        raise ValidationError("Início do expediente deve ser antes do fim")


class UserService:
    """Use cases: administrar funcionários e seus dispositivos."""

    def __init__(self, users: UserRepository, devices: DeviceRepository, *, public_base_url: str = ""):
        self._users = users
        self._devices = devices
        self._public_base_url = public_base_url

    def list_with_devices(self) -> Sequence[Employee]:
        return self._users.list_with_devices()

    def get(self, user_id: str) -> Employee:
        user = self._users.get_with_devices(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")
        return user

    def create(
        self,
        *,
        name: Any,
        role: Any,
        part_time: Any = False,
        work_start_time: Any = None,
        work_end_time: Any = None,
    ) -> Employee:
        name_s = require_non_empty(name, "Nome")
        try:
            role_e = Role(require_non_empty(role, "Perfil"))
        except ValueError:
            raise ValidationError("Perfil inválido") from None

        start = _parse_clock_time(work_start_time, "Início do expediente")
        end = _parse_clock_time(work_end_time, "Fim do expediente")
        _validate_shift_window(start, end)

        user = self._users.create(
            name=name_s,
            role=role_e,
            part_time=bool(part_time),
            work_start_time=start,
            work_end_time=end,
        )
        logger.info("User created id=%s role=%s", user.user_id, user.role.value)
        return user

    def update(self, user_id: str, **fields: Any) -> Employee:
        """Partial update: fields not given keep their current value."""
        current = self._users.get_by_id(user_id)
        if not current:
            raise NotFoundError("Usuário não encontrado")

        name = require_non_empty(fields["name"], "Nome") if "name" in fields else current.name
        part_time = bool(fields["part_time"]) if "part_time" in fields else current.part_time
        start = (
            _parse_clock_time(fields["work_start_time"], "Início do expediente")
            if "work_start_time" in fields
            else current.work_start_time
        )
        end = (
            _parse_clock_time(fields["work_end_time"], "Fim do expediente")
            if "work_end_time" in fields
            else current.work_end_time
        )
        _validate_shift_window(start, end)

        updated = self._users.update(
            user_id, name=name, part_time=part_time, work_start_time=start, work_end_time=end
        )
        if not updated:
            raise NotFoundError("Usuário não encontrado")
        return updated

    def delete(self, user_id: str) -> None:
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("Usuário não encontrado")
        logger.info("User %s deleted", user_id)

    def rename_device(self, user_id: str, device_id: str, *, device_name: Any) -> Employee:
        name = require_non_empty(device_name, "Nome do dispositivo")
        if not self._devices.get_for_user(user_id, device_id):
            raise NotFoundError("Dispositivo não encontrado para este usuário")
        self._devices.rename(user_id, device_id, device_name=name)
        return self.get(user_id)

    def remove_device(self, user_id: str, device_id: str) -> Employee:
        if not self._devices.delete(user_id, device_id):
            raise NotFoundError("Dispositivo não encontrado para este usuário")
        logger.info("Device %s unbound from user %s", device_id, user_id)
        return self.get(user_id)

    def binding_qr(self, user_id: str) -> tuple[Employee, str, bytes]:
        """QR code (PNG) the employee scans to bind a phone to their account."""
        user = self.get(user_id)
        url = binding_url(self._public_base_url, user.user_id)
        return user, url, make_qr_png(url)


class DeviceBindingService:
    """Use case: vincular dispositivo e identificar quem está batendo ponto."""

    def __init__(self, users: UserRepository, devices: DeviceRepository):
        self._users = users
        self._devices = devices

    def bind(self, *, user_id: Any, device_id: Any, device_name: Any = None) -> bool:
        """Bind ``device_id`` to the employee; returns False when it was already bound."""
        user_id_s = require_non_empty(user_id, "ID do usuário")
        device_id_s = require_non_empty(device_id, "ID do dispositivo")
        name = str(device_name).strip() if device_name else None

        user = self._users.get_by_id(user_id_s)
        if not user:
            raise NotFoundError("Usuário não encontrado")

        owners = {b.user_id for b in self._devices.list_by_device_id(device_id_s)}
        if user.user_id in owners:
            return False
        if owners:
            logger.info("Device bind refused for user %s: device owned by another user", user.user_id)
            raise ValidationError("Dispositivo já vinculado a outro usuário")

        self._devices.create(user_id=user.user_id, device_id=device_id_s, device_name=name or None)
        logger.info("Device bound to user %s", user.user_id)
        return True

    def identify(self, device_id: str) -> Employee:
        """Resolve the employee owning ``device_id``.

        A device bound to more than one employee is treated as unrecognized:
        attributing the punch to either would be a guess.
        """
        bindings = self._devices.list_by_device_id(device_id)
        if len(bindings) != 1:
            raise AuthenticationError("Dispositivo não reconhecido. Vincule seu dispositivo primeiro.")

        user = self._users.get_by_id(bindings[0].user_id)
        if not user:
            raise AuthenticationError("Dispositivo não reconhecido. Vincule seu dispositivo primeiro.")
        return user
