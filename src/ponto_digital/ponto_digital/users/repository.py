from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class UserRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, never on MySQL directly.
    """

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_name(self, name: str) -> Sequence[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_with_devices(self) -> Sequence[Employee]:
        """Newest first, each employee carrying its device authorizations."""

        raise NotImplementedError

    def get_with_devices(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        role: Role,
        part_time: bool = False,
        work_start_time: Optional[time] = None,
        work_end_time: Optional[time] = None,
    ) -> Employee:
        raise NotImplementedError

    def update(
        self,
        user_id: str,
        *,
        name: str,
        part_time: bool,
        work_start_time: Optional[time],
        work_end_time: Optional[time],
    ) -> Optional[Employee]:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
