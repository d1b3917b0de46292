from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DeviceAuthorization:
    """Binding between an employee and a device fingerprint.

    The device id is produced on the client and handed to us as an opaque
    string; this service never derives or stores it on the device side.
    """

    authorization_id: str
    user_id: str
    device_id: str
    device_name: Optional[str] = None
    authorized_at: Optional[datetime] = None
