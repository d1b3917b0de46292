from __future__ import annotations

import io
from urllib.parse import urlencode

import qrcode


def checkin_url(base_url: str, geofence_id: str) -> str:
    """Page that clocks in anchored to one geofence."""
    return f"{base_url.rstrip('/')}/ponto?{urlencode({'geofenceId': geofence_id})}"


def binding_url(base_url: str, user_id: str) -> str:
    """Page that binds the scanning device to an employee."""
    return f"{base_url.rstrip('/')}/vincular-device?{urlencode({'userId': user_id})}"


def make_qr_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
