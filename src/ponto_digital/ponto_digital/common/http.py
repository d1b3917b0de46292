from __future__ import annotations

import hmac
import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    return 400


def json_errors(view):
    """Translate domain errors into ``{"error": ...}`` JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return jsonify({"error": str(e)}), status_for(e)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return jsonify({"error": INTERNAL_ERROR_MESSAGE}), 500

    return wrapper


def admin_required(view):
    """Require ``Authorization: Bearer <ADMIN_API_TOKEN>``.

    Identity itself lives with the external provider; this only checks the
    token it issues to the dashboard. An unset token refuses everyone.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get("ADMIN_API_TOKEN") or ""
        header = request.headers.get("Authorization", "")
        token = header[len("Bearer "):] if header.startswith("Bearer ") else ""
        if not expected or not token or not hmac.compare_digest(token, expected):
            return jsonify({"error": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corpo JSON inválido")
    return data


def query_date(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Parâmetro '{name}' inválido (use YYYY-MM-DD)") from None


def client_ip(explicit: Optional[str] = None) -> Optional[str]:
    if explicit:
        return str(explicit)
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr
