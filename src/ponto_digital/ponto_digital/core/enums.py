from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Perfil do usuário."""

    ADMIN = "admin"
    EMPLOYEE = "funcionario"


class RecordType(str, Enum):
    """Tipo derivado de um registro de ponto (nunca persistido como verdade)."""

    ENTRADA = "entrada"
    SAIDA = "saida"


class ExpectedMinutesMode(str, Enum):
    FIXED = "fixed"
    SHIFT = "shift"


class UnpairedEntryPolicy(str, Enum):
    """What a trailing entrada without saída means for the day."""

    ZERO = "zero"
    PENDING = "pending"


class NegativeDurationPolicy(str, Enum):
    """What a pair whose saída precedes its entrada contributes."""

    ALLOW = "allow"
    CLAMP = "clamp"
