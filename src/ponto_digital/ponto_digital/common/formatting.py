from __future__ import annotations


def format_worked_minutes(minutes: int) -> str:
    """Render worked time as ``{hours}h{minutes:02}min``."""
    minutes = int(minutes)
    sign = "-" if minutes < 0 else ""
    hours, rest = divmod(abs(minutes), 60)
    return f"{sign}{hours}h{rest:02d}min"


def format_balance_minutes(minutes: int) -> str:
    """Render a balance with an explicit sign; zero is ``+0h00min``."""
    minutes = int(minutes)
    sign = "-" if minutes < 0 else "+"
    hours, rest = divmod(abs(minutes), 60)
    return f"{sign}{hours}h{rest:02d}min"
