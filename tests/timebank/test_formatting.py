import pytest

from src.ponto_digital.ponto_digital.common.formatting import format_balance_minutes, format_worked_minutes


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "0h00min"), (59, "0h59min"), (480, "8h00min"), (125, "2h05min"), (-30, "-0h30min")],
)
def test_format_worked_minutes(minutes, expected):
    assert format_worked_minutes(minutes) == expected


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "+0h00min"), (30, "+0h30min"), (-480, "-8h00min"), (-60, "-1h00min"), (-61, "-1h01min"), (605, "+10h05min")],
)
def test_format_balance_minutes_keeps_explicit_sign(minutes, expected):
    assert format_balance_minutes(minutes) == expected
