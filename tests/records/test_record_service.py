from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.ponto_digital.ponto_digital.core.enums import RecordType
from src.ponto_digital.ponto_digital.core.exceptions import NotFoundError, ValidationError
from src.ponto_digital.ponto_digital.records.service import RecordService
from tests.fakes import InMemoryRecords, InMemoryUsers, make_employee, make_event

SP = ZoneInfo("America/Sao_Paulo")

HEADER = "Usuário;Data/Hora;Latitude;Longitude;Device ID"


def _service(events=()):
    users = InMemoryUsers([make_employee("u1", "Ana"), make_employee("u2", "Bruno"), make_employee("u3", "Bruno")])
    records = InMemoryRecords(events, users=users)
    return RecordService(records, users, tz=SP), records


def test_import_resolves_names_and_reports_failures():
    svc, records = _service()
    text = "\n".join(
        [
            HEADER,
            "Ana;05/01/2026 09:00:00;-23.5;-46.6;phone-1;entrada",
            "Carla;05/01/2026 09:00:00;-23.5;-46.6;phone-2",
            "Bruno;05/01/2026 09:00:00;-23.5;-46.6;phone-3",
            "Ana;data ruim;-23.5;-46.6;phone-1",
        ]
    )

    result = svc.import_csv(text)

    assert result.imported == 1
    assert result.total == 4
    assert len(result.errors) == 3
    assert any("Carla" in e and e.startswith("Linha 3") for e in result.errors)
    assert any("mais de um usuário" in e and e.startswith("Linha 4") for e in result.errors)
    [ev] = records.events
    assert ev.user_id == "u1"
    assert ev.timestamp == datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)
    assert ev.geofence_id is None
    assert records.declared_types[ev.record_id] is RecordType.ENTRADA


def test_list_rows_converts_local_dates_to_utc_bounds():
    svc, records = _service()

    svc.list_rows(start=date(2026, 1, 5), end=date(2026, 1, 5), user_id="")

    assert records.last_list_args == {
        "start": datetime(2026, 1, 5, 3, 0, tzinfo=timezone.utc),
        "end": datetime(2026, 1, 6, 3, 0, tzinfo=timezone.utc),
        "user_id": None,
    }


def test_inverted_date_range_is_rejected():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.list_rows(start=date(2026, 1, 6), end=date(2026, 1, 5))


def test_delete_and_bulk_delete():
    events = [make_event(f"r{i}", "u1", datetime(2026, 1, 5, 12, i, tzinfo=timezone.utc)) for i in range(1, 4)]
    svc, records = _service(events)

    svc.delete("r1")
    with pytest.raises(NotFoundError):
        svc.delete("r1")

    assert svc.bulk_delete(["r2", "r3", "missing"]) == 2
    assert records.events == []


@pytest.mark.parametrize("ids", [[], None, "r1", ["r1", " "]])
def test_bulk_delete_requires_a_list_of_ids(ids):
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.bulk_delete(ids)


def test_export_without_rows_is_an_error():
    svc, _ = _service()

    with pytest.raises(ValidationError, match="Não há registros"):
        svc.export_csv()


def test_export_filters_by_user():
    events = [
        make_event("r1", "u1", datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)),
        make_event("r2", "u2", datetime(2026, 1, 5, 13, 0, tzinfo=timezone.utc)),
    ]
    svc, _ = _service(events)

    lines = svc.export_csv(user_id="u2").decode("utf-8-sig").splitlines()

    assert len(lines) == 2
    assert lines[1].startswith("Bruno;05/01/2026 10:00:00;")
