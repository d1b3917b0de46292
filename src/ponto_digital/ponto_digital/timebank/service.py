from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Optional

import pandas as pd

from ..common.datetime_utils import local_day_bounds
from ..common.formatting import format_balance_minutes, format_worked_minutes
from ..core.constants import CSV_DELIMITER
from ..core.enums import NegativeDurationPolicy, UnpairedEntryPolicy
from ..records.repository import RecordRepository
from ..users.repository import UserRepository
from .classifier import bank_of_hours, summarize_days
from .factory import ExpectedMinutesPolicyFactory
from .model import BankOfHoursTotal, DailyWorkSummary

logger = logging.getLogger(__name__)

DAILY_HEADERS = {
    "date": "Data",
    "user_name": "Funcionário",
    "records_text": "Registros",
    "worked": "Horas trabalhadas",
    "expected": "Jornada",
    "balance": "Saldo",
}
BANK_HEADERS = {
    "user_name": "Funcionário",
    "days": "Dias",
    "balance": "Banco de horas",
}


@dataclass(frozen=True)
class TimeBankReport:
    daily: list[DailyWorkSummary]
    bank: list[BankOfHoursTotal]
    daily_rows: list[dict]
    bank_rows: list[dict]


class TimeBankReportService:
    """Read side: raw events -> entrada/saída pairs, daily totals, bank of hours."""

    def __init__(
        self,
        records: RecordRepository,
        users: UserRepository,
        *,
        tz: tzinfo,
        policy_factory: Optional[ExpectedMinutesPolicyFactory] = None,
        unpaired_policy: UnpairedEntryPolicy = UnpairedEntryPolicy.ZERO,
        negative_policy: NegativeDurationPolicy = NegativeDurationPolicy.ALLOW,
    ):
        self._records = records
        self._users = users
        self._tz = tz
        self._policy_factory = policy_factory or ExpectedMinutesPolicyFactory()
        self._unpaired_policy = unpaired_policy
        self._negative_policy = negative_policy

    def build_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> TimeBankReport:
        lo, hi = local_day_bounds(start, end, self._tz)
        rows = self._records.list_rows(start=lo, end=hi, user_id=user_id or None)

        names = {r.event.user_id: r.user_name for r in rows if r.user_name}
        daily = summarize_days(
            (r.event for r in rows),
            tz=self._tz,
            user_names=names,
            expected_policy=self._policy_factory.build(self._users.list_all),
            unpaired_policy=self._unpaired_policy,
            negative_policy=self._negative_policy,
        )
        bank = bank_of_hours(daily)
        logger.debug("Time bank report: %d events, %d days, %d employees", len(rows), len(daily), len(bank))

        return TimeBankReport(
            daily=daily,
            bank=bank,
            daily_rows=[self._daily_row(s) for s in daily],
            bank_rows=[self._bank_row(b) for b in bank],
        )

    def _daily_row(self, s: DailyWorkSummary) -> dict:
        records = [
            {
                "id": c.event.record_id,
                "time": c.timestamp.astimezone(self._tz).strftime("%H:%M"),
                "type": c.record_type.value,
            }
            for c in s.records
        ]
        return {
            "date": s.work_date.strftime("%d/%m/%Y"),
            "user_id": s.user_id,
            "user_name": s.user_name,
            "records": records,
            "records_text": ", ".join(f"{r['time']} ({r['type']})" for r in records),
            "worked_minutes": s.total_worked_minutes,
            "worked": format_worked_minutes(s.total_worked_minutes),
            "expected_minutes": s.expected_minutes,
            "expected": format_worked_minutes(s.expected_minutes),
            "balance_minutes": s.balance_minutes,
            "balance": format_balance_minutes(s.balance_minutes),
            "pending": s.pending,
        }

    @staticmethod
    def _bank_row(b: BankOfHoursTotal) -> dict:
        return {
            "user_id": b.user_id,
            "user_name": b.user_name,
            "days": b.days,
            "total_balance_minutes": b.total_balance_minutes,
            "balance": format_balance_minutes(b.total_balance_minutes),
        }

    def export_daily_csv(self, report: TimeBankReport) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=list(DAILY_HEADERS),
            delimiter=CSV_DELIMITER,
            extrasaction="ignore",
            lineterminator="\n",
        )
        out.write(CSV_DELIMITER.join(DAILY_HEADERS.values()) + "\n")
        for row in report.daily_rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")

    def export_xlsx(self, report: TimeBankReport) -> bytes:
        daily = pd.DataFrame(report.daily_rows, columns=list(DAILY_HEADERS)).rename(columns=DAILY_HEADERS)
        bank = pd.DataFrame(report.bank_rows, columns=list(BANK_HEADERS)).rename(columns=BANK_HEADERS)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            daily.to_excel(writer, index=False, sheet_name="Registros diarios")
            bank.to_excel(writer, index=False, sheet_name="Banco de horas")
        return output.getvalue()
