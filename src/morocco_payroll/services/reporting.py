"""Statutory report (CNSS / AMO declaration) service."""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from morocco_payroll.calculators.line_builder import PayslipLineBuilder
from morocco_payroll.calculators.rates import MOROCCO_2025, StatutoryRates
from morocco_payroll.calculators.types import PayrollResult

ZERO = Decimal("0")

# Declarations are due by this day of the month following the period
PAYMENT_DEADLINE_DAY = 15


def payment_deadline(period: str) -> date | None:
    """Due date of a declaration for a ``YYYY-MM`` period.

    Returns None when the period is not a calendar month.
    """
    try:
        start = datetime.strptime(period, "%Y-%m").date()
        if start.month == 12:
            return date(start.year + 1, 1, PAYMENT_DEADLINE_DAY)
        return date(start.year, start.month + 1, PAYMENT_DEADLINE_DAY)
    except ValueError:
        return None


@dataclass(frozen=True)
class EmployeePayroll:
    """One employee's calculated payroll for a period."""

    employee_id: str
    name: str
    result: PayrollResult
    cnss_number: str | None = None


@dataclass(frozen=True)
class StatutoryReportRow:
    """Per-employee line of a declaration."""

    employee_id: str
    name: str
    cnss_number: str | None
    gross_salary: Decimal
    employee_share: Decimal
    employer_share: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_share + self.employer_share


@dataclass
class StatutoryReport:
    """Monthly declaration for one contribution (CNSS or AMO)."""

    contribution: str
    period: str  # Opaque YYYY-MM token
    employee_rate: Decimal
    employer_rate: Decimal
    rows: list[StatutoryReportRow] = field(default_factory=list)

    @property
    def total_gross(self) -> Decimal:
        return sum((r.gross_salary for r in self.rows), ZERO)

    @property
    def total_employee(self) -> Decimal:
        return sum((r.employee_share for r in self.rows), ZERO)

    @property
    def total_employer(self) -> Decimal:
        return sum((r.employer_share for r in self.rows), ZERO)

    @property
    def total_contributions(self) -> Decimal:
        return self.total_employee + self.total_employer

    @property
    def employee_count(self) -> int:
        return len(self.rows)

    @property
    def payment_deadline(self) -> date | None:
        return payment_deadline(self.period)


@dataclass(frozen=True)
class PeriodSummary:
    """Headline payroll figures for a period."""

    period: str
    employee_count: int
    total_gross: Decimal
    total_net: Decimal
    total_employer_contributions: Decimal
    total_employer_cost: Decimal


class StatutoryReportService:
    """Service for aggregating per-employee results into declarations.

    Rows carry the results rounded to cents, so report totals equal the
    sums of the amounts printed on each payslip.
    """

    CSV_HEADER = [
        "employee_id",
        "name",
        "cnss_number",
        "gross_salary",
        "employee_share",
        "employer_share",
        "total",
    ]

    def __init__(self, rates: StatutoryRates = MOROCCO_2025):
        self.rates = rates

    def build_cnss_report(
        self, period: str, entries: Sequence[EmployeePayroll]
    ) -> StatutoryReport:
        """Build the CNSS declaration for a period."""
        return self._build_report(
            "CNSS",
            period,
            entries,
            employee_rate=self.rates.cnss_employee_rate,
            employer_rate=self.rates.cnss_employer_rate,
            shares=lambda r: (r.cnss_employee, r.cnss_employer),
        )

    def build_amo_report(
        self, period: str, entries: Sequence[EmployeePayroll]
    ) -> StatutoryReport:
        """Build the AMO declaration for a period."""
        return self._build_report(
            "AMO",
            period,
            entries,
            employee_rate=self.rates.amo_employee_rate,
            employer_rate=self.rates.amo_employer_rate,
            shares=lambda r: (r.amo_employee, r.amo_employer),
        )

    def summarize_period(
        self, period: str, entries: Iterable[EmployeePayroll]
    ) -> PeriodSummary:
        results = [e.result.rounded() for e in entries]
        employer_contributions = sum(
            (r.total_employer_contributions for r in results), ZERO
        )
        return PeriodSummary(
            period=period,
            employee_count=len(results),
            total_gross=sum((r.gross_salary for r in results), ZERO),
            total_net=sum((r.net_salary for r in results), ZERO),
            total_employer_contributions=employer_contributions,
            total_employer_cost=sum((r.employer_cost for r in results), ZERO),
        )

    def to_csv(self, report: StatutoryReport) -> str:
        """Export a report as CSV with a trailing totals row."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(self.CSV_HEADER)

        for row in report.rows:
            writer.writerow(
                [
                    row.employee_id,
                    row.name,
                    row.cnss_number or "",
                    f"{row.gross_salary:.2f}",
                    f"{row.employee_share:.2f}",
                    f"{row.employer_share:.2f}",
                    f"{row.total:.2f}",
                ]
            )

        writer.writerow(
            [
                "TOTAL",
                "",
                "",
                f"{report.total_gross:.2f}",
                f"{report.total_employee:.2f}",
                f"{report.total_employer:.2f}",
                f"{report.total_contributions:.2f}",
            ]
        )
        return output.getvalue()

    def _build_report(
        self,
        contribution: str,
        period: str,
        entries: Sequence[EmployeePayroll],
        employee_rate: Decimal,
        employer_rate: Decimal,
        shares: Callable[[PayrollResult], tuple[Decimal, Decimal]],
    ) -> StatutoryReport:
        if not entries:
            raise ValueError(f"Cannot build {contribution} report for {period}: no employees")

        report = StatutoryReport(
            contribution=contribution,
            period=period,
            employee_rate=employee_rate,
            employer_rate=employer_rate,
        )
        round_to_cents = PayslipLineBuilder.round_to_cents

        for entry in entries:
            employee_share, employer_share = shares(entry.result)
            report.rows.append(
                StatutoryReportRow(
                    employee_id=entry.employee_id,
                    name=entry.name,
                    cnss_number=entry.cnss_number,
                    gross_salary=round_to_cents(entry.result.gross_salary),
                    employee_share=round_to_cents(employee_share),
                    employer_share=round_to_cents(employer_share),
                )
            )

        return report
