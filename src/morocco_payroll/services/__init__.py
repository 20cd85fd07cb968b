"""Payroll services."""

from morocco_payroll.services.reporting import (
    EmployeePayroll,
    PeriodSummary,
    StatutoryReport,
    StatutoryReportRow,
    StatutoryReportService,
)

__all__ = [
    "EmployeePayroll",
    "PeriodSummary",
    "StatutoryReport",
    "StatutoryReportRow",
    "StatutoryReportService",
]
