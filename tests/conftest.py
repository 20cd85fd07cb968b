"""Pytest fixtures for payroll engine tests."""

from __future__ import annotations

import pytest

from morocco_payroll.calculators.engine import PayrollEngine
from morocco_payroll.calculators.line_builder import PayslipLineBuilder
from morocco_payroll.calculators.types import PayrollInput
from morocco_payroll.services.reporting import EmployeePayroll, StatutoryReportService


@pytest.fixture
def engine() -> PayrollEngine:
    return PayrollEngine()


@pytest.fixture
def builder() -> PayslipLineBuilder:
    return PayslipLineBuilder()


@pytest.fixture
def report_service() -> StatutoryReportService:
    return StatutoryReportService()


@pytest.fixture
def full_month_input() -> PayrollInput:
    """8000 MAD, full month, no extras."""
    return PayrollInput.from_values(base_salary=8000, working_days=22)


@pytest.fixture
def high_earner_input() -> PayrollInput:
    """20000 MAD, full month: reaches the top IGR bracket and the expense cap."""
    return PayrollInput.from_values(base_salary=20000, working_days=22)


@pytest.fixture
def employees(engine, full_month_input, high_earner_input) -> list[EmployeePayroll]:
    return [
        EmployeePayroll(
            employee_id="EMP-001",
            name="Amina Alaoui",
            cnss_number="123456789",
            result=engine.calculate(full_month_input),
        ),
        EmployeePayroll(
            employee_id="EMP-002",
            name="Youssef Bennani",
            cnss_number="987654321",
            result=engine.calculate(high_earner_input),
        ),
    ]
