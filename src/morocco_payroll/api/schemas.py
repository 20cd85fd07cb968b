"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from morocco_payroll.calculators.types import PayrollInput, PayrollResult

# Upper bounds keep every amount well inside the 28-digit Decimal context
MAX_AMOUNT = Decimal("1000000000")
MAX_DAYS = Decimal("366")
MAX_HOURS = Decimal("744")


# ============================================================================
# Calculation schemas
# ============================================================================


class PayrollCalculationRequest(BaseModel):
    """Schema for a single employee-month calculation."""

    base_salary: Decimal = Field(gt=0, le=MAX_AMOUNT, decimal_places=2)
    working_days: Decimal = Field(gt=0, le=MAX_DAYS, decimal_places=2)
    standard_working_days: Decimal = Field(
        default=Decimal("22"), gt=0, le=MAX_DAYS, decimal_places=2
    )
    overtime_hours: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_HOURS, decimal_places=2)
    bonuses: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT, decimal_places=2)
    deductions: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT, decimal_places=2)
    dependents: int = Field(default=0, ge=0)

    def to_input(self) -> PayrollInput:
        return PayrollInput(
            base_salary=self.base_salary,
            working_days=self.working_days,
            standard_working_days=self.standard_working_days,
            overtime_hours=self.overtime_hours,
            bonuses=self.bonuses,
            deductions=self.deductions,
            dependents=self.dependents,
        )


class PayrollCalculationResponse(BaseModel):
    """Schema for a calculated payroll, rounded to cents."""

    gross_salary: Decimal
    cnss_employee: Decimal
    cnss_employer: Decimal
    amo_employee: Decimal
    amo_employer: Decimal
    igr_tax: Decimal
    professional_expenses: Decimal
    net_salary: Decimal

    @classmethod
    def from_result(cls, result: PayrollResult) -> "PayrollCalculationResponse":
        return cls(**result.rounded().to_dict())


# ============================================================================
# Payslip schemas
# ============================================================================


class PayslipLineResponse(BaseModel):
    """Schema for a payslip line."""

    line_type: str
    code: str
    label: str
    base: Decimal | None = None
    rate: Decimal | None = None
    amount: Decimal
    formatted_amount: str


class PayslipTotalsResponse(BaseModel):
    """Totals block of a payslip, rounded to cents."""

    total_earnings: Decimal
    total_employee_contributions: Decimal
    total_withholdings: Decimal
    total_employer_contributions: Decimal
    professional_expenses: Decimal
    net_salary: Decimal


class PayslipResponse(BaseModel):
    """Schema for payslip lines and totals."""

    lines: list[PayslipLineResponse]
    totals: PayslipTotalsResponse
    result: PayrollCalculationResponse
    formatted_gross: str
    formatted_net: str
    minimum_wage_applied: bool


# ============================================================================
# Contribution and compliance schemas
# ============================================================================


class ContributionBreakdownResponse(BaseModel):
    employee: Decimal
    employer: Decimal
    total: Decimal


class ContributionSummaryResponse(BaseModel):
    """Schema for CNSS and AMO contributions on a gross salary."""

    gross_salary: Decimal
    cnss: ContributionBreakdownResponse
    amo: ContributionBreakdownResponse


class ComplianceResponse(BaseModel):
    """Schema for a minimum wage compliance check."""

    gross_salary: Decimal
    minimum_wage: Decimal
    compliant: bool


# ============================================================================
# Statutory report schemas
# ============================================================================


class EmployeePayrollRequest(BaseModel):
    """One employee in a statutory report request."""

    employee_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    cnss_number: str | None = None
    payroll: PayrollCalculationRequest


class StatutoryReportRequest(BaseModel):
    """Schema for a CNSS or AMO declaration request."""

    period: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    employees: list[EmployeePayrollRequest] = Field(min_length=1)


class PeriodSummaryResponse(BaseModel):
    """Headline payroll figures for a period."""

    period: str
    employee_count: int
    total_gross: Decimal
    total_net: Decimal
    total_employer_contributions: Decimal
    total_employer_cost: Decimal


class StatutoryReportRowResponse(BaseModel):
    employee_id: str
    name: str
    cnss_number: str | None = None
    gross_salary: Decimal
    employee_share: Decimal
    employer_share: Decimal
    total: Decimal


class StatutoryReportResponse(BaseModel):
    """Schema for a CNSS or AMO declaration."""

    contribution: str
    period: str
    employee_rate: Decimal
    employer_rate: Decimal
    employee_count: int
    payment_deadline: date | None = None
    rows: list[StatutoryReportRowResponse]
    total_gross: Decimal
    total_employee: Decimal
    total_employer: Decimal
    total_contributions: Decimal


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str | list[dict[str, Any]]
    code: str | None = None
