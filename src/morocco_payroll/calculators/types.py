"""Type definitions for calculation pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

CENTS = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce an int, float or string to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class LineType(str, Enum):
    """Payslip line types."""

    EARNING = "EARNING"
    CONTRIBUTION = "CONTRIBUTION"
    TAX = "TAX"
    DEDUCTION = "DEDUCTION"
    EMPLOYER_CONTRIBUTION = "EMPLOYER_CONTRIBUTION"


@dataclass(frozen=True)
class PayrollInput:
    """Inputs for one employee's monthly payroll.

    Values are assumed validated by the caller: salary and working-day
    counts strictly positive, everything else non-negative.
    """

    base_salary: Decimal
    working_days: Decimal
    standard_working_days: Decimal = Decimal("22")
    overtime_hours: Decimal = Decimal("0")
    bonuses: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    dependents: int = 0

    @classmethod
    def from_values(
        cls,
        base_salary: Any,
        working_days: Any,
        standard_working_days: Any = 22,
        overtime_hours: Any = 0,
        bonuses: Any = 0,
        deductions: Any = 0,
        dependents: int = 0,
    ) -> PayrollInput:
        """Build an input from plain numbers, converting money to Decimal."""
        return cls(
            base_salary=to_decimal(base_salary),
            working_days=to_decimal(working_days),
            standard_working_days=to_decimal(standard_working_days),
            overtime_hours=to_decimal(overtime_hours),
            bonuses=to_decimal(bonuses),
            deductions=to_decimal(deductions),
            dependents=int(dependents),
        )


@dataclass(frozen=True)
class EarningsBreakdown:
    """Gross pay components before the minimum wage floor."""

    daily_rate: Decimal
    adjusted_salary: Decimal
    overtime_pay: Decimal
    bonuses: Decimal

    @property
    def raw_gross(self) -> Decimal:
        return self.adjusted_salary + self.overtime_pay + self.bonuses


@dataclass(frozen=True)
class PayrollResult:
    """Computed monthly payroll breakdown.

    Amounts are kept unrounded; use rounded() for display and persistence.
    """

    gross_salary: Decimal
    cnss_employee: Decimal
    cnss_employer: Decimal
    amo_employee: Decimal
    amo_employer: Decimal
    igr_tax: Decimal
    professional_expenses: Decimal
    net_salary: Decimal

    @property
    def total_employer_contributions(self) -> Decimal:
        return self.cnss_employer + self.amo_employer

    @property
    def employer_cost(self) -> Decimal:
        """Gross salary plus employer-side contributions."""
        return self.gross_salary + self.total_employer_contributions

    def rounded(self) -> PayrollResult:
        """Return a copy with every amount rounded to cents."""
        return replace(
            self,
            **{
                f.name: getattr(self, f.name).quantize(CENTS, rounding=ROUND_HALF_UP)
                for f in fields(self)
            },
        )

    def to_dict(self) -> dict[str, Decimal]:
        return asdict(self)


@dataclass(frozen=True)
class TaxBracket:
    """Tax bracket for progressive taxation (inclusive bounds)."""

    min_amount: Decimal
    max_amount: Decimal | None  # None = no upper limit
    rate: Decimal  # As decimal, e.g., 0.10 for 10%

    @property
    def width(self) -> Decimal | None:
        if self.max_amount is None:
            return None
        return self.max_amount - self.min_amount + 1


@dataclass(frozen=True)
class ContributionBreakdown:
    """Employee and employer shares of one contribution."""

    employee: Decimal
    employer: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee + self.employer

    def to_dict(self) -> dict[str, Decimal]:
        return {"employee": self.employee, "employer": self.employer, "total": self.total}


@dataclass(frozen=True)
class ContributionSummary:
    """CNSS and AMO contributions for a gross salary."""

    cnss: ContributionBreakdown
    amo: ContributionBreakdown

    def to_dict(self) -> dict[str, dict[str, Decimal]]:
        return {"cnss": self.cnss.to_dict(), "amo": self.amo.to_dict()}


@dataclass(frozen=True)
class PayslipLine:
    """A single payslip line (designation, base, rate, amount)."""

    line_type: LineType
    code: str
    label: str
    amount: Decimal  # Signed per conventions
    base: Decimal | None = None
    rate: Decimal | None = None

    def to_canonical_dict(self) -> dict[str, Any]:
        """Return canonical dict with string amounts (deterministic ordering)."""
        return {
            "line_type": self.line_type.value,
            "code": self.code,
            "label": self.label,
            "base": str(self.base) if self.base is not None else None,
            "rate": str(self.rate) if self.rate is not None else None,
            "amount": str(self.amount),
        }


@dataclass(frozen=True)
class PayslipTotals:
    """Summary block printed under the payslip lines."""

    total_earnings: Decimal
    total_employee_contributions: Decimal
    total_withholdings: Decimal
    total_employer_contributions: Decimal
    professional_expenses: Decimal  # Informational, not a withholding
    net_salary: Decimal
