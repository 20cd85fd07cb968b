"""Moroccan statutory rates for 2025.

Rates are immutable configuration data, loaded once at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from morocco_payroll.calculators.types import TaxBracket

IGR_BRACKETS_2025: tuple[TaxBracket, ...] = (
    TaxBracket(min_amount=Decimal("0"), max_amount=Decimal("40000"), rate=Decimal("0.00")),
    TaxBracket(min_amount=Decimal("40001"), max_amount=Decimal("60000"), rate=Decimal("0.10")),
    TaxBracket(min_amount=Decimal("60001"), max_amount=Decimal("80000"), rate=Decimal("0.20")),
    TaxBracket(min_amount=Decimal("80001"), max_amount=Decimal("100000"), rate=Decimal("0.30")),
    TaxBracket(min_amount=Decimal("100001"), max_amount=Decimal("180000"), rate=Decimal("0.34")),
    TaxBracket(min_amount=Decimal("180001"), max_amount=None, rate=Decimal("0.37")),
)


@dataclass(frozen=True)
class StatutoryRates:
    """Contribution rates, deductions and floors for one fiscal year."""

    cnss_employee_rate: Decimal = Decimal("0.0674")
    cnss_employer_rate: Decimal = Decimal("0.2109")
    amo_employee_rate: Decimal = Decimal("0.0226")
    amo_employer_rate: Decimal = Decimal("0.0411")

    professional_expense_rate: Decimal = Decimal("0.30")
    professional_expense_annual_cap: Decimal = Decimal("30000")

    minimum_monthly_wage: Decimal = Decimal("3266.55")  # SMIG

    dependent_deduction: Decimal = Decimal("500")  # Per dependent, annual
    dependent_deduction_cap: Decimal = Decimal("3000")

    overtime_premium: Decimal = Decimal("1.25")
    hours_per_day: Decimal = Decimal("8")
    months_per_year: Decimal = Decimal("12")

    igr_brackets: tuple[TaxBracket, ...] = IGR_BRACKETS_2025


MOROCCO_2025 = StatutoryRates()
