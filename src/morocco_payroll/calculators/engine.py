"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import logging
from decimal import Decimal

from morocco_payroll.calculators.rates import MOROCCO_2025, StatutoryRates
from morocco_payroll.calculators.tax_calculator import TaxCalculator
from morocco_payroll.calculators.types import (
    ContributionBreakdown,
    ContributionSummary,
    EarningsBreakdown,
    PayrollInput,
    PayrollResult,
)

logger = logging.getLogger(__name__)


class PayrollEngine:
    """Moroccan monthly payroll calculation engine.

    Calculation pipeline (stable order):
    1) Prorate base salary by days worked
    2) Add overtime (8-hour day, 25% premium) and bonuses
    3) Raise gross to the SMIG floor
    4) Compute CNSS and AMO on the uncapped gross
    5) Deduct professional expenses (30%, capped) and dependents (capped)
    6) Annualize taxable income, apply IGR brackets, bring back to monthly
    7) Net = gross - employee withholdings - other deductions

    The engine holds no mutable state and performs no input validation.
    """

    def __init__(self, rates: StatutoryRates = MOROCCO_2025):
        self.rates = rates
        self.tax_calculator = TaxCalculator(rates.igr_brackets)

    def calculate(self, payroll_input: PayrollInput) -> PayrollResult:
        """Calculate the full payroll breakdown for one employee-month."""
        rates = self.rates
        months = rates.months_per_year

        earnings = self.compute_earnings(payroll_input)
        gross = self.apply_minimum_wage_floor(earnings.raw_gross)

        cnss_employee = self.tax_calculator.calculate_flat_tax(gross, rates.cnss_employee_rate)
        cnss_employer = self.tax_calculator.calculate_flat_tax(gross, rates.cnss_employer_rate)
        amo_employee = self.tax_calculator.calculate_flat_tax(gross, rates.amo_employee_rate)
        amo_employer = self.tax_calculator.calculate_flat_tax(gross, rates.amo_employer_rate)

        professional_expenses = self.professional_expenses_annual(gross) / months
        dependent_deduction = self.dependent_deduction_annual(payroll_input.dependents) / months

        monthly_taxable = max(
            Decimal("0"),
            gross - cnss_employee - amo_employee - professional_expenses - dependent_deduction,
        )
        annual_tax = self.tax_calculator.calculate_progressive_tax(monthly_taxable * months)
        igr_tax = annual_tax / months

        net = gross - (cnss_employee + amo_employee + igr_tax + payroll_input.deductions)

        return PayrollResult(
            gross_salary=gross,
            cnss_employee=cnss_employee,
            cnss_employer=cnss_employer,
            amo_employee=amo_employee,
            amo_employer=amo_employer,
            igr_tax=igr_tax,
            professional_expenses=professional_expenses,
            net_salary=net,
        )

    def compute_earnings(self, payroll_input: PayrollInput) -> EarningsBreakdown:
        """Prorated salary, overtime and bonuses before the SMIG floor."""
        rates = self.rates
        daily_rate = payroll_input.base_salary / payroll_input.standard_working_days
        # Exact when working_days == standard_working_days
        adjusted_salary = (
            payroll_input.base_salary
            * payroll_input.working_days
            / payroll_input.standard_working_days
        )
        hourly_rate = daily_rate / rates.hours_per_day
        overtime_pay = Decimal("0")
        if payroll_input.overtime_hours > 0:
            overtime_pay = payroll_input.overtime_hours * self.calculate_overtime_rate(hourly_rate)

        return EarningsBreakdown(
            daily_rate=daily_rate,
            adjusted_salary=adjusted_salary,
            overtime_pay=overtime_pay,
            bonuses=payroll_input.bonuses,
        )

    def apply_minimum_wage_floor(self, gross: Decimal) -> Decimal:
        """Raise a gross salary below the SMIG to the SMIG.

        Underpayment is overridden silently, never rejected.
        """
        floor = self.rates.minimum_monthly_wage
        if gross < floor:
            logger.debug("Gross %s below SMIG, raised to %s", gross, floor)
            return floor
        return gross

    def professional_expenses_annual(self, gross: Decimal) -> Decimal:
        rates = self.rates
        return min(
            gross * rates.months_per_year * rates.professional_expense_rate,
            rates.professional_expense_annual_cap,
        )

    def dependent_deduction_annual(self, dependents: int) -> Decimal:
        rates = self.rates
        return min(dependents * rates.dependent_deduction, rates.dependent_deduction_cap)

    def calculate_overtime_rate(self, hourly_rate: Decimal) -> Decimal:
        """Hourly rate including the overtime premium."""
        return hourly_rate * self.rates.overtime_premium

    def validate_minimum_wage_compliance(self, gross_salary: Decimal) -> bool:
        return gross_salary >= self.rates.minimum_monthly_wage

    def contribution_summary(self, gross_salary: Decimal) -> ContributionSummary:
        """CNSS and AMO shares for a gross salary."""
        rates = self.rates
        return ContributionSummary(
            cnss=ContributionBreakdown(
                employee=gross_salary * rates.cnss_employee_rate,
                employer=gross_salary * rates.cnss_employer_rate,
            ),
            amo=ContributionBreakdown(
                employee=gross_salary * rates.amo_employee_rate,
                employer=gross_salary * rates.amo_employer_rate,
            ),
        )
