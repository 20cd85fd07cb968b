"""Payslip line builder with rounding and amount formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from morocco_payroll.calculators.rates import MOROCCO_2025, StatutoryRates
from morocco_payroll.calculators.types import (
    CENTS,
    EarningsBreakdown,
    LineType,
    PayrollInput,
    PayrollResult,
    PayslipLine,
    PayslipTotals,
)


class PayslipLineBuilder:
    """Builds the ordered lines of a payslip from a calculated result.

    Sign conventions (non-negotiable):
    - EARNING: positive
    - CONTRIBUTION / TAX / DEDUCTION (employee): negative
    - EMPLOYER_CONTRIBUTION: positive (liability, not part of net)

    Rounding:
    - Amounts stay unrounded on the lines
    - round_to_cents / format_amount are applied at display time
    """

    def __init__(self, rates: StatutoryRates = MOROCCO_2025, currency: str = "MAD"):
        self.rates = rates
        self.currency = currency

    @staticmethod
    def round_to_cents(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places."""
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)

    @staticmethod
    def format_amount(amount: Decimal, currency: str = "MAD") -> str:
        """Format an amount as ``1234.50 MAD``."""
        return f"{PayslipLineBuilder.round_to_cents(amount):.2f} {currency}"

    def build_lines(
        self,
        payroll_input: PayrollInput,
        result: PayrollResult,
        earnings: EarningsBreakdown,
    ) -> list[PayslipLine]:
        rates = self.rates
        lines = [
            PayslipLine(
                line_type=LineType.EARNING,
                code="BASE",
                label="Salaire de base",
                amount=earnings.adjusted_salary,
                base=payroll_input.working_days,
                rate=earnings.daily_rate,
            )
        ]

        if earnings.overtime_pay > 0:
            lines.append(
                PayslipLine(
                    line_type=LineType.EARNING,
                    code="OVERTIME",
                    label="Heures supplementaires",
                    amount=earnings.overtime_pay,
                    base=payroll_input.overtime_hours,
                    rate=earnings.daily_rate / rates.hours_per_day * rates.overtime_premium,
                )
            )

        if earnings.bonuses > 0:
            lines.append(
                PayslipLine(
                    line_type=LineType.EARNING,
                    code="BONUS",
                    label="Primes",
                    amount=earnings.bonuses,
                )
            )

        smig_adjustment = result.gross_salary - earnings.raw_gross
        if smig_adjustment > 0:
            lines.append(
                PayslipLine(
                    line_type=LineType.EARNING,
                    code="SMIG_ADJUSTMENT",
                    label="Complement SMIG",
                    amount=smig_adjustment,
                )
            )

        gross = result.gross_salary
        lines.extend(
            [
                PayslipLine(
                    line_type=LineType.CONTRIBUTION,
                    code="CNSS",
                    label="CNSS salarie",
                    amount=-result.cnss_employee,
                    base=gross,
                    rate=rates.cnss_employee_rate,
                ),
                PayslipLine(
                    line_type=LineType.CONTRIBUTION,
                    code="AMO",
                    label="AMO salarie",
                    amount=-result.amo_employee,
                    base=gross,
                    rate=rates.amo_employee_rate,
                ),
                PayslipLine(
                    line_type=LineType.TAX,
                    code="IGR",
                    label="Impot general sur le revenu",
                    amount=-result.igr_tax,
                ),
            ]
        )

        if payroll_input.deductions > 0:
            lines.append(
                PayslipLine(
                    line_type=LineType.DEDUCTION,
                    code="OTHER_DEDUCTIONS",
                    label="Autres retenues",
                    amount=-payroll_input.deductions,
                )
            )

        lines.extend(
            [
                PayslipLine(
                    line_type=LineType.EMPLOYER_CONTRIBUTION,
                    code="CNSS_EMPLOYER",
                    label="CNSS patronale",
                    amount=result.cnss_employer,
                    base=gross,
                    rate=rates.cnss_employer_rate,
                ),
                PayslipLine(
                    line_type=LineType.EMPLOYER_CONTRIBUTION,
                    code="AMO_EMPLOYER",
                    label="AMO patronale",
                    amount=result.amo_employer,
                    base=gross,
                    rate=rates.amo_employer_rate,
                ),
            ]
        )

        return lines

    @staticmethod
    def net_from_lines(lines: list[PayslipLine]) -> Decimal:
        """Sum of every line that affects the employee's pay."""
        return sum(
            (line.amount for line in lines if line.line_type != LineType.EMPLOYER_CONTRIBUTION),
            Decimal("0"),
        )

    @staticmethod
    def build_totals(lines: list[PayslipLine], result: PayrollResult) -> PayslipTotals:
        """Totals block: earnings, withholdings, employer share and net."""

        def total(*line_types: LineType) -> Decimal:
            return sum(
                (line.amount for line in lines if line.line_type in line_types),
                Decimal("0"),
            )

        return PayslipTotals(
            total_earnings=total(LineType.EARNING),
            total_employee_contributions=-total(LineType.CONTRIBUTION),
            total_withholdings=-total(LineType.CONTRIBUTION, LineType.TAX, LineType.DEDUCTION),
            total_employer_contributions=total(LineType.EMPLOYER_CONTRIBUTION),
            professional_expenses=result.professional_expenses,
            net_salary=PayslipLineBuilder.net_from_lines(lines),
        )
