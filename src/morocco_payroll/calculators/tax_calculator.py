"""Progressive income tax (IGR) and flat-rate contribution calculation."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from morocco_payroll.calculators.rates import IGR_BRACKETS_2025
from morocco_payroll.calculators.types import TaxBracket

ZERO = Decimal("0")


class TaxCalculator:
    """Calculates taxes from an ordered bracket table.

    Brackets use inclusive bounds, so a closed bracket covers
    ``max - min + 1`` currency units. The last bracket may be open-ended.
    """

    def __init__(self, brackets: Sequence[TaxBracket] = IGR_BRACKETS_2025):
        self.brackets = tuple(sorted(brackets, key=lambda b: b.min_amount))

    def calculate_progressive_tax(self, income: Decimal) -> Decimal:
        """Calculate tax using marginal brackets. Returns an unrounded amount."""
        if income <= 0:
            return ZERO

        total_tax = ZERO
        remaining = income

        for bracket in self.brackets:
            if remaining <= 0:
                break

            width = bracket.width
            taxable_in_bracket = remaining if width is None else min(remaining, width)
            total_tax += taxable_in_bracket * bracket.rate
            remaining -= taxable_in_bracket

        return total_tax

    @staticmethod
    def calculate_flat_tax(base: Decimal, rate: Decimal) -> Decimal:
        """Calculate a flat-rate contribution on an uncapped base."""
        if base <= 0:
            return ZERO
        return base * rate


_default_calculator = TaxCalculator()


def compute_progressive_tax(
    annual_income: Decimal,
    brackets: Sequence[TaxBracket] | None = None,
) -> Decimal:
    """Annual IGR for an annual taxable income."""
    if brackets is None:
        return _default_calculator.calculate_progressive_tax(annual_income)
    return TaxCalculator(brackets).calculate_progressive_tax(annual_income)
