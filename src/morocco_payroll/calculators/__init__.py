"""Payroll calculation engine."""

from morocco_payroll.calculators.engine import PayrollEngine
from morocco_payroll.calculators.line_builder import PayslipLineBuilder
from morocco_payroll.calculators.rates import IGR_BRACKETS_2025, MOROCCO_2025, StatutoryRates
from morocco_payroll.calculators.tax_calculator import TaxCalculator, compute_progressive_tax
from morocco_payroll.calculators.types import PayrollInput, PayrollResult

__all__ = [
    "PayrollEngine",
    "PayslipLineBuilder",
    "IGR_BRACKETS_2025",
    "MOROCCO_2025",
    "StatutoryRates",
    "TaxCalculator",
    "compute_progressive_tax",
    "PayrollInput",
    "PayrollResult",
]
