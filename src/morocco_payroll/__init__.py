"""Moroccan payroll withholding engine (CNSS, AMO, IGR)."""

from morocco_payroll.calculators import (
    PayrollEngine,
    PayrollInput,
    PayrollResult,
    compute_progressive_tax,
)

__version__ = "1.0.0"

__all__ = [
    "PayrollEngine",
    "PayrollInput",
    "PayrollResult",
    "compute_progressive_tax",
    "__version__",
]
