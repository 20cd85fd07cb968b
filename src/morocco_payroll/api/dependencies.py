"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from morocco_payroll.calculators.engine import PayrollEngine
from morocco_payroll.calculators.line_builder import PayslipLineBuilder
from morocco_payroll.config import Settings, get_settings
from morocco_payroll.services.reporting import StatutoryReportService


@lru_cache(maxsize=1)
def get_engine() -> PayrollEngine:
    """Shared engine instance (stateless, safe to reuse)."""
    return PayrollEngine()


def get_line_builder(
    engine: Annotated[PayrollEngine, Depends(get_engine)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PayslipLineBuilder:
    return PayslipLineBuilder(rates=engine.rates, currency=settings.currency)


def get_report_service(
    engine: Annotated[PayrollEngine, Depends(get_engine)],
) -> StatutoryReportService:
    return StatutoryReportService(rates=engine.rates)


# Type aliases for cleaner dependency injection
Engine = Annotated[PayrollEngine, Depends(get_engine)]
LineBuilder = Annotated[PayslipLineBuilder, Depends(get_line_builder)]
ReportService = Annotated[StatutoryReportService, Depends(get_report_service)]
AppSettings = Annotated[Settings, Depends(get_settings)]
