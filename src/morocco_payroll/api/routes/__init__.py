"""API routes."""

from morocco_payroll.api.routes.health import router as health_router
from morocco_payroll.api.routes.payroll import router as payroll_router
from morocco_payroll.api.routes.reports import router as reports_router

__all__ = ["health_router", "payroll_router", "reports_router"]
