"""Statutory report API endpoints."""

import logging
from collections.abc import Callable

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from morocco_payroll.api.dependencies import Engine, ReportService
from morocco_payroll.api.schemas import (
    ErrorResponse,
    PeriodSummaryResponse,
    StatutoryReportRequest,
    StatutoryReportResponse,
    StatutoryReportRowResponse,
)
from morocco_payroll.calculators.engine import PayrollEngine
from morocco_payroll.services.reporting import EmployeePayroll, StatutoryReport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post(
    "/cnss",
    response_model=StatutoryReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def cnss_report(
    engine: Engine,
    service: ReportService,
    payload: StatutoryReportRequest,
) -> StatutoryReportResponse:
    """Build the monthly CNSS declaration."""
    report = _build(engine, payload, service.build_cnss_report)
    return _to_response(report)


@router.post(
    "/amo",
    response_model=StatutoryReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def amo_report(
    engine: Engine,
    service: ReportService,
    payload: StatutoryReportRequest,
) -> StatutoryReportResponse:
    """Build the monthly AMO declaration."""
    report = _build(engine, payload, service.build_amo_report)
    return _to_response(report)


@router.post(
    "/summary",
    response_model=PeriodSummaryResponse,
    responses={400: {"model": ErrorResponse}},
)
async def period_summary(
    engine: Engine,
    service: ReportService,
    payload: StatutoryReportRequest,
) -> PeriodSummaryResponse:
    """Headline gross, net and employer cost for a period."""
    summary = service.summarize_period(payload.period, _entries(engine, payload))
    return PeriodSummaryResponse(
        period=summary.period,
        employee_count=summary.employee_count,
        total_gross=summary.total_gross,
        total_net=summary.total_net,
        total_employer_contributions=summary.total_employer_contributions,
        total_employer_cost=summary.total_employer_cost,
    )


@router.post(
    "/{contribution}/csv",
    response_class=PlainTextResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def report_csv(
    contribution: str,
    engine: Engine,
    service: ReportService,
    payload: StatutoryReportRequest,
) -> PlainTextResponse:
    """Export a CNSS or AMO declaration as CSV."""
    builders = {
        "cnss": service.build_cnss_report,
        "amo": service.build_amo_report,
    }
    builder = builders.get(contribution.lower())
    if builder is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown contribution '{contribution}'",
        )

    report = _build(engine, payload, builder)
    filename = f"{report.contribution.lower()}-report-{report.period}.csv"
    return PlainTextResponse(
        service.to_csv(report),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _build(
    engine: PayrollEngine,
    payload: StatutoryReportRequest,
    builder: Callable[[str, list[EmployeePayroll]], StatutoryReport],
) -> StatutoryReport:
    try:
        return builder(payload.period, _entries(engine, payload))
    except ValueError as e:
        logger.warning("Report rejected for period %s: %s", payload.period, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _to_response(report: StatutoryReport) -> StatutoryReportResponse:
    return StatutoryReportResponse(
        contribution=report.contribution,
        period=report.period,
        employee_rate=report.employee_rate,
        employer_rate=report.employer_rate,
        employee_count=report.employee_count,
        payment_deadline=report.payment_deadline,
        rows=[
            StatutoryReportRowResponse(
                employee_id=row.employee_id,
                name=row.name,
                cnss_number=row.cnss_number,
                gross_salary=row.gross_salary,
                employee_share=row.employee_share,
                employer_share=row.employer_share,
                total=row.total,
            )
            for row in report.rows
        ],
        total_gross=report.total_gross,
        total_employee=report.total_employee,
        total_employer=report.total_employer,
        total_contributions=report.total_contributions,
    )


def _entries(engine: PayrollEngine, payload: StatutoryReportRequest) -> list[EmployeePayroll]:
    return [
        EmployeePayroll(
            employee_id=employee.employee_id,
            name=employee.name,
            cnss_number=employee.cnss_number,
            result=engine.calculate(employee.payroll.to_input()),
        )
        for employee in payload.employees
    ]
