"""Payroll calculation API endpoints."""

from dataclasses import fields
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Query, status

from morocco_payroll.api.dependencies import Engine, LineBuilder
from morocco_payroll.api.schemas import (
    MAX_AMOUNT,
    ComplianceResponse,
    ContributionBreakdownResponse,
    ContributionSummaryResponse,
    ErrorResponse,
    PayrollCalculationRequest,
    PayrollCalculationResponse,
    PayslipLineResponse,
    PayslipResponse,
    PayslipTotalsResponse,
)
from morocco_payroll.calculators.line_builder import PayslipLineBuilder
from morocco_payroll.calculators.types import ContributionBreakdown

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.post(
    "/calculate",
    response_model=PayrollCalculationResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}},
)
async def calculate_payroll(
    engine: Engine,
    payload: PayrollCalculationRequest,
) -> PayrollCalculationResponse:
    """Calculate gross, contributions, IGR and net for one employee-month."""
    result = engine.calculate(payload.to_input())
    return PayrollCalculationResponse.from_result(result)


@router.post(
    "/payslip",
    response_model=PayslipResponse,
    responses={400: {"model": ErrorResponse}},
)
async def build_payslip(
    engine: Engine,
    builder: LineBuilder,
    payload: PayrollCalculationRequest,
) -> PayslipResponse:
    """Calculate payroll and return the payslip lines."""
    payroll_input = payload.to_input()
    earnings = engine.compute_earnings(payroll_input)
    result = engine.calculate(payroll_input)
    lines = builder.build_lines(payroll_input, result, earnings)
    totals = builder.build_totals(lines, result)

    return PayslipResponse(
        lines=[
            PayslipLineResponse(
                **{
                    **line.to_canonical_dict(),
                    "amount": builder.round_to_cents(line.amount),
                },
                formatted_amount=builder.format_amount(line.amount, builder.currency),
            )
            for line in lines
        ],
        totals=PayslipTotalsResponse(
            **{
                f.name: builder.round_to_cents(getattr(totals, f.name))
                for f in fields(totals)
            }
        ),
        result=PayrollCalculationResponse.from_result(result),
        formatted_gross=builder.format_amount(result.gross_salary, builder.currency),
        formatted_net=builder.format_amount(result.net_salary, builder.currency),
        minimum_wage_applied=result.gross_salary > earnings.raw_gross,
    )


@router.get(
    "/contributions",
    response_model=ContributionSummaryResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_contribution_summary(
    engine: Engine,
    gross: Annotated[Decimal, Query(gt=0, le=MAX_AMOUNT, decimal_places=2)],
) -> ContributionSummaryResponse:
    """CNSS and AMO shares for a gross salary."""
    summary = engine.contribution_summary(gross)
    return ContributionSummaryResponse(
        gross_salary=gross,
        cnss=_rounded_breakdown(summary.cnss),
        amo=_rounded_breakdown(summary.amo),
    )


@router.get(
    "/compliance",
    response_model=ComplianceResponse,
    responses={400: {"model": ErrorResponse}},
)
async def check_minimum_wage(
    engine: Engine,
    gross: Annotated[Decimal, Query(ge=0, le=MAX_AMOUNT, decimal_places=2)],
) -> ComplianceResponse:
    """Check a gross salary against the SMIG."""
    return ComplianceResponse(
        gross_salary=gross,
        minimum_wage=engine.rates.minimum_monthly_wage,
        compliant=engine.validate_minimum_wage_compliance(gross),
    )


def _rounded_breakdown(breakdown: ContributionBreakdown) -> ContributionBreakdownResponse:
    round_to_cents = PayslipLineBuilder.round_to_cents
    return ContributionBreakdownResponse(
        employee=round_to_cents(breakdown.employee),
        employer=round_to_cents(breakdown.employer),
        total=round_to_cents(breakdown.total),
    )
