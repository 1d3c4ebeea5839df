"""
Loan calculation API endpoints.

These endpoints accept loan inputs and return engine results. Invalid
terms are reported in the ``error`` field of a normal response, exactly
as the engine reports them.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from fincal.calculations import (
    InterestType,
    calculate_advanced,
    calculate_amortization_schedule,
    calculate_emi,
    calculate_interest,
)
from fincal.calculations.exceptions import CalculationError
from fincal.api.schemas import AmortizationRowOut, CalculationResponse, PlanInput
from fincal.services import perform_calculation, solve_rate_for_target_emi

router = APIRouter()


class EMIInput(BaseModel):
    """Input for EMI calculation."""

    principal: float
    rate: float
    tenure_months: int


class InterestInput(BaseModel):
    """Input for interest calculation."""

    principal: float
    rate: float
    tenure_months: int
    interest_type: InterestType = InterestType.COMPOUND


class AdvancedInput(BaseModel):
    """Input for solving the tenure of a fixed payment."""

    principal: float
    rate: float
    emi: float


class RateInput(BaseModel):
    """Input for solving the rate of a target payment."""

    principal: float
    tenure_months: int
    target_emi: float


class RateResponse(BaseModel):
    """Solved rate with the result recomputed at that rate."""

    rate: float
    result: CalculationResponse


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float
    annual_rate: float
    tenure_months: int
    emi: float


@router.post("/emi", response_model=CalculationResponse)
async def calculate_emi_endpoint(inputs: EMIInput):
    """Calculate EMI, totals and schedule."""
    result = calculate_emi(inputs.principal, inputs.rate, inputs.tenure_months)
    return CalculationResponse.from_result(result)


@router.post("/interest", response_model=CalculationResponse)
async def calculate_interest_endpoint(inputs: InterestInput):
    """Calculate simple, compound or reducing-balance interest."""
    result = calculate_interest(
        inputs.principal, inputs.rate, inputs.tenure_months, inputs.interest_type
    )
    return CalculationResponse.from_result(result)


@router.post("/advanced", response_model=CalculationResponse)
async def calculate_advanced_endpoint(inputs: AdvancedInput):
    """Find the tenure needed to repay a loan with a fixed payment."""
    result = calculate_advanced(inputs.principal, inputs.rate, inputs.emi)
    return CalculationResponse.from_result(result)


@router.post("/rate", response_model=RateResponse)
async def calculate_rate_endpoint(inputs: RateInput):
    """Find the rate at which the EMI matches a target payment."""
    rate, result = solve_rate_for_target_emi(
        inputs.principal, inputs.tenure_months, inputs.target_emi
    )
    return RateResponse(rate=rate, result=CalculationResponse.from_result(result))


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule for a given payment."""
    schedule = calculate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        tenure_months=inputs.tenure_months,
        emi=inputs.emi,
    )

    return {
        "schedule": [
            AmortizationRowOut(
                month=row.month,
                principal_paid=row.principal_paid,
                interest_paid=row.interest_paid,
                total_payment=row.total_payment,
                remaining_balance=row.remaining_balance,
            )
            for row in schedule
        ],
        "total_interest": sum(row.interest_paid for row in schedule),
        "total_principal": sum(row.principal_paid for row in schedule),
    }


@router.post("/plan", response_model=CalculationResponse)
async def calculate_plan(inputs: PlanInput):
    """Run whichever calculator the request selects."""
    try:
        result = perform_calculation(inputs.to_request())
    except CalculationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CalculationResponse.from_result(result)
