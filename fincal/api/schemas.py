"""
Request and response schemas shared by the API routes.
"""

import math
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_serializer

from fincal.calculations import CalculationResult, InterestType
from fincal.services import CalculationRequest, CalculatorType, HistoryItem, OptimizeTarget


def _json_amount(value: Optional[float]) -> Union[float, str, None]:
    """JSON has no infinity; overflowed amounts are sent as strings."""
    if value is not None and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


class AmortizationRowOut(BaseModel):
    """One month of an amortization schedule."""

    month: int
    principal_paid: float
    interest_paid: float
    total_payment: float
    remaining_balance: float


class BreakdownOut(BaseModel):
    name: str
    value: float

    @field_serializer("value", when_used="json")
    def _serialize_value(self, value: float):
        return _json_amount(value)


class CalculationResponse(BaseModel):
    """
    Engine result as returned by the API.

    A result with ``error`` set is still a 200 response; the numeric
    fields are then 0 and ``breakdown`` is empty.
    """

    total_amount: float
    total_interest: float
    principal: float
    monthly_payment: Optional[float] = None
    tenure_months: Optional[int] = None
    error: Optional[str] = None
    breakdown: List[BreakdownOut] = []
    schedule: Optional[List[AmortizationRowOut]] = None

    @field_serializer("total_amount", "total_interest", when_used="json")
    def _serialize_totals(self, value: float):
        return _json_amount(value)

    @classmethod
    def from_result(cls, result: CalculationResult) -> "CalculationResponse":
        schedule = None
        if result.schedule is not None:
            schedule = [
                AmortizationRowOut(
                    month=row.month,
                    principal_paid=row.principal_paid,
                    interest_paid=row.interest_paid,
                    total_payment=row.total_payment,
                    remaining_balance=row.remaining_balance,
                )
                for row in result.schedule
            ]

        return cls(
            total_amount=result.total_amount,
            total_interest=result.total_interest,
            principal=result.principal,
            monthly_payment=result.monthly_payment,
            tenure_months=result.tenure_months,
            error=result.error,
            breakdown=[BreakdownOut(name=b.name, value=b.value) for b in result.breakdown],
            schedule=schedule,
        )


class PlanInput(BaseModel):
    """Input for the full calculator dispatch."""

    calculator_type: CalculatorType = CalculatorType.EMI
    principal: float
    rate: float
    tenure_months: Optional[int] = None
    emi: Optional[float] = None
    target_emi: Optional[float] = None
    interest_type: InterestType = InterestType.COMPOUND
    optimize: bool = False
    optimize_target: OptimizeTarget = OptimizeTarget.TENURE

    def to_request(self) -> CalculationRequest:
        return CalculationRequest(
            calculator_type=self.calculator_type,
            principal=self.principal,
            rate=self.rate,
            tenure_months=self.tenure_months,
            emi=self.emi,
            target_emi=self.target_emi,
            interest_type=self.interest_type,
            optimize=self.optimize,
            optimize_target=self.optimize_target,
        )


class HistoryItemOut(BaseModel):
    """Summary of a saved calculation."""

    id: str
    timestamp: int
    type: CalculatorType
    label: str
    principal: float
    rate: float
    tenure: Optional[int] = None
    emi: Optional[float] = None
    result: float

    @classmethod
    def from_item(cls, item: HistoryItem) -> "HistoryItemOut":
        return cls(
            id=item.id,
            timestamp=item.timestamp,
            type=item.type,
            label=item.label,
            principal=item.principal,
            rate=item.rate,
            tenure=item.tenure,
            emi=item.emi,
            result=item.result,
        )


class HistoryResponse(BaseModel):
    items: List[HistoryItemOut]
    limit: int = Field(description="Maximum number of items kept")
