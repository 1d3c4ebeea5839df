"""
Calculation Planner

Chooses which engine call answers a request and applies the caller-side
steps the engine deliberately leaves out, such as pinning the payment
after a rate solve.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from fincal.calculations import (
    CalculationResult,
    InterestType,
    LoanTerms,
    calculate_advanced,
    calculate_emi,
    calculate_interest,
    calculate_rate_for_target_emi,
)
from fincal.calculations.exceptions import MissingInputError, UnsupportedCalculationError

logger = logging.getLogger(__name__)


class CalculatorType(str, Enum):
    """Which calculator a request targets."""

    EMI = "EMI"
    INTEREST = "INTEREST"
    ADVANCED = "ADVANCED"


class OptimizeTarget(str, Enum):
    """What to solve for when optimizing an EMI plan."""

    TENURE = "TENURE"
    INTEREST_RATE = "INTEREST_RATE"


@dataclass(frozen=True)
class CalculationRequest:
    """
    Everything a calculator may need.

    ``emi`` is the payment for the ADVANCED calculator; ``target_emi`` is
    the payment to optimize for in EMI optimize mode.
    """

    calculator_type: CalculatorType
    principal: float
    rate: float
    tenure_months: Optional[int] = None
    emi: Optional[float] = None
    target_emi: Optional[float] = None
    interest_type: InterestType = InterestType.COMPOUND
    optimize: bool = False
    optimize_target: OptimizeTarget = OptimizeTarget.TENURE

    @property
    def terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.principal,
            annual_rate_percent=self.rate,
            tenure_months=_require(self.tenure_months, "tenure_months"),
        )


def _require(value, name: str):
    if value is None:
        raise MissingInputError(f"{name} is required for this calculation")
    return value


def solve_rate_for_target_emi(
    principal: float, tenure_months: int, target_emi: float
) -> Tuple[float, CalculationResult]:
    """
    Solve the rate for a target EMI and build the matching result.

    Three steps: bisect for the rate, recompute the EMI result at that
    rate, then pin ``monthly_payment`` to ``target_emi``. The rate is only
    accurate to the bisection's precision, so the totals and schedule
    reflect the solved rate while the displayed payment is the target.

    Returns:
        (annual rate in percent, result with monthly_payment == target_emi).
        Terms that calculate_emi rejects skip the search and return a rate
        of 0 with that error result.
    """
    if principal <= 0 or tenure_months <= 0:
        return 0.0, calculate_emi(principal, 0.0, tenure_months)

    rate = calculate_rate_for_target_emi(principal, tenure_months, target_emi)
    result = calculate_emi(principal, rate, tenure_months)
    if result.ok:
        result = result.with_monthly_payment(target_emi)
    logger.info(
        "Solved rate %.2f%% for target EMI %s over %d months",
        rate,
        target_emi,
        tenure_months,
    )
    return rate, result


def optimize_emi(
    principal: float,
    rate: float,
    tenure_months: Optional[int],
    target_emi: float,
    target: OptimizeTarget,
) -> CalculationResult:
    """
    Solve an EMI plan for a target payment.

    TENURE keeps the rate and finds the tenure; INTEREST_RATE keeps the
    tenure and finds the rate.
    """
    try:
        target = OptimizeTarget(target)
    except ValueError as e:
        raise UnsupportedCalculationError(f"Unsupported optimize target: {target}") from e

    if target is OptimizeTarget.TENURE:
        return calculate_advanced(principal, rate, target_emi)

    tenure_months = _require(tenure_months, "tenure_months")
    _, result = solve_rate_for_target_emi(principal, tenure_months, target_emi)
    return result


def perform_calculation(request: CalculationRequest) -> CalculationResult:
    """
    Run the calculation a request describes.

    Raises:
        UnsupportedCalculationError: Unknown calculator type
        MissingInputError: A value the calculator needs is missing
    """
    try:
        calculator_type = CalculatorType(request.calculator_type)
    except ValueError as e:
        raise UnsupportedCalculationError(
            f"Unsupported calculator type: {request.calculator_type}"
        ) from e

    if calculator_type is CalculatorType.EMI:
        if request.optimize:
            return optimize_emi(
                request.principal,
                request.rate,
                request.tenure_months,
                _require(request.target_emi, "target_emi"),
                request.optimize_target,
            )
        terms = request.terms
        return calculate_emi(terms.principal, terms.annual_rate_percent, terms.tenure_months)

    if calculator_type is CalculatorType.INTEREST:
        terms = request.terms
        return calculate_interest(
            terms.principal,
            terms.annual_rate_percent,
            terms.tenure_months,
            request.interest_type,
        )

    return calculate_advanced(
        request.principal, request.rate, _require(request.emi, "emi")
    )
