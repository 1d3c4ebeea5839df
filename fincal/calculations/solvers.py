"""
Inverse Loan Solvers

Solves for the tenure that a target EMI implies (closed form) and for the
interest rate that yields a target EMI (bisection).
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP

from fincal.calculations.amortization import (
    calculate_amortization_schedule,
    calculate_payment,
)
from fincal.calculations.models import CalculationResult, make_breakdown, monthly_rate

logger = logging.getLogger(__name__)

EMI_TOO_LOW_ERROR = "EMI is too low. It must cover at least the monthly interest interest."

RATE_SEARCH_LOW = 0.0
RATE_SEARCH_HIGH = 500.0  # annual percent
BISECTION_ITERATIONS = 40

# Float noise allowed above a whole month before rounding up to the next one
TENURE_RELATIVE_TOLERANCE = 1e-12


def calculate_tenure_for_emi(principal: float, rate_per_month: float, emi: float) -> float:
    """
    Real-valued number of months needed to repay ``principal`` at ``emi``.

    Solves the annuity identity for n:

        n = ln(emi / (emi - P * r)) / ln(1 + r)

    written with log1p so that tiny rates, where ``1 + r`` rounds to 1,
    keep their precision. At a zero rate the identity degenerates to
    0 / 0 and the limit ``P / emi`` is used instead.
    """
    if rate_per_month == 0:
        return principal / emi
    interest = principal * rate_per_month
    return math.log1p(interest / (emi - interest)) / math.log1p(rate_per_month)


def round_up_months(n: float) -> int:
    """Round a real-valued tenure up to whole months, ignoring float noise."""
    return math.ceil(n - abs(n) * TENURE_RELATIVE_TOLERANCE)


def calculate_advanced(principal: float, rate: float, emi: float) -> CalculationResult:
    """
    Find the tenure required to pay off a loan with a fixed monthly payment.

    The real-valued tenure is rounded up to whole months, and totals are
    charged on ``emi * tenure``. The payment is not re-derived for the
    rounded tenure, so the schedule clears slightly early in its last month.

    Args:
        principal: Loan principal amount
        rate: Annual interest rate in percent
        emi: Monthly payment the borrower can afford

    Returns:
        CalculationResult with the solved ``tenure_months``, or with ``error``
        set when the payment does not cover the first month's interest
    """
    rate_per_month = monthly_rate(rate)

    if emi <= principal * rate_per_month:
        return CalculationResult.failure(principal, EMI_TOO_LOW_ERROR)

    n = calculate_tenure_for_emi(principal, rate_per_month, emi)
    total_months = round_up_months(n)
    total_amount = emi * total_months
    total_interest = total_amount - principal

    logger.debug(
        "Solved tenure %.4f -> %d months for principal=%s rate=%s emi=%s",
        n,
        total_months,
        principal,
        rate,
        emi,
    )

    return CalculationResult(
        total_amount=total_amount,
        total_interest=total_interest,
        monthly_payment=emi,
        principal=principal,
        tenure_months=total_months,
        breakdown=make_breakdown(principal, total_interest),
        schedule=calculate_amortization_schedule(principal, rate, total_months, emi),
    )


def _round_rate(rate: float) -> float:
    """Round half up to two decimals on the exact binary value."""
    return float(Decimal(rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_rate_for_target_emi(
    principal: float, tenure_months: int, target_emi: float
) -> float:
    """
    Find the annual rate at which the EMI equals ``target_emi``.

    Bisects the bracket [0, 500]% for exactly BISECTION_ITERATIONS steps.
    EMI increases with rate, so the EMI at ``high`` stays above the target
    and the EMI at ``low`` stays at or below it. Targets outside the EMI
    range of the bracket converge to the nearest bound.

    The returned rate is approximate. Recomputing the EMI at this rate
    gives a payment close to, not equal to, the target; callers that show
    the target payment pin it with CalculationResult.with_monthly_payment().

    Args:
        principal: Loan principal amount
        tenure_months: Loan duration in months
        target_emi: Desired monthly payment

    Returns:
        Annual rate in percent, rounded to 2 decimals
    """
    low = RATE_SEARCH_LOW
    high = RATE_SEARCH_HIGH

    for _ in range(BISECTION_ITERATIONS):
        mid = (low + high) / 2
        emi = calculate_payment(principal, monthly_rate(mid), tenure_months)

        if emi > target_emi:
            high = mid
        else:
            low = mid

    return _round_rate(low)
