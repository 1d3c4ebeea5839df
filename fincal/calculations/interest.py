"""
Interest Calculations

Simple and annually compounded interest over a tenure in months, plus
reducing-balance interest, which is the EMI calculation itself.
"""

import math

from fincal.calculations.amortization import calculate_emi
from fincal.calculations.exceptions import UnsupportedCalculationError
from fincal.calculations.models import CalculationResult, InterestType, make_breakdown


def calculate_simple_interest(principal: float, rate: float, tenure_months: int) -> float:
    """Interest on the original principal only, pro-rated by year."""
    return principal * rate * (tenure_months / 12) / 100


def calculate_compound_amount(principal: float, rate: float, tenure_months: int) -> float:
    """
    Amount after annual compounding.

    Fractional years are allowed in the exponent, so 18 months compounds
    for 1.5 years. Amounts too large for a float come back as infinity.
    """
    try:
        return principal * (1 + rate / 100) ** (tenure_months / 12)
    except OverflowError:
        return math.inf


def calculate_interest(
    principal: float,
    rate: float,
    tenure_months: int,
    interest_type: InterestType,
) -> CalculationResult:
    """
    Calculate total interest and amount for the given interest type.

    Args:
        principal: Amount borrowed or invested
        rate: Annual interest rate in percent
        tenure_months: Duration in months
        interest_type: SIMPLE, COMPOUND or REDUCING

    Returns:
        CalculationResult. SIMPLE and COMPOUND results carry no monthly
        payment and no schedule. REDUCING returns the calculate_emi()
        result as is, including its error when the terms are invalid.

    Raises:
        UnsupportedCalculationError: If interest_type is not recognised
    """
    try:
        interest_type = InterestType(interest_type)
    except ValueError as e:
        raise UnsupportedCalculationError(f"Unsupported interest type: {interest_type}") from e

    if interest_type is InterestType.REDUCING:
        return calculate_emi(principal, rate, tenure_months)

    if interest_type is InterestType.SIMPLE:
        total_interest = calculate_simple_interest(principal, rate, tenure_months)
        total_amount = principal + total_interest
    else:
        total_amount = calculate_compound_amount(principal, rate, tenure_months)
        total_interest = total_amount - principal

    return CalculationResult(
        total_amount=total_amount,
        total_interest=total_interest,
        principal=principal,
        tenure_months=tenure_months,
        breakdown=make_breakdown(principal, total_interest),
    )
