"""
Loan Calculation Engine

Pure functions that turn principal, rate, tenure and payment inputs into
a CalculationResult. Nothing here holds state or performs I/O.
"""

from fincal.calculations import amortization, interest, solvers
from fincal.calculations.amortization import (
    calculate_amortization_schedule,
    calculate_emi,
)
from fincal.calculations.interest import calculate_interest
from fincal.calculations.models import (
    AmortizationRow,
    BreakdownEntry,
    CalculationResult,
    InterestType,
    LoanTerms,
)
from fincal.calculations.solvers import calculate_advanced, calculate_rate_for_target_emi

__all__ = [
    "amortization",
    "interest",
    "solvers",
    "calculate_emi",
    "calculate_amortization_schedule",
    "calculate_interest",
    "calculate_advanced",
    "calculate_rate_for_target_emi",
    "AmortizationRow",
    "BreakdownEntry",
    "CalculationResult",
    "InterestType",
    "LoanTerms",
]
