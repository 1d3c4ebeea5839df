"""
Loan Amortization Calculations

Implements the equated monthly installment (EMI) and the month-by-month
amortization schedule that every EMI-bearing result carries.

Rates are nominal annual percentages (12 means 12% a year).
"""

from typing import Tuple

from fincal.calculations.models import (
    AmortizationRow,
    CalculationResult,
    make_breakdown,
    monthly_rate,
)

INVALID_TERMS_ERROR = "Please enter positive values for all fields."


def calculate_payment(principal: float, rate_per_month: float, months: int) -> float:
    """
    Calculate the equal monthly installment for an amortizing loan.

    The formula is:

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Args:
        principal: Loan principal amount
        rate_per_month: Monthly interest rate as a fraction (annual % / 1200)
        months: Number of monthly payments

    Returns:
        Monthly payment amount
    """
    if rate_per_month == 0:
        return principal / months

    try:
        factor = (1 + rate_per_month) ** months
    except OverflowError:
        # factor / (factor - 1) tends to 1 for very long or very expensive loans
        return principal * rate_per_month

    if factor == 1:
        return principal / months

    return principal * rate_per_month * factor / (factor - 1)


def calculate_amortization_schedule(
    principal: float, annual_rate: float, tenure_months: int, emi: float
) -> Tuple[AmortizationRow, ...]:
    """
    Generate the amortization schedule for a fixed monthly payment.

    Each month the interest is charged on the outstanding balance and the
    rest of the payment goes to principal, capped at the balance so the
    last payment never overshoots. The schedule stops as soon as the
    balance reaches zero, so a payment larger than needed yields fewer
    than ``tenure_months`` rows.

    No validation is performed; callers pass already-validated terms.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate in percent
        tenure_months: Maximum number of rows to produce
        emi: Monthly payment

    Returns:
        Tuple of amortization rows, month 1 first
    """
    schedule = []
    balance = principal
    rate = monthly_rate(annual_rate)

    for month in range(1, tenure_months + 1):
        interest = balance * rate
        principal_pmt = min(emi - interest, balance)
        balance = max(0.0, balance - principal_pmt)

        schedule.append(
            AmortizationRow(
                month=month,
                principal_paid=principal_pmt,
                interest_paid=interest,
                total_payment=principal_pmt + interest,
                remaining_balance=balance,
            )
        )

        # Stop if balance is paid off
        if balance <= 0:
            break

    return tuple(schedule)


def calculate_emi(principal: float, rate: float, tenure_months: int) -> CalculationResult:
    """
    Calculate the EMI, totals and schedule for a loan.

    Args:
        principal: Loan principal amount, must be positive
        rate: Annual interest rate in percent, must not be negative
        tenure_months: Loan duration in months, must be positive

    Returns:
        CalculationResult with monthly payment and schedule, or with
        ``error`` set when any input is out of range
    """
    if principal <= 0 or rate < 0 or tenure_months <= 0:
        return CalculationResult.failure(principal, INVALID_TERMS_ERROR)

    rate_per_month = monthly_rate(rate)
    emi = calculate_payment(principal, rate_per_month, tenure_months)

    if rate_per_month == 0:
        total_amount = principal
        total_interest = 0.0
    else:
        total_amount = emi * tenure_months
        total_interest = total_amount - principal

    return CalculationResult(
        total_amount=total_amount,
        total_interest=total_interest,
        monthly_payment=emi,
        principal=principal,
        tenure_months=tenure_months,
        breakdown=make_breakdown(principal, total_interest),
        schedule=calculate_amortization_schedule(principal, rate, tenure_months, emi),
    )
