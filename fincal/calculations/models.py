"""
Value Records for Loan Calculations

Immutable records shared by every calculation in the engine. Each
engine call builds fresh records; nothing here is mutated afterwards.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

PRINCIPAL_LABEL = "Principal"
INTEREST_LABEL = "Interest"


class InterestType(str, Enum):
    """How interest accrues in calculate_interest()."""

    SIMPLE = "SIMPLE"
    COMPOUND = "COMPOUND"
    REDUCING = "REDUCING"


@dataclass(frozen=True)
class LoanTerms:
    """
    Inputs that jointly determine a loan calculation.

    Attributes:
        principal: Amount borrowed
        annual_rate_percent: Nominal annual rate in percent (e.g., 12 for 12%)
        tenure_months: Loan duration in whole months
    """

    principal: float
    annual_rate_percent: float
    tenure_months: int

    @property
    def monthly_rate(self) -> float:
        return monthly_rate(self.annual_rate_percent)


@dataclass(frozen=True)
class AmortizationRow:
    """One month of an amortization schedule."""

    month: int
    principal_paid: float
    interest_paid: float
    total_payment: float
    remaining_balance: float


@dataclass(frozen=True)
class BreakdownEntry:
    """A labelled slice of the total amount (principal or interest)."""

    name: str
    value: float


@dataclass(frozen=True)
class CalculationResult:
    """
    Outcome of a single engine call.

    When ``error`` is set the numeric totals are 0, the breakdown is empty
    and there is no schedule. Callers must check ``error`` before using
    the numbers.
    """

    total_amount: float
    total_interest: float
    principal: float
    breakdown: Tuple[BreakdownEntry, ...] = ()
    monthly_payment: Optional[float] = None
    tenure_months: Optional[int] = None
    error: Optional[str] = None
    schedule: Optional[Tuple[AmortizationRow, ...]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, principal: float, error: str) -> "CalculationResult":
        """Build an error result with zeroed totals."""
        return cls(
            total_amount=0.0,
            total_interest=0.0,
            principal=principal,
            error=error,
        )

    def with_monthly_payment(self, monthly_payment: float) -> "CalculationResult":
        """
        Return a copy with ``monthly_payment`` pinned to a caller value.

        This is the only override callers are allowed: after solving a
        rate for a target EMI the recomputed payment differs from the
        target by the bisection's residual, and the caller shows the
        target instead.
        """
        return replace(self, monthly_payment=monthly_payment)


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual percentage into a monthly fraction."""
    return annual_rate_percent / (12 * 100)


def make_breakdown(principal: float, total_interest: float) -> Tuple[BreakdownEntry, ...]:
    """Principal/interest split shown alongside every successful result."""
    return (
        BreakdownEntry(name=PRINCIPAL_LABEL, value=principal),
        BreakdownEntry(name=INTEREST_LABEL, value=total_interest),
    )
