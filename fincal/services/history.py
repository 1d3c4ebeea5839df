"""
Calculation History

Builds the short summary kept for a saved calculation and holds the most
recent summaries in memory, newest first.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import List, Optional
from uuid import uuid4

from fincal.calculations import CalculationResult, InterestType
from fincal.calculations.exceptions import UnsaveableResultError
from fincal.services.planner import CalculationRequest, CalculatorType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryItem:
    """Summary of one saved calculation."""

    id: str
    timestamp: int  # milliseconds since the epoch
    type: CalculatorType
    label: str
    principal: float
    rate: float
    tenure: Optional[int]
    emi: Optional[float]
    result: float


def history_label(request: CalculationRequest) -> str:
    calculator_type = CalculatorType(request.calculator_type)
    if calculator_type is CalculatorType.ADVANCED:
        return "Tenure Solve"
    if calculator_type is CalculatorType.EMI:
        return "EMI Plan"
    return f"{InterestType(request.interest_type).value} Plan"


def build_history_item(
    request: CalculationRequest, result: CalculationResult
) -> HistoryItem:
    """
    Summarise a finished calculation.

    For the tenure solver the summary records the solved tenure, both as
    ``tenure`` and as the headline ``result``; every other calculator
    records the total amount. Interest calculations carry no EMI.

    Raises:
        UnsaveableResultError: If the result has an error or a non-finite total
    """
    if not result.ok:
        raise UnsaveableResultError(f"Cannot save a failed calculation: {result.error}")
    if math.isinf(result.total_amount):
        raise UnsaveableResultError("Cannot save a calculation with an infinite total")

    calculator_type = CalculatorType(request.calculator_type)
    is_advanced = calculator_type is CalculatorType.ADVANCED

    if calculator_type is CalculatorType.INTEREST:
        emi = None
    else:
        emi = result.monthly_payment or request.emi

    return HistoryItem(
        id=uuid4().hex,
        timestamp=int(time.time() * 1000),
        type=calculator_type,
        label=history_label(request),
        principal=request.principal,
        rate=request.rate,
        tenure=result.tenure_months if is_advanced else request.tenure_months,
        emi=emi,
        result=(result.tenure_months or 0) if is_advanced else result.total_amount,
    )


class HistoryLog:
    """Bounded, thread-safe list of saved calculations, newest first."""

    def __init__(self, limit: int = 10):
        if limit <= 0:
            raise ValueError("History limit must be positive")
        self.limit = limit
        self._items: List[HistoryItem] = []
        self._lock = threading.Lock()

    def add(self, item: HistoryItem) -> List[HistoryItem]:
        """Insert an item at the front, dropping the oldest beyond the limit."""
        with self._lock:
            self._items = [item, *self._items][: self.limit]
            logger.info(f"Saved calculation {item.id} ({item.label})")
            return list(self._items)

    def items(self) -> List[HistoryItem]:
        with self._lock:
            return list(self._items)

    def get(self, item_id: str) -> Optional[HistoryItem]:
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    def clear(self) -> None:
        with self._lock:
            self._items = []
        logger.info("Cleared calculation history")

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
