"""
Application services module.
"""

from fincal.services.history import HistoryItem, HistoryLog, build_history_item
from fincal.services.planner import (
    CalculationRequest,
    CalculatorType,
    OptimizeTarget,
    optimize_emi,
    perform_calculation,
    solve_rate_for_target_emi,
)

__all__ = [
    "HistoryItem",
    "HistoryLog",
    "build_history_item",
    "CalculationRequest",
    "CalculatorType",
    "OptimizeTarget",
    "optimize_emi",
    "perform_calculation",
    "solve_rate_for_target_emi",
]
