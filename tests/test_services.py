"""
Tests for the calculation planner and history summaries.
"""

import pytest

from fincal.calculations import InterestType, calculate_advanced, calculate_emi, calculate_interest
from fincal.calculations.amortization import INVALID_TERMS_ERROR
from fincal.calculations.exceptions import (
    MissingInputError,
    UnsaveableResultError,
    UnsupportedCalculationError,
)
from fincal.calculations.solvers import EMI_TOO_LOW_ERROR
from fincal.services import (
    CalculationRequest,
    CalculatorType,
    HistoryLog,
    OptimizeTarget,
    build_history_item,
    optimize_emi,
    perform_calculation,
    solve_rate_for_target_emi,
)


class TestRateSolveContract:
    """Test the solve-recompute-pin sequence for a target EMI."""

    def test_pins_monthly_payment(self):
        rate, result = solve_rate_for_target_emi(10000, 24, 500)
        assert result.monthly_payment == 500
        assert result.tenure_months == 24
        # Totals come from the recomputed EMI at the solved rate
        assert result == calculate_emi(10000, rate, 24).with_monthly_payment(500)

    def test_recomputed_payment_close_to_target(self):
        rate, _ = solve_rate_for_target_emi(10000, 24, 500)
        recomputed = calculate_emi(10000, rate, 24).monthly_payment
        assert abs(recomputed - 500) < 1

    def test_invalid_terms_skip_search(self):
        rate, result = solve_rate_for_target_emi(10000, 0, 500)
        assert rate == 0.0
        assert result.error == INVALID_TERMS_ERROR
        assert result.monthly_payment is None


class TestOptimize:
    def test_tenure_target(self):
        result = optimize_emi(10000, 12, None, 1000, OptimizeTarget.TENURE)
        assert result == calculate_advanced(10000, 12, 1000)

    def test_rate_target(self):
        result = optimize_emi(10000, 12, 24, 500, OptimizeTarget.INTEREST_RATE)
        assert result.monthly_payment == 500

    def test_rate_target_needs_tenure(self):
        with pytest.raises(MissingInputError):
            optimize_emi(10000, 12, None, 500, OptimizeTarget.INTEREST_RATE)

    def test_unknown_target(self):
        with pytest.raises(UnsupportedCalculationError):
            optimize_emi(10000, 12, 24, 500, "PRINCIPAL")


class TestPerformCalculation:
    """Test dispatch by calculator type."""

    def test_emi(self):
        request = CalculationRequest(CalculatorType.EMI, principal=10000, rate=18, tenure_months=24)
        assert perform_calculation(request) == calculate_emi(10000, 18, 24)

    def test_emi_optimize_tenure(self):
        request = CalculationRequest(
            CalculatorType.EMI,
            principal=10000,
            rate=18,
            tenure_months=24,
            target_emi=1200,
            optimize=True,
            optimize_target=OptimizeTarget.TENURE,
        )
        assert perform_calculation(request) == calculate_advanced(10000, 18, 1200)

    def test_emi_optimize_needs_target(self):
        request = CalculationRequest(
            CalculatorType.EMI, principal=10000, rate=18, tenure_months=24, optimize=True
        )
        with pytest.raises(MissingInputError):
            perform_calculation(request)

    def test_interest(self):
        request = CalculationRequest(
            CalculatorType.INTEREST,
            principal=10000,
            rate=18,
            tenure_months=24,
            interest_type=InterestType.SIMPLE,
        )
        assert perform_calculation(request) == calculate_interest(10000, 18, 24, InterestType.SIMPLE)

    def test_advanced(self):
        request = CalculationRequest(CalculatorType.ADVANCED, principal=10000, rate=18, emi=1000)
        assert perform_calculation(request) == calculate_advanced(10000, 18, 1000)

    def test_advanced_needs_emi(self):
        request = CalculationRequest(CalculatorType.ADVANCED, principal=10000, rate=18)
        with pytest.raises(MissingInputError):
            perform_calculation(request)

    def test_emi_needs_tenure(self):
        request = CalculationRequest(CalculatorType.EMI, principal=10000, rate=18)
        with pytest.raises(MissingInputError):
            perform_calculation(request)

    def test_unknown_calculator(self):
        request = CalculationRequest("MORTGAGE", principal=10000, rate=18, tenure_months=12)
        with pytest.raises(UnsupportedCalculationError):
            perform_calculation(request)


class TestHistoryItem:
    """Test history summaries."""

    def test_emi_summary(self):
        request = CalculationRequest(CalculatorType.EMI, principal=10000, rate=18, tenure_months=24)
        result = perform_calculation(request)
        item = build_history_item(request, result)
        assert item.label == "EMI Plan"
        assert item.tenure == 24
        assert item.emi == result.monthly_payment
        assert item.result == result.total_amount
        assert item.type is CalculatorType.EMI

    def test_interest_summary(self):
        request = CalculationRequest(
            CalculatorType.INTEREST,
            principal=10000,
            rate=18,
            tenure_months=24,
            interest_type=InterestType.COMPOUND,
        )
        item = build_history_item(request, perform_calculation(request))
        assert item.label == "COMPOUND Plan"
        assert item.emi is None

    def test_advanced_summary(self):
        request = CalculationRequest(CalculatorType.ADVANCED, principal=10000, rate=12, emi=1000)
        item = build_history_item(request, perform_calculation(request))
        assert item.label == "Tenure Solve"
        assert item.tenure == 11
        assert item.result == 11
        assert item.emi == 1000

    def test_unique_ids(self):
        request = CalculationRequest(CalculatorType.EMI, principal=10000, rate=18, tenure_months=24)
        result = perform_calculation(request)
        assert build_history_item(request, result).id != build_history_item(request, result).id

    def test_failed_result_rejected(self):
        request = CalculationRequest(CalculatorType.ADVANCED, principal=10000, rate=12, emi=50)
        result = perform_calculation(request)
        assert result.error == EMI_TOO_LOW_ERROR
        with pytest.raises(UnsaveableResultError):
            build_history_item(request, result)

    def test_infinite_total_rejected(self):
        request = CalculationRequest(
            CalculatorType.INTEREST,
            principal=1000,
            rate=500,
            tenure_months=5000,
            interest_type=InterestType.COMPOUND,
        )
        result = perform_calculation(request)
        assert result.ok
        with pytest.raises(UnsaveableResultError):
            build_history_item(request, result)


class TestHistoryLog:
    def _item(self, principal):
        request = CalculationRequest(
            CalculatorType.EMI, principal=principal, rate=10, tenure_months=12
        )
        return build_history_item(request, perform_calculation(request))

    def test_newest_first_and_capped(self):
        log = HistoryLog(limit=2)
        first, second, third = self._item(1000), self._item(2000), self._item(3000)
        log.add(first)
        log.add(second)
        log.add(third)
        assert [i.principal for i in log.items()] == [3000, 2000]
        assert len(log) == 2
        assert log.get(first.id) is None
        assert log.get(third.id) == third

    def test_clear(self):
        log = HistoryLog()
        log.add(self._item(1000))
        log.clear()
        assert log.items() == []

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            HistoryLog(limit=0)
