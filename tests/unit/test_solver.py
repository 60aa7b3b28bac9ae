"""Tests for MinimumInvestmentSolver."""

import math

import pytest

from bfengine.core.exceptions import InvalidInputError, NoSolutionError
from bfengine.solver.minimum_investment import MinimumInvestmentSolver, recommendation_for


class TestMinimumInvestmentSolver:
    """Tests for MinimumInvestmentSolver."""

    def test_one_percent_target(self, galicia):
        result = MinimumInvestmentSolver().solve(1.0, galicia)
        # 150 * 1.21 / 1% = 18,150
        assert result.minimum_amount == pytest.approx(18_150.0)
        assert result.commission_percentage == pytest.approx(1.0)
        assert result.regime_boundary == pytest.approx(30_000.0)
        assert result.recommendation == recommendation_for(18_150.0)

    def test_result_never_exceeds_target(self, galicia):
        solver = MinimumInvestmentSolver()
        for threshold in [0.61, 0.7, 1.0, 2.5, 10.0, 50.0, 100.0]:
            result = solver.solve(threshold, galicia)
            assert result.commission_percentage <= threshold + 1e-9
            # Still in the minimum regime
            assert result.minimum_amount < result.regime_boundary

    def test_threshold_below_floor_has_no_solution(self, galicia):
        # Floor is 0.5% * 1.21 = 0.605%
        with pytest.raises(NoSolutionError) as exc_info:
            MinimumInvestmentSolver().solve(0.5, galicia)
        assert exc_info.value.floor_percent == pytest.approx(0.605)
        assert exc_info.value.regime_boundary == pytest.approx(30_000.0)
        assert exc_info.value.details["thresholdPercent"] == 0.5

    def test_threshold_at_floor_has_no_solution(self, galicia):
        floor = galicia.buy.effective_rate * 100
        with pytest.raises(NoSolutionError) as exc_info:
            MinimumInvestmentSolver().solve(floor, galicia)
        assert exc_info.value.floor_percent == floor

    def test_threshold_just_above_floor(self, galicia):
        floor = galicia.buy.effective_rate * 100
        result = MinimumInvestmentSolver().solve(floor + 1e-6, galicia)
        assert result.minimum_amount < result.regime_boundary
        assert result.minimum_amount == pytest.approx(30_000.0, rel=1e-5)
        assert result.commission_percentage <= floor + 1e-6 + 1e-12

    def test_threshold_out_of_range_raises(self, galicia):
        solver = MinimumInvestmentSolver()
        for threshold in [0, -1, 100.5, math.nan]:
            with pytest.raises(InvalidInputError):
                solver.solve(threshold, galicia)

    def test_uses_requested_side(self, schedule_factory):
        schedule = schedule_factory(sell_minimum=300.0)
        result = MinimumInvestmentSolver().solve(1.0, schedule, operation_type="SELL")
        assert result.minimum_amount == pytest.approx(36_300.0)

    def test_zero_rate_schedule(self, schedule_factory):
        schedule = schedule_factory(percentage=0.0, minimum=100.0)
        result = MinimumInvestmentSolver().solve(1.0, schedule)
        assert result.minimum_amount == pytest.approx(12_100.0)
        assert result.regime_boundary is None

    def test_zero_minimum_schedule(self, schedule_factory):
        schedule = schedule_factory(minimum=0.0)
        result = MinimumInvestmentSolver().solve(1.0, schedule)
        assert result.minimum_amount == 0.0
        assert result.commission_percentage == pytest.approx(0.605)

    def test_high_minimum_recommendation(self, schedule_factory):
        schedule = schedule_factory(percentage=0.001)
        result = MinimumInvestmentSolver().solve(0.15, schedule)
        # 181.5 / 0.15% = 121,000
        assert result.minimum_amount == pytest.approx(121_000.0)
        assert "High minimum" in result.recommendation

    def test_low_minimum_recommendation(self, galicia):
        result = MinimumInvestmentSolver().solve(2.0, galicia)
        assert result.minimum_amount == pytest.approx(9_075.0)
        assert "Very low" in result.recommendation

    def test_is_deterministic(self, galicia):
        solver = MinimumInvestmentSolver()
        assert solver.solve(1.5, galicia) == solver.solve(1.5, galicia)
