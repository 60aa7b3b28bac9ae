"""Tests for the projection engine, custody outlook and return impact."""

import pytest

from bfengine.core.exceptions import InvalidInputError
from bfengine.projection.custody_outlook import CustodyOutlook, SizeStrategy
from bfengine.projection.engine import ProjectionEngine, portfolio_value_after
from bfengine.projection.returns import ReturnImpactAnalyzer


class TestProjectionEngine:
    """Tests for ProjectionEngine."""

    def test_first_year_cost_with_custody(self, galicia):
        projection = ProjectionEngine().project("BUY", 100_000, 2_000_000, galicia)
        # 605 commission + 36,300 annual custody
        assert projection.operation.total_commission == pytest.approx(605.0)
        assert projection.custody.annual_fee == pytest.approx(36_300.0)
        assert projection.total_first_year_cost == pytest.approx(36_905.0)
        assert projection.break_even_impact == pytest.approx(36.905)

    def test_first_year_cost_exempt_portfolio(self, galicia):
        projection = ProjectionEngine().project("BUY", 10_000, 800_000, galicia)
        assert projection.custody.is_exempt is True
        assert projection.total_first_year_cost == pytest.approx(181.5)
        assert projection.break_even_impact == pytest.approx(1.815)

    def test_zero_amount_raises(self, galicia):
        with pytest.raises(InvalidInputError):
            ProjectionEngine().project("BUY", 0, 800_000, galicia)

    def test_negative_portfolio_raises(self, galicia):
        with pytest.raises(InvalidInputError):
            ProjectionEngine().project("SELL", 1_000, -1, galicia)

    def test_to_dict(self, galicia):
        data = ProjectionEngine().project("SELL", 50_000, 800_000, galicia).to_dict()
        assert data["operation"]["netAmount"] == pytest.approx(49_697.5)
        assert data["custody"]["isExempt"] is True
        assert data["totalFirstYearCost"] == pytest.approx(302.5)


class TestPortfolioValueAfter:
    """Tests for portfolio_value_after."""

    def test_buy_adds_amount(self):
        assert portfolio_value_after("BUY", 100_000, 900_000) == 1_000_000

    def test_sell_keeps_current_value(self):
        assert portfolio_value_after("SELL", 100_000, 900_000) == 900_000


class TestCustodyOutlook:
    """Tests for CustodyOutlook."""

    def test_threshold(self, galicia):
        threshold = CustodyOutlook().threshold(galicia)
        assert threshold.exempt_amount == 1_000_000
        assert threshold.minimum_monthly_fee == pytest.approx(605.0)
        assert threshold.minimum_annual_fee == pytest.approx(7_260.0)
        assert "1,000,000.00" in threshold.recommended_strategy

    def test_growth_scenarios_flag_threshold_crossing(self, galicia):
        scenarios = CustodyOutlook().growth_scenarios(900_000, [0, 10, 20], galicia)
        assert [s.threshold_crossed for s in scenarios] == [False, False, True]
        assert scenarios[2].portfolio_value == pytest.approx(1_080_000)
        # 80,000 * 0.25% = 200, below the 500 minimum
        assert scenarios[2].custody.monthly_fee == 500.0

    def test_monthly_projection(self, galicia):
        path = CustodyOutlook().monthly_projection(990_000, galicia, months=3, monthly_growth_rate=0.01)
        assert [p.month for p in path] == [1, 2, 3]
        assert path[0].custody.is_exempt is True
        assert [p.threshold_crossed for p in path] == [False, True, False]
        assert path[1].cumulative_custody == pytest.approx(605.0)
        assert path[2].cumulative_custody == pytest.approx(1_210.0)
        assert path[2].portfolio_value == pytest.approx(990_000 * 1.01 ** 3)

    def test_monthly_projection_needs_a_month(self, galicia):
        with pytest.raises(InvalidInputError):
            CustodyOutlook().monthly_projection(990_000, galicia, months=0)

    def test_impact_on_returns(self, galicia):
        impact = CustodyOutlook().impact_on_returns(2_000_000, 10, galicia)
        assert impact.gross_return == pytest.approx(200_000)
        assert impact.custody_impact == pytest.approx(36_300)
        assert impact.net_return == pytest.approx(163_700)
        assert impact.impact_percentage == pytest.approx(18.15)
        assert any("High custody impact" in r for r in impact.recommendations)

    def test_impact_exempt_near_limit(self, galicia):
        impact = CustodyOutlook().impact_on_returns(900_000, 10, galicia)
        assert impact.annual_custody_fee == 0.0
        assert len(impact.recommendations) == 2

    def test_impact_zero_return_raises(self, galicia):
        with pytest.raises(InvalidInputError):
            CustodyOutlook().impact_on_returns(2_000_000, 0, galicia)

    def test_optimize_exempt_portfolio(self, galicia):
        advice = CustodyOutlook().optimize_portfolio_size(500_000, 10, galicia)
        assert advice.strategy is SizeStrategy.MAINTAIN_EXEMPT
        assert advice.optimized_size == 1_000_000
        assert advice.annual_savings == 0.0

    def test_optimize_minimum_binding(self, galicia):
        advice = CustodyOutlook().optimize_portfolio_size(1_100_000, 10, galicia)
        # 100,000 applicable * 0.25% = 250 < 500: grow to 1,000,000 + 500 / 0.25%
        assert advice.strategy is SizeStrategy.MINIMIZE_CUSTODY
        assert advice.optimized_size == pytest.approx(1_200_000)
        assert advice.optimized_custody == pytest.approx(advice.current_custody)

    def test_optimize_accepts_proportional_custody(self, galicia):
        advice = CustodyOutlook().optimize_portfolio_size(2_000_000, 10, galicia)
        assert advice.strategy is SizeStrategy.ACCEPT_CUSTODY
        assert advice.optimized_size == 2_000_000
        sizes = [a.portfolio_size for a in advice.alternatives]
        assert sizes == pytest.approx([3_000_000, 1_200_000, 1_000_000])
        net_returns = [a.net_return for a in advice.alternatives]
        assert net_returns == sorted(net_returns, reverse=True)


class TestReturnImpactAnalyzer:
    """Tests for ReturnImpactAnalyzer."""

    def test_one_year_round_trip(self, galicia):
        impact = ReturnImpactAnalyzer().analyze(100_000, 10, 1, galicia)
        # Buy 605, sell 110,000 * 0.5% = 550 + IVA = 665.5, custody exempt
        assert impact.gross_return == pytest.approx(10_000)
        assert impact.buy_commission == pytest.approx(605.0)
        assert impact.sell_commission == pytest.approx(665.5)
        assert impact.total_custody_fees == 0.0
        assert impact.total_fees == pytest.approx(1_270.5)
        assert impact.net_return == pytest.approx(8_729.5)
        assert impact.return_impact == pytest.approx(12.705)
        assert impact.break_even_return == pytest.approx(1.2705)

    def test_custody_charged_per_year(self, galicia):
        impact = ReturnImpactAnalyzer().analyze(2_000_000, 0.0001, 2, galicia)
        # Average value just above 2,000,000: custody ~36,300 per year
        assert impact.total_custody_fees == pytest.approx(72_600, rel=1e-3)

    def test_zero_return_raises(self, galicia):
        with pytest.raises(InvalidInputError):
            ReturnImpactAnalyzer().analyze(100_000, 0, 1, galicia)

    def test_zero_period_raises(self, galicia):
        with pytest.raises(InvalidInputError):
            ReturnImpactAnalyzer().analyze(100_000, 10, 0, galicia)

    def test_total_loss_rate_raises(self, galicia):
        with pytest.raises(InvalidInputError):
            ReturnImpactAnalyzer().analyze(100_000, -150, 1.5, galicia)
