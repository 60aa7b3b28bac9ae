"""Commission service facade.

Resolves the fee schedule for a call (an explicit schedule, or the active one
in a repository) and dispatches to the stateless calculators.

Usage:
    service = CommissionService(InMemoryScheduleRepository(default_schedules()))
    projection = service.projection("BUY", 100_000, current_portfolio_value=900_000)
    ranking = service.compare("BUY", 100_000, portfolio_value=1_000_000)
"""

import logging
from collections.abc import Iterable

from bfengine.analysis.base import TradeHistorySource
from bfengine.analysis.history import HistoricalAnalyzer
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.commission.operation import OperationCommissionCalculator
from bfengine.comparison.comparator import BrokerComparator
from bfengine.core.exceptions import ConfigurationError
from bfengine.core.types import (
    BrokerComparison,
    BrokerFeeSchedule,
    CommissionAnalysis,
    CustodyFeeResult,
    HistoryFilter,
    MinimumInvestmentResult,
    OperationCommissionResult,
    OperationType,
    ProjectionResult,
    TradeRecord,
)
from bfengine.projection.engine import ProjectionEngine, portfolio_value_after
from bfengine.schedules.base import ScheduleRepository
from bfengine.solver.minimum_investment import MinimumInvestmentSolver

logger = logging.getLogger(__name__)


class CommissionService:
    """Fee calculations against a schedule repository.

    The service holds no mutable state of its own; the repository is the
    only collaborator that changes.
    """

    def __init__(self, repository: ScheduleRepository) -> None:
        self.repository = repository
        self.operation_calculator = OperationCommissionCalculator()
        self.custody_calculator = CustodyFeeCalculator()
        self.projection_engine = ProjectionEngine(self.operation_calculator, self.custody_calculator)
        self.comparator = BrokerComparator(self.operation_calculator, self.custody_calculator)
        self.solver = MinimumInvestmentSolver(self.operation_calculator)
        self.analyzer = HistoricalAnalyzer()

    def resolve(self, schedule: BrokerFeeSchedule | None = None) -> BrokerFeeSchedule:
        """Return the given schedule, or the repository's active one.

        Raises:
            ConfigurationError: If no schedule is given and none is active
        """
        if schedule is not None:
            return schedule
        active = self.repository.get_active()
        if active is None:
            raise ConfigurationError("No active fee schedule configured")
        return active

    def schedule_by_broker(self, broker_id: str) -> BrokerFeeSchedule:
        """Look up a broker's schedule.

        Raises:
            ConfigurationError: If the broker is unknown
        """
        schedule = self.repository.get(broker_id)
        if schedule is None:
            raise ConfigurationError("No fee schedule for broker", broker_id=broker_id)
        return schedule

    def operation_commission(
        self,
        operation_type: OperationType | str,
        amount: float,
        schedule: BrokerFeeSchedule | None = None,
    ) -> OperationCommissionResult:
        """Commission for a single buy or sell."""
        return self.operation_calculator.calculate(operation_type, amount, self.resolve(schedule))

    def custody_fee(
        self,
        portfolio_value: float,
        schedule: BrokerFeeSchedule | None = None,
    ) -> CustodyFeeResult:
        """Custody for holding a portfolio."""
        return self.custody_calculator.calculate(portfolio_value, self.resolve(schedule))

    def projection(
        self,
        operation_type: OperationType | str,
        amount: float,
        current_portfolio_value: float,
        schedule: BrokerFeeSchedule | None = None,
    ) -> ProjectionResult:
        """First-year cost of a trade given the portfolio value before it."""
        resolved = self.resolve(schedule)
        after = portfolio_value_after(operation_type, amount, current_portfolio_value)
        projection = self.projection_engine.project(operation_type, amount, after, resolved)
        logger.info(
            "Projected %s %.2f with %s: first-year cost %.2f, break-even %.2f%%",
            projection.operation.breakdown.operation_type.value, amount, resolved.name,
            projection.total_first_year_cost, projection.break_even_impact,
        )
        return projection

    def compare(
        self,
        operation_type: OperationType | str,
        amount: float,
        portfolio_value: float,
        schedules: Iterable[BrokerFeeSchedule] | None = None,
    ) -> list[BrokerComparison]:
        """Rank schedules (default: every schedule in the repository)."""
        candidates = self.repository.list() if schedules is None else schedules
        ranking = self.comparator.compare(operation_type, amount, portfolio_value, candidates)
        if ranking:
            logger.info(
                "Cheapest broker for %s %.2f: %s",
                ranking[0].operation_commission.breakdown.operation_type.value,
                amount,
                ranking[0].name,
            )
        return ranking

    def minimum_investment(
        self,
        threshold_percent: float,
        schedule: BrokerFeeSchedule | None = None,
        operation_type: OperationType | str = OperationType.BUY,
    ) -> MinimumInvestmentResult:
        """Smallest trade keeping commissions under a target percentage."""
        result = self.solver.solve(threshold_percent, self.resolve(schedule), operation_type)
        logger.info(
            "Minimum investment for %.2f%%: %.2f (actual %.4f%%)",
            threshold_percent, result.minimum_amount, result.commission_percentage,
        )
        return result

    def analyze_history(
        self,
        source: TradeHistorySource | Iterable[TradeRecord],
        filters: HistoryFilter | None = None,
    ) -> CommissionAnalysis:
        """Aggregate commissions recorded by a trade history collaborator."""
        trades = source.trades() if isinstance(source, TradeHistorySource) else source
        analysis = self.analyzer.analyze(trades, filters)
        logger.info(
            "Historical commissions: %d trades, %.2f commissions, %.2f taxes",
            analysis.num_trades, analysis.total_commissions_paid, analysis.total_taxes_paid,
        )
        return analysis
