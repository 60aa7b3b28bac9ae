"""brokerfee-engine: Commission and custody fee calculation for brokerage accounts.

Usage:
    from bfengine import (
        CommissionService,
        InMemoryScheduleRepository,
        OperationCommissionCalculator,
        default_schedules,
        GALICIA,
    )

    result = OperationCommissionCalculator().calculate("BUY", 10_000, GALICIA)
    print(result.total_commission)  # 181.5

    service = CommissionService(InMemoryScheduleRepository(default_schedules()))
    for row in service.compare("BUY", 100_000, portfolio_value=2_000_000):
        print(row.ranking, row.name, row.total_first_year_cost)
"""

# Analysis
from bfengine.analysis.base import TradeHistorySource
from bfengine.analysis.history import HistoricalAnalyzer

# Calculators
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.commission.operation import OperationCommissionCalculator

# Comparison
from bfengine.comparison.comparator import BrokerComparator

# Configuration
from bfengine.config import EngineConfig
from bfengine.core.constants import (
    DEFAULT_BROKER_ID,
    DEFAULT_MONTHLY_GROWTH_RATE,
    DEFAULT_PROJECTION_MONTHS,
    MONTHS_PER_YEAR,
)
from bfengine.core.envelope import Envelope, enveloped
from bfengine.core.exceptions import (
    BFEngineError,
    ConfigurationError,
    InvalidInputError,
    NoSolutionError,
)
from bfengine.core.types import (
    BrokerComparison,
    BrokerFeeSchedule,
    CommissionAnalysis,
    CommissionBreakdown,
    CustodyFeeResult,
    CustodyFees,
    HistoryFilter,
    MinimumInvestmentResult,
    MonthlySummary,
    OperationCommissionResult,
    OperationFees,
    OperationType,
    ProjectionResult,
    TradeRecord,
    TypeSummary,
)

# Projection
from bfengine.projection.custody_outlook import CustodyOutlook, SizeStrategy
from bfengine.projection.engine import ProjectionEngine, portfolio_value_after
from bfengine.projection.returns import ReturnImpact, ReturnImpactAnalyzer

# Schedules
from bfengine.schedules.json_file import JsonScheduleRepository
from bfengine.schedules.memory import InMemoryScheduleRepository
from bfengine.schedules.presets import GALICIA, MACRO, SANTANDER, default_schedules
from bfengine.schedules.stats import ScheduleStats, schedule_stats, validate_schedule_dict

# Service
from bfengine.service import CommissionService

# Solver
from bfengine.solver.minimum_investment import MinimumInvestmentSolver

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Enums
    "OperationType",
    "SizeStrategy",
    # Schedule types
    "OperationFees",
    "CustodyFees",
    "BrokerFeeSchedule",
    # Result types
    "CommissionBreakdown",
    "OperationCommissionResult",
    "CustodyFeeResult",
    "ProjectionResult",
    "BrokerComparison",
    "MinimumInvestmentResult",
    "ReturnImpact",
    # History types
    "TradeRecord",
    "HistoryFilter",
    "TypeSummary",
    "MonthlySummary",
    "CommissionAnalysis",
    # Exceptions
    "BFEngineError",
    "InvalidInputError",
    "ConfigurationError",
    "NoSolutionError",
    # Envelope
    "Envelope",
    "enveloped",
    # Constants
    "MONTHS_PER_YEAR",
    "DEFAULT_PROJECTION_MONTHS",
    "DEFAULT_MONTHLY_GROWTH_RATE",
    "DEFAULT_BROKER_ID",
    # Calculators
    "OperationCommissionCalculator",
    "CustodyFeeCalculator",
    "ProjectionEngine",
    "portfolio_value_after",
    "CustodyOutlook",
    "ReturnImpactAnalyzer",
    "BrokerComparator",
    "MinimumInvestmentSolver",
    "HistoricalAnalyzer",
    "TradeHistorySource",
    # Schedules
    "InMemoryScheduleRepository",
    "JsonScheduleRepository",
    "GALICIA",
    "SANTANDER",
    "MACRO",
    "default_schedules",
    "ScheduleStats",
    "schedule_stats",
    "validate_schedule_dict",
    # Service
    "CommissionService",
    "EngineConfig",
]
