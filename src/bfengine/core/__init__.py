"""Core types and utilities for the broker fee engine."""

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

__all__ = [
    # Enums
    "OperationType",
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
]
