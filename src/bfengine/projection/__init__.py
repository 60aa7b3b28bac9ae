"""Cost projections built on the fee calculators."""

from bfengine.projection.custody_outlook import (
    CustodyOutlook,
    CustodyReturnImpact,
    CustodyScenario,
    CustodyThreshold,
    MonthlyCustodyProjection,
    PortfolioAlternative,
    PortfolioSizeAdvice,
    SizeStrategy,
)
from bfengine.projection.engine import ProjectionEngine, portfolio_value_after
from bfengine.projection.returns import ReturnImpact, ReturnImpactAnalyzer

__all__ = [
    "ProjectionEngine",
    "portfolio_value_after",
    "CustodyOutlook",
    "CustodyScenario",
    "CustodyThreshold",
    "MonthlyCustodyProjection",
    "CustodyReturnImpact",
    "PortfolioAlternative",
    "PortfolioSizeAdvice",
    "SizeStrategy",
    "ReturnImpact",
    "ReturnImpactAnalyzer",
]
