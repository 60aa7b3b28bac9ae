"""Inverse solvers over the fee schedule."""

from bfengine.solver.minimum_investment import MinimumInvestmentSolver, recommendation_for

__all__ = ["MinimumInvestmentSolver", "recommendation_for"]
