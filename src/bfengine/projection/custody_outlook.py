"""Custody cost outlook.

Looks at custody beyond a single point in time:
- How custody changes as the portfolio grows (scenarios and month-by-month)
- Where custody kicks in and what the smallest charge is
- How much of the expected return custody eats
- Which portfolio size uses the custody terms best
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from bfengine.commission.base import CustodyFeeModel
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.core.constants import (
    DEFAULT_MONTHLY_GROWTH_RATE,
    DEFAULT_PROJECTION_MONTHS,
    HIGH_CUSTODY_IMPACT_PCT,
    HIGH_MINIMUM_ANNUAL_CUSTODY,
    JUST_ABOVE_EXEMPT_FRACTION,
    LARGE_EXEMPT_AMOUNT,
    LARGER_PORTFOLIO_FACTOR,
    MODERATE_CUSTODY_IMPACT_PCT,
    MONTHS_PER_YEAR,
    NEAR_EXEMPT_LIMIT_FRACTION,
    PERCENT,
)
from bfengine.core.exceptions import InvalidInputError
from bfengine.core.types import BrokerFeeSchedule, CustodyFeeResult
from bfengine.core.validation import require_amount, require_finite

logger = logging.getLogger(__name__)


class SizeStrategy(Enum):
    """Advice on how to size a portfolio against custody terms."""

    MAINTAIN_EXEMPT = "MAINTAIN_EXEMPT"  # stay at or under the exemption
    MINIMIZE_CUSTODY = "MINIMIZE_CUSTODY"  # minimum fee is binding, grow into it
    ACCEPT_CUSTODY = "ACCEPT_CUSTODY"  # percentage fee applies, nothing to gain


@dataclass(frozen=True)
class CustodyScenario:
    """Custody for the portfolio after a given growth percentage."""

    portfolio_value: float
    growth_percentage: float
    custody: CustodyFeeResult
    threshold_crossed: bool


@dataclass(frozen=True)
class CustodyThreshold:
    """Where custody starts and the least it costs once it does.

    Attributes:
        exempt_amount: Largest custody-free portfolio value
        minimum_monthly_fee: Monthly minimum including IVA
        minimum_annual_fee: Twelve months of the minimum including IVA
        recommended_strategy: Human-readable advice
    """

    exempt_amount: float
    minimum_monthly_fee: float
    minimum_annual_fee: float
    recommended_strategy: str


@dataclass(frozen=True)
class MonthlyCustodyProjection:
    """Custody for one month of a compounding growth path."""

    month: int
    portfolio_value: float
    custody: CustodyFeeResult
    cumulative_custody: float
    threshold_crossed: bool


@dataclass(frozen=True)
class CustodyReturnImpact:
    """Share of the expected annual return taken by custody.

    Attributes:
        gross_return: Expected annual return in currency
        custody_impact: Annual custody in currency
        net_return: gross_return - custody_impact
        annual_custody_fee: Annual custody fee including IVA
        impact_percentage: custody_impact as a percentage of gross_return
        recommendations: Human-readable advice
    """

    gross_return: float
    custody_impact: float
    net_return: float
    annual_custody_fee: float
    impact_percentage: float
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class PortfolioAlternative:
    """A candidate portfolio size and its return net of custody."""

    portfolio_size: float
    custody_fee: float
    net_return: float
    description: str


@dataclass(frozen=True)
class PortfolioSizeAdvice:
    """Result of the portfolio size optimizer."""

    optimized_size: float
    current_custody: float
    optimized_custody: float
    annual_savings: float
    strategy: SizeStrategy
    recommendation: str
    alternatives: tuple[PortfolioAlternative, ...] = ()


@dataclass(frozen=True)
class CustodyOutlook:
    """Custody projections built on a custody fee model."""

    custody_calculator: CustodyFeeModel = field(default_factory=CustodyFeeCalculator)

    def growth_scenarios(
        self,
        current_value: float,
        growth_percentages: Sequence[float],
        schedule: BrokerFeeSchedule,
    ) -> list[CustodyScenario]:
        """Custody after each growth percentage (10 = +10%).

        Raises:
            InvalidInputError: If a growth would make the portfolio negative
        """
        current = self.custody_calculator.calculate(current_value, schedule)
        scenarios = []
        for growth in growth_percentages:
            growth = require_finite("growth_percentage", growth)
            future_value = current_value * (1 + growth / PERCENT)
            custody = self.custody_calculator.calculate(future_value, schedule)
            scenarios.append(
                CustodyScenario(
                    portfolio_value=future_value,
                    growth_percentage=growth,
                    custody=custody,
                    threshold_crossed=current.is_exempt and not custody.is_exempt,
                )
            )
        return scenarios

    def threshold(self, schedule: BrokerFeeSchedule) -> CustodyThreshold:
        """Exempt amount and minimum custody charge of a schedule."""
        custody = schedule.custody
        minimum_monthly_fee = custody.monthly_minimum * (1 + custody.iva_rate)
        minimum_annual_fee = minimum_monthly_fee * MONTHS_PER_YEAR

        strategies = []
        if custody.exempt_amount >= LARGE_EXEMPT_AMOUNT:
            strategies.append(
                f"Keep the portfolio below {custody.exempt_amount:,.2f} to avoid custody"
            )
        if minimum_annual_fee > HIGH_MINIMUM_ANNUAL_CUSTODY:
            strategies.append("Consider consolidating positions to dilute the minimum custody fee")
        strategies.append("Weigh portfolio growth against the additional custody cost")

        return CustodyThreshold(
            exempt_amount=custody.exempt_amount,
            minimum_monthly_fee=minimum_monthly_fee,
            minimum_annual_fee=minimum_annual_fee,
            recommended_strategy=". ".join(strategies),
        )

    def monthly_projection(
        self,
        current_value: float,
        schedule: BrokerFeeSchedule,
        months: int = DEFAULT_PROJECTION_MONTHS,
        monthly_growth_rate: float = DEFAULT_MONTHLY_GROWTH_RATE,
    ) -> list[MonthlyCustodyProjection]:
        """Month-by-month custody on a compounding growth path.

        Args:
            current_value: Portfolio value today
            schedule: Broker fee schedule to apply
            months: Number of months to project (>= 1)
            monthly_growth_rate: Growth per month as a fraction (0.015 = 1.5%)

        Returns:
            One projection per month, months 1..N

        Raises:
            InvalidInputError: If months < 1 or the growth rate is below -100%
        """
        current_value = require_amount("current_value", current_value)
        if months < 1:
            raise InvalidInputError("months must be at least 1", field="months", value=months)
        rate = require_finite("monthly_growth_rate", monthly_growth_rate)
        if rate < -1:
            raise InvalidInputError(
                "monthly_growth_rate cannot be below -100%", field="monthly_growth_rate", value=rate
            )

        values = current_value * np.power(1 + rate, np.arange(months + 1))

        projections = []
        previous = self.custody_calculator.calculate(float(values[0]), schedule)
        cumulative = 0.0
        for month in range(1, months + 1):
            custody = self.custody_calculator.calculate(float(values[month]), schedule)
            cumulative += custody.total_monthly_cost
            projections.append(
                MonthlyCustodyProjection(
                    month=month,
                    portfolio_value=float(values[month]),
                    custody=custody,
                    cumulative_custody=cumulative,
                    threshold_crossed=previous.is_exempt and not custody.is_exempt,
                )
            )
            previous = custody

        logger.debug(
            "%s custody path over %d months from %.2f: cumulative=%.2f",
            schedule.broker_id, months, current_value, cumulative,
        )
        return projections

    def impact_on_returns(
        self,
        portfolio_value: float,
        expected_annual_return_pct: float,
        schedule: BrokerFeeSchedule,
    ) -> CustodyReturnImpact:
        """Share of the expected annual return consumed by custody.

        Raises:
            InvalidInputError: If the expected gross return is zero
        """
        custody = self.custody_calculator.calculate(portfolio_value, schedule)
        expected = require_finite("expected_annual_return_pct", expected_annual_return_pct)
        gross_return = portfolio_value * expected / PERCENT
        if gross_return == 0:
            raise InvalidInputError(
                "Custody impact is undefined for a zero expected return",
                field="expected_annual_return_pct",
                value=expected_annual_return_pct,
            )

        custody_impact = custody.annual_fee
        impact_percentage = custody_impact / gross_return * PERCENT
        return CustodyReturnImpact(
            gross_return=gross_return,
            custody_impact=custody_impact,
            net_return=gross_return - custody_impact,
            annual_custody_fee=custody.annual_fee,
            impact_percentage=impact_percentage,
            recommendations=tuple(
                _impact_recommendations(
                    impact_percentage,
                    custody.is_exempt,
                    portfolio_value,
                    schedule.custody.exempt_amount,
                )
            ),
        )

    def optimize_portfolio_size(
        self,
        current_value: float,
        target_annual_return_pct: float,
        schedule: BrokerFeeSchedule,
    ) -> PortfolioSizeAdvice:
        """Suggest a portfolio size that uses the custody terms best.

        Args:
            current_value: Portfolio value today
            target_annual_return_pct: Expected annual return in percent
            schedule: Broker fee schedule to apply

        Returns:
            Advice with the chosen strategy and alternatives, best net
            return first
        """
        target = require_finite("target_annual_return_pct", target_annual_return_pct)
        current = self.custody_calculator.calculate(current_value, schedule)
        terms = schedule.custody
        break_even = _break_even_size(schedule)

        if current.is_exempt:
            strategy = SizeStrategy.MAINTAIN_EXEMPT
            optimized_size = terms.exempt_amount
            recommendation = (
                f"Keep the portfolio at or below {terms.exempt_amount:,.2f} to avoid custody entirely"
            )
        elif current.applicable_amount * terms.monthly_percentage < terms.monthly_minimum:
            strategy = SizeStrategy.MINIMIZE_CUSTODY
            optimized_size = break_even if break_even is not None else current_value
            recommendation = (
                f"The minimum custody fee is binding: growing the portfolio to "
                f"{optimized_size:,.2f} costs no extra custody"
            )
        else:
            strategy = SizeStrategy.ACCEPT_CUSTODY
            optimized_size = current_value
            recommendation = "Custody is proportional to the portfolio; focus on maximizing returns"

        optimized = self.custody_calculator.calculate(optimized_size, schedule)
        alternatives = self._alternatives(current_value, target, schedule, break_even)

        logger.debug(
            "%s portfolio size advice for %.2f: %s -> %.2f",
            schedule.broker_id, current_value, strategy.value, optimized_size,
        )
        return PortfolioSizeAdvice(
            optimized_size=optimized_size,
            current_custody=current.annual_fee,
            optimized_custody=optimized.annual_fee,
            annual_savings=current.annual_fee - optimized.annual_fee,
            strategy=strategy,
            recommendation=recommendation,
            alternatives=alternatives,
        )

    def _alternatives(
        self,
        current_value: float,
        target_pct: float,
        schedule: BrokerFeeSchedule,
        break_even: float | None,
    ) -> tuple[PortfolioAlternative, ...]:
        candidates: list[tuple[float, str]] = []
        exempt_amount = schedule.custody.exempt_amount
        if current_value > exempt_amount:
            candidates.append((exempt_amount, "Keep the portfolio exempt from custody"))
        if break_even is not None and break_even != current_value:
            candidates.append((break_even, "Size at which the percentage fee reaches the minimum"))
        candidates.append(
            (current_value * LARGER_PORTFOLIO_FACTOR, "Portfolio 50% larger (more scale)")
        )

        alternatives = []
        for size, description in candidates:
            fee = self.custody_calculator.calculate(size, schedule).annual_fee
            alternatives.append(
                PortfolioAlternative(
                    portfolio_size=size,
                    custody_fee=fee,
                    net_return=size * target_pct / PERCENT - fee,
                    description=description,
                )
            )
        alternatives.sort(key=lambda a: a.net_return, reverse=True)
        return tuple(alternatives)


def _break_even_size(schedule: BrokerFeeSchedule) -> float | None:
    """Portfolio value at which the percentage custody fee equals the minimum."""
    terms = schedule.custody
    if terms.monthly_percentage == 0:
        return None
    return terms.exempt_amount + terms.monthly_minimum / terms.monthly_percentage


def _impact_recommendations(
    impact_percentage: float,
    is_exempt: bool,
    portfolio_value: float,
    exempt_amount: float,
) -> list[str]:
    recommendations = []
    if is_exempt:
        recommendations.append("The portfolio is currently exempt from custody")
        if portfolio_value > exempt_amount * NEAR_EXEMPT_LIMIT_FRACTION:
            recommendations.append("The portfolio is approaching the exemption limit")
    elif impact_percentage > HIGH_CUSTODY_IMPACT_PCT:
        recommendations.append("High custody impact on returns (>15%)")
        recommendations.append("Consider reducing the portfolio or spreading it across brokers")
    elif impact_percentage > MODERATE_CUSTODY_IMPACT_PCT:
        recommendations.append("Moderate custody impact on returns (5-15%)")
        recommendations.append("Check that expected growth compensates for custody")
    else:
        recommendations.append("Low custody impact on returns (<5%)")
        recommendations.append("Custody is acceptable; focus on maximizing returns")

    if not is_exempt and portfolio_value < exempt_amount * JUST_ABOVE_EXEMPT_FRACTION:
        recommendations.append("Consider keeping the portfolio below the exemption limit")
    return recommendations
