"""Historical commission analysis.

Aggregates what was actually paid, as recorded in the trade history. Nothing
is recomputed from the live fee schedule: the calculators estimate future
costs, this module reports past ones.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from bfengine.core.constants import HISTORY_COLUMNS, MONTH_FORMAT
from bfengine.core.types import (
    CommissionAnalysis,
    HistoryFilter,
    MonthlySummary,
    OperationType,
    TradeRecord,
    TypeSummary,
)

logger = logging.getLogger(__name__)


def trades_to_dataframe(trades: Iterable[TradeRecord]) -> pd.DataFrame:
    """Convert trade records to a pandas DataFrame.

    Returns:
        DataFrame with columns:
        - operation_type, amount, commission_paid, iva_paid, trade_date, instrument_id
    """
    data = [
        {
            "operation_type": t.operation_type.value,
            "amount": t.amount,
            "commission_paid": t.commission_paid,
            "iva_paid": t.iva_paid,
            "trade_date": pd.Timestamp(t.trade_date),
            "instrument_id": t.instrument_id,
        }
        for t in trades
    ]
    if not data:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    return pd.DataFrame(data, columns=HISTORY_COLUMNS)


def apply_filter(df: pd.DataFrame, filters: HistoryFilter) -> pd.DataFrame:
    """Restrict a trade DataFrame to a date range and instrument."""
    mask = pd.Series(True, index=df.index)
    if filters.from_date is not None:
        mask &= df["trade_date"] >= pd.Timestamp(filters.from_date)
    if filters.to_date is not None:
        mask &= df["trade_date"] <= pd.Timestamp(filters.to_date)
    if filters.instrument_id is not None:
        mask &= df["instrument_id"] == filters.instrument_id
    return df[mask]


@dataclass(frozen=True)
class HistoricalAnalyzer:
    """Commission totals, per-type counts and a monthly breakdown."""

    def analyze(
        self,
        trades: Iterable[TradeRecord],
        filters: HistoryFilter | None = None,
    ) -> CommissionAnalysis:
        """Aggregate recorded commissions.

        Args:
            trades: Recorded trades
            filters: Optional date range / instrument restriction

        Returns:
            CommissionAnalysis; all zeros when no trade matches
        """
        df = trades_to_dataframe(trades)
        if filters is not None and not df.empty:
            df = apply_filter(df, filters)
        if df.empty:
            return CommissionAnalysis()

        total_commissions = float(df["commission_paid"].sum())
        total_taxes = float(df["iva_paid"].sum())

        by_type = df.groupby("operation_type")["commission_paid"].agg(["count", "sum"])

        def _type_summary(op: OperationType) -> TypeSummary:
            if op.value not in by_type.index:
                return TypeSummary()
            row = by_type.loc[op.value]
            return TypeSummary(count=int(row["count"]), total=float(row["sum"]))

        monthly = (
            df.assign(month=df["trade_date"].dt.strftime(MONTH_FORMAT))
            .groupby("month")
            .agg(
                commissions=("commission_paid", "sum"),
                taxes=("iva_paid", "sum"),
                trades=("commission_paid", "size"),
            )
            .sort_index(ascending=False)
        )
        breakdown = tuple(
            MonthlySummary(
                month=str(month),
                commissions=float(row["commissions"]),
                taxes=float(row["taxes"]),
                trades=int(row["trades"]),
            )
            for month, row in monthly.iterrows()
        )

        analysis = CommissionAnalysis(
            total_commissions_paid=total_commissions,
            total_taxes_paid=total_taxes,
            average_commission_per_trade=total_commissions / len(df),
            buy=_type_summary(OperationType.BUY),
            sell=_type_summary(OperationType.SELL),
            monthly_breakdown=breakdown,
        )
        logger.debug(
            "Analysed %d trades: commissions=%.2f taxes=%.2f over %d months",
            len(df), total_commissions, total_taxes, len(breakdown),
        )
        return analysis
