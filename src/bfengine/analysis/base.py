"""Base protocol for trade history sources.

The engine never reads storage itself. Whatever holds recorded trades (a
database model, an API client, a CSV export) is passed in through this
interface.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from bfengine.core.types import TradeRecord


@runtime_checkable
class TradeHistorySource(Protocol):
    """Protocol for trade history collaborators.

    Example:
        class TradeTable:
            def trades(self) -> list[TradeRecord]:
                return [TradeRecord.from_dict(row) for row in self._rows]
    """

    def trades(self) -> Iterable[TradeRecord]:
        """Return the recorded trades.

        Returns:
            Trades with the commission and IVA actually paid
        """
        ...
