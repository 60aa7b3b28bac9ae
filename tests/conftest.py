"""Shared test fixtures for brokerfee-engine tests."""

from datetime import date

import pytest

from bfengine.core.types import (
    BrokerFeeSchedule,
    CustodyFees,
    OperationFees,
    OperationType,
    TradeRecord,
)
from bfengine.schedules.memory import InMemoryScheduleRepository
from bfengine.schedules.presets import GALICIA, default_schedules


def make_schedule(
    broker_id: str = "test",
    name: str | None = None,
    is_active: bool = False,
    percentage: float = 0.005,
    minimum: float = 150.0,
    iva_rate: float = 0.21,
    sell_minimum: float | None = None,
    exempt_amount: float = 1_000_000.0,
    monthly_percentage: float = 0.0025,
    monthly_minimum: float = 500.0,
) -> BrokerFeeSchedule:
    """Build a schedule with Galicia-like defaults."""
    return BrokerFeeSchedule(
        name=name or broker_id.title(),
        broker_id=broker_id,
        is_active=is_active,
        buy=OperationFees(percentage=percentage, minimum=minimum, iva_rate=iva_rate),
        sell=OperationFees(
            percentage=percentage,
            minimum=minimum if sell_minimum is None else sell_minimum,
            iva_rate=iva_rate,
        ),
        custody=CustodyFees(
            exempt_amount=exempt_amount,
            monthly_percentage=monthly_percentage,
            monthly_minimum=monthly_minimum,
            iva_rate=iva_rate,
        ),
    )


@pytest.fixture
def schedule_factory():
    """Factory for custom schedules."""
    return make_schedule


@pytest.fixture
def galicia() -> BrokerFeeSchedule:
    """Galicia rate card: 0.5% / min 150 / IVA 21%, custody exempt 1M, 0.25% min 500."""
    return GALICIA


@pytest.fixture
def repository() -> InMemoryScheduleRepository:
    """Repository seeded with the presets, Galicia active."""
    return InMemoryScheduleRepository(default_schedules())


@pytest.fixture
def sample_trades() -> list[TradeRecord]:
    """Four trades over three calendar months."""
    return [
        TradeRecord(OperationType.BUY, 10_000.0, 150.0, 31.5, date(2024, 1, 15)),
        TradeRecord(OperationType.SELL, 50_000.0, 250.0, 52.5, date(2024, 1, 28)),
        TradeRecord(OperationType.BUY, 100_000.0, 500.0, 105.0, date(2024, 3, 3), instrument_id=7),
        TradeRecord(OperationType.BUY, 20_000.0, 150.0, 31.5, date(2023, 12, 31), instrument_id=7),
    ]
