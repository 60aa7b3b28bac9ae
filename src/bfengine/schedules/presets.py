"""Rate cards of Argentine bank brokers.

Rates are fractions (0.005 = 0.5%), amounts are in ARS, IVA is 21%.
Only the Galicia card is active by default.
"""

from dataclasses import replace

from bfengine.core.exceptions import ConfigurationError
from bfengine.core.types import BrokerFeeSchedule, CustodyFees, OperationFees

ARGENTINE_IVA: float = 0.21

GALICIA = BrokerFeeSchedule(
    name="Banco Galicia",
    broker_id="galicia",
    is_active=True,
    buy=OperationFees(percentage=0.005, minimum=150.0, iva_rate=ARGENTINE_IVA),
    sell=OperationFees(percentage=0.005, minimum=150.0, iva_rate=ARGENTINE_IVA),
    custody=CustodyFees(
        exempt_amount=1_000_000.0,
        monthly_percentage=0.0025,
        monthly_minimum=500.0,
        iva_rate=ARGENTINE_IVA,
    ),
)

SANTANDER = BrokerFeeSchedule(
    name="Banco Santander",
    broker_id="santander",
    is_active=False,
    buy=OperationFees(percentage=0.006, minimum=200.0, iva_rate=ARGENTINE_IVA),
    sell=OperationFees(percentage=0.006, minimum=200.0, iva_rate=ARGENTINE_IVA),
    custody=CustodyFees(
        exempt_amount=500_000.0,
        monthly_percentage=0.003,
        monthly_minimum=600.0,
        iva_rate=ARGENTINE_IVA,
    ),
)

MACRO = BrokerFeeSchedule(
    name="Banco Macro",
    broker_id="macro",
    is_active=False,
    buy=OperationFees(percentage=0.0055, minimum=180.0, iva_rate=ARGENTINE_IVA),
    sell=OperationFees(percentage=0.0055, minimum=180.0, iva_rate=ARGENTINE_IVA),
    custody=CustodyFees(
        exempt_amount=800_000.0,
        monthly_percentage=0.0028,
        monthly_minimum=450.0,
        iva_rate=ARGENTINE_IVA,
    ),
)


def default_schedules(active: str | None = None) -> list[BrokerFeeSchedule]:
    """Return the preset schedules.

    Args:
        active: Broker id to mark active instead of Galicia (optional)

    Returns:
        Galicia, Santander and Macro, with exactly one of them active

    Raises:
        ConfigurationError: If ``active`` names no preset
    """
    presets = [GALICIA, SANTANDER, MACRO]
    if active is None:
        return presets
    broker_id = active.strip().lower()
    if broker_id not in {p.broker_id for p in presets}:
        raise ConfigurationError("No preset fee schedule for broker", broker_id=active)
    return [replace(p, is_active=p.broker_id == broker_id) for p in presets]
