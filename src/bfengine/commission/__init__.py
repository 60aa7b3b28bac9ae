"""Commission and custody fee calculators."""

from bfengine.commission.base import CustodyFeeModel, OperationFeeModel
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.commission.operation import OperationCommissionCalculator

__all__ = [
    "OperationFeeModel",
    "CustodyFeeModel",
    "OperationCommissionCalculator",
    "CustodyFeeCalculator",
]
