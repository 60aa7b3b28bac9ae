"""Broker schedule comparison."""

from bfengine.comparison.comparator import BrokerComparator

__all__ = ["BrokerComparator"]
