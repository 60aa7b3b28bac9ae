"""Exception hierarchy for the broker fee engine.

All engine-specific exceptions inherit from BFEngineError for easy catching.
Each error carries a message and an optional ``details`` mapping so the
boundary layer can surface it as a structured error.
"""

from typing import Any


class BFEngineError(Exception):
    """Base exception for all broker fee engine errors.

    Attributes:
        message: Error description
        details: Additional structured context about the failure
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to the ``{message, details}`` envelope shape."""
        data: dict[str, Any] = {"message": self.message}
        if self.details:
            data["details"] = dict(self.details)
        return data


class InvalidInputError(BFEngineError):
    """Raised when an operation argument is invalid.

    Covers negative or non-finite amounts, zero amounts where a division
    needs them, and unknown operation types.

    Attributes:
        field: Name of the offending argument (optional)
        value: The rejected value (optional)
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        self.field = field
        self.value = value
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
            details["value"] = value
        super().__init__(message, details)


class ConfigurationError(BFEngineError):
    """Raised when a fee schedule is invalid or cannot be resolved.

    Covers rates outside [0, 1], negative currency fields, blank
    identifiers, missing active schedules and unknown brokers.

    Attributes:
        broker_id: Broker the configuration belongs to (optional)
        problems: Individual validation problems found
    """

    def __init__(
        self,
        message: str,
        broker_id: str | None = None,
        problems: list[str] | None = None,
    ):
        self.broker_id = broker_id
        self.problems = problems or []
        details: dict[str, Any] = {}
        if broker_id:
            details["brokerId"] = broker_id
        if self.problems:
            details["problems"] = list(self.problems)
        full_msg = message
        if broker_id:
            full_msg = f"[{broker_id}] {message}"
        super().__init__(full_msg, details)


class NoSolutionError(BFEngineError):
    """Raised when the minimum investment solver has no finite answer.

    A target commission percentage at or below the schedule's own
    percentage floor cannot be reached by growing the trade size.

    Attributes:
        threshold_percent: The requested target percentage
        floor_percent: Lowest commission percentage the schedule can reach
        regime_boundary: Amount above which the percentage fee exceeds the
            minimum (None when the rate is zero)
    """

    def __init__(
        self,
        threshold_percent: float,
        floor_percent: float,
        regime_boundary: float | None = None,
    ):
        self.threshold_percent = threshold_percent
        self.floor_percent = floor_percent
        self.regime_boundary = regime_boundary
        msg = (
            f"No trade amount keeps commissions at {threshold_percent:.4f}%: "
            f"the schedule never goes below {floor_percent:.4f}%"
        )
        details: dict[str, Any] = {
            "thresholdPercent": threshold_percent,
            "floorPercent": floor_percent,
        }
        if regime_boundary is not None:
            details["regimeBoundary"] = regime_boundary
        super().__init__(msg, details)
