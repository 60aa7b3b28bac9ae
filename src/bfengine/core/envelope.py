"""Uniform ``{success, data, error}`` envelope for the request boundary.

The engine itself exposes no network surface. Callers that do (an HTTP
layer, a desktop bridge) wrap engine calls with :func:`enveloped` so
failures always reach the user as a structured error instead of a partial
numeric result.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from bfengine.core.exceptions import BFEngineError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """Response envelope.

    Attributes:
        success: Whether the call produced data
        data: The serialized result on success
        error: ``{message, details?}`` on failure
    """

    success: bool
    data: Any = None
    error: dict[str, Any] | None = None

    @classmethod
    def ok(cls, data: Any) -> "Envelope":
        """Wrap a successful result, serializing it when it has ``to_dict``."""
        return cls(success=True, data=_serialize(data))

    @classmethod
    def fail(cls, error: BFEngineError) -> "Envelope":
        """Wrap an engine error."""
        return cls(success=False, error=error.to_dict())

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON envelope shape."""
        payload: dict[str, Any] = {"success": self.success}
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
        return payload


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


def enveloped(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Envelope:
    """Run an engine call and wrap its outcome.

    Only engine errors become failure envelopes; anything else is a bug and
    propagates.
    """
    try:
        result = func(*args, **kwargs)
    except BFEngineError as e:
        logger.info("Engine call %s failed: %s", getattr(func, "__name__", func), e.message)
        return Envelope.fail(e)
    return Envelope.ok(result)
