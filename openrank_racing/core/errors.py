"""
Error taxonomy for the racing bar pipeline.

FetchError is recoverable per month (the sweep skips the month),
InvalidConfig is fatal to the call that raised it, ResolverError is
absorbed by the frame builder with a placeholder gradient.
"""

from typing import Any, Optional


class RacingBarError(Exception):
    """Base class for all racing bar errors."""


class FetchError(RacingBarError):
    """Raised when a monthly snapshot cannot be retrieved or parsed."""

    HTTP = "http"
    PARSE = "parse"
    NETWORK = "network"

    def __init__(
        self,
        reason: str,
        status: Optional[int] = None,
        period_key: str = "",
        detail: str = "",
    ):
        self.reason = reason
        self.status = status
        self.period_key = period_key
        self.detail = detail

        message = f"Fetch failed ({reason})"
        if status is not None:
            message += f" status={status}"
        if period_key:
            message += f" for {period_key}"
        if detail:
            message += f": {detail}"
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "reason": self.reason,
            "status": self.status,
            "period_key": self.period_key,
            "detail": self.detail,
        }


class InvalidConfig(RacingBarError):
    """Raised when a tunable or input value is out of range."""

    def __init__(self, field: str, value: Any, message: str = ""):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid {field}: {value!r}")


class ResolverError(RacingBarError):
    """Raised when a color or avatar lookup fails for an entity."""

    def __init__(self, entity_id: str, message: str = ""):
        self.entity_id = entity_id
        super().__init__(message or f"Could not resolve colors for {entity_id!r}")


class SweepCancelled(RacingBarError):
    """Raised at a fetch boundary once the sweep's token has been cancelled."""
