"""Domain exceptions for the billing admin tool."""

from typing import Any


class BillingError(Exception):
    """Base exception for billing admin errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidRecordError(BillingError):
    """A payload could not be mapped to a valid domain record."""


class RemoteCallError(BillingError):
    """A call to the billing backend failed.

    ``message`` is the single human-readable string surfaced to state
    containers.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


__all__ = ["BillingError", "InvalidRecordError", "RemoteCallError"]
