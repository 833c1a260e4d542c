"""Exception hierarchy for the relaybus package."""

from __future__ import annotations


class RelayBusError(RuntimeError):
    """Base class for all package-level errors."""


class ConfigValidationError(RelayBusError):
    """Raised when configuration cannot be validated safely."""
