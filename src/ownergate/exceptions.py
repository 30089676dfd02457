from __future__ import annotations


class OwnerGateError(Exception):
    """Base class for all ownergate domain errors."""


class StatusLookupError(RuntimeError, OwnerGateError):
    """Raised when the remote ownership lookup cannot be completed."""


class VariantConfigError(ValueError, OwnerGateError):
    """Raised when a gate variant configuration is invalid."""


class HostServiceError(RuntimeError, OwnerGateError):
    """Raised when a host capability required by the extension is missing."""
