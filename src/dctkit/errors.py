"""Exception hierarchy for dctkit."""

from __future__ import annotations


class DctError(RuntimeError):
    """Base class for all dctkit errors."""


class ConfigurationError(DctError, ValueError):
    """Raised when a transform cannot be planned for the requested kind/size."""


class ContractViolation(DctError, ValueError):
    """Raised when caller-supplied buffers do not match a planned transform."""


class RegistryError(DctError):
    """Raised for invalid registry operations."""
