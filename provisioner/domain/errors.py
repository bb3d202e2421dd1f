"""Errors raised by the provisioner."""

from __future__ import annotations


class ProvisioningError(RuntimeError):
    """Base class for provisioner failures."""


class InvalidCoordinate(ProvisioningError, ValueError):
    """Raised when an ``mvn:`` shorthand cannot be turned into a path."""

    def __init__(self, message: str, coordinate: str) -> None:
        super().__init__(f"{message}. {coordinate}")
        self.coordinate = coordinate


class IOFailure(ProvisioningError, OSError):
    """Raised when a copy, write or extraction leaves the target unusable."""
