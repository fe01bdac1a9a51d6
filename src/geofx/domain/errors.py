# src/geofx/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions for positioning, geocoding,
rate acquisition and storage failures.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class PositioningError(DomainError):
    """Base class for failures of the positioning capability."""
    pass


class PermissionDenied(PositioningError):
    """Raised when the positioning source refuses to give a fix."""
    pass


class PositionUnavailable(PositioningError):
    """Raised when no usable fix could be obtained."""
    pass


class PositioningTimeout(PositioningError):
    """Raised when the positioning source did not answer in time."""
    pass


class Unsupported(PositioningError):
    """Raised when no positioning capability is available."""
    pass


class GeocodeUnavailable(DomainError):
    """Raised when every reverse-geocoding candidate failed."""
    pass


class RateUnavailable(DomainError):
    """Raised when every exchange-rate provider failed."""
    pass


class InvalidRateError(DomainError):
    """Raised when a rate value is invalid (e.g., negative or zero)."""
    pass


class StorageError(DomainError):
    """Raised when the durable store cannot be written."""
    pass
