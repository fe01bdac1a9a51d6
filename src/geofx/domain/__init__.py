# src/geofx/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, static currency tables and business rules.
No dependencies on infrastructure or external systems.
"""

from geofx.domain.models import (
    CachedLocationEntry,
    Coordinates,
    CurrencyState,
    DetectionMethod,
    ExchangeRateEntry,
    GeocodeResult,
    LocationRecord,
    MonetaryRecord,
)
from geofx.domain.errors import (
    DomainError,
    GeocodeUnavailable,
    InvalidRateError,
    PermissionDenied,
    PositionUnavailable,
    PositioningError,
    PositioningTimeout,
    RateUnavailable,
    StorageError,
    Unsupported,
)

__all__ = [
    "LocationRecord",
    "CachedLocationEntry",
    "ExchangeRateEntry",
    "CurrencyState",
    "MonetaryRecord",
    "Coordinates",
    "GeocodeResult",
    "DetectionMethod",
    "DomainError",
    "PositioningError",
    "PermissionDenied",
    "PositionUnavailable",
    "PositioningTimeout",
    "Unsupported",
    "GeocodeUnavailable",
    "RateUnavailable",
    "InvalidRateError",
    "StorageError",
]
