# src/geofx/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Request coalescing (single-flight)
- Logging configuration
"""

from geofx.shared.validators import (
    parse_positive_rate,
    validate_api_key,
    validate_coordinates,
    validate_country_code,
    validate_currency_code,
)
from geofx.shared.single_flight import SingleFlight

__all__ = [
    "validate_api_key",
    "validate_currency_code",
    "validate_country_code",
    "validate_coordinates",
    "parse_positive_rate",
    "SingleFlight",
]
