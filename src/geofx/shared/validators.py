# src/geofx/shared/validators.py
"""
Input Validation Utilities - Data Validation

This module provides validation functions for configuration values and
for data coming back from external services: API keys, currency codes,
country codes, coordinates and rate values.

Files that USE this module:
- geofx.config.settings (uses validation functions in Settings field validators)
- geofx.adapters.positioning.ipapi (coordinate validation)
- geofx.adapters.geocoders.* (country code validation)
- geofx.adapters.providers.* (rate validation)

Files that this module USES:
- geofx.domain.currencies (supported currency set)
"""
import math
import re
from typing import Any, Optional

from geofx.domain.currencies import SUPPORTED_CURRENCIES


def validate_api_key(api_key: str, min_length: int = 10) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace()


def validate_currency_code(code: str) -> bool:
    """Check that a code is one of the supported currencies (any case)."""
    if not code or not isinstance(code, str):
        return False
    return code.strip().lower() in SUPPORTED_CURRENCIES


def validate_country_code(code: Any) -> bool:
    """
    Validate an ISO 3166-1 alpha-2 country code.

    Args:
        code: Candidate code (any case)

    Returns:
        True for exactly two ASCII letters, False otherwise
    """
    if not isinstance(code, str):
        return False
    return bool(re.match(r'^[A-Za-z]{2}$', code.strip()))


def validate_coordinates(latitude: Any, longitude: Any) -> bool:
    """
    Validate a latitude/longitude pair.

    Args:
        latitude: Degrees, -90..90
        longitude: Degrees, -180..180

    Returns:
        True if both are finite numbers in range, False otherwise
    """
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        return False
    if math.isnan(lat) or math.isnan(lon):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def parse_positive_rate(value: Any) -> Optional[float]:
    """
    Coerce a provider value to a strictly positive finite float.

    Booleans are rejected even though they are ints in Python.

    Returns:
        The rate, or None when the value is missing, non-numeric or not > 0
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(rate) or math.isinf(rate) or rate <= 0:
        return None
    return rate
