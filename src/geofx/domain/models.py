# src/geofx/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Resolved visitor locations and their durable cache entries
- Exchange-rate quotes
- The published currency state
- Historical monetary records consumed by the classifier

Files that USE this module:
- geofx.application.* (all services use domain models)
- geofx.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- geofx.domain.currencies (currency normalization)
- geofx.domain.errors (InvalidRateError)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime, timedelta, timezone  # Date/time utilities for timestamps
from enum import Enum
from typing import Any, Mapping, Optional  # Type hints for optional values

from geofx.domain.currencies import BASE_CURRENCY, normalize_currency
from geofx.domain.errors import InvalidRateError


def utcnow() -> datetime:
    """Default clock used across the engine."""
    return datetime.now(timezone.utc)


def _parse_ts(raw: Any) -> datetime:
    # Accept both "...Z" and "+00:00"
    if isinstance(raw, str):
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).astimezone(timezone.utc)
    raise ValueError(f"Invalid timestamp: {raw!r}")


class DetectionMethod(str, Enum):
    """How a LocationRecord was obtained."""
    GEOLOCATION = "geolocation"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeocodeResult:
    """
    Normalized output of every reverse-geocoding parser.

    Attributes:
        country_code: ISO-2 country code as returned by the service
        country_name: Human-readable country name
        city: City or locality, if the service provided one
    """
    country_code: str
    country_name: str
    city: Optional[str] = None


@dataclass(frozen=True)
class LocationRecord:
    """
    A resolved visitor location with the currency that goes with it.

    Attributes:
        country: Country name
        country_code: ISO-2 country code, lowercase
        city: City name (may be None)
        currency_code: Supported currency code; unknown codes become the base currency
        currency_symbol: Display symbol for currency_code
        flag: Flag glyph
        detection_method: How the record was obtained
        latitude: Latitude of the fix, if any
        longitude: Longitude of the fix, if any
        resolved_at: When the record was built (UTC)
    """
    country: str
    country_code: str
    city: Optional[str]
    currency_code: str
    currency_symbol: str
    flag: str
    detection_method: DetectionMethod
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    resolved_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "country_code", (self.country_code or "").lower())
        object.__setattr__(self, "currency_code", normalize_currency(self.currency_code))
        object.__setattr__(self, "detection_method", DetectionMethod(self.detection_method))

    @property
    def display_name(self) -> str:
        return f"{self.city}, {self.country}" if self.city else self.country

    def to_json(self) -> dict:
        """
        Convert LocationRecord to a JSON-serializable dictionary.

        Returns:
            Dictionary with ISO-formatted timestamp and plain-string method
        """
        return {
            "country": self.country,
            "country_code": self.country_code,
            "city": self.city,
            "currency_code": self.currency_code,
            "currency_symbol": self.currency_symbol,
            "flag": self.flag,
            "detection_method": self.detection_method.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "resolved_at": self.resolved_at.isoformat(),
        }

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> "LocationRecord":
        """
        Create LocationRecord from a dictionary produced by to_json().

        Raises:
            KeyError, ValueError, TypeError: If the dictionary does not match the schema
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Location record must be an object, got {type(data).__name__}")
        lat = data.get("latitude")
        lon = data.get("longitude")
        return LocationRecord(
            country=str(data["country"]),
            country_code=str(data["country_code"]),
            city=data.get("city"),
            currency_code=str(data["currency_code"]),
            currency_symbol=str(data["currency_symbol"]),
            flag=str(data.get("flag", "")),
            detection_method=DetectionMethod(data["detection_method"]),
            latitude=float(lat) if lat is not None else None,
            longitude=float(lon) if lon is not None else None,
            resolved_at=_parse_ts(data["resolved_at"]),
        )


@dataclass(frozen=True)
class CachedLocationEntry:
    """A LocationRecord persisted with an absolute expiry time."""
    record: LocationRecord
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_json(self) -> dict:
        return {"record": self.record.to_json(), "expires_at": self.expires_at.isoformat()}

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> "CachedLocationEntry":
        if not isinstance(data, Mapping):
            raise TypeError(f"Cache entry must be an object, got {type(data).__name__}")
        return CachedLocationEntry(
            record=LocationRecord.from_json(data["record"]),
            expires_at=_parse_ts(data["expires_at"]),
        )


@dataclass(frozen=True)
class ExchangeRateEntry:
    """
    One live quote of base→target, held in the provider's in-memory map.

    Raises:
        InvalidRateError: On construction with a non-positive rate
    """
    target_currency: str
    rate: float
    fetched_at: datetime
    provider: Optional[str] = None
    base_currency: str = BASE_CURRENCY

    def __post_init__(self) -> None:
        if not self.rate > 0:
            raise InvalidRateError(f"Exchange rate must be positive, got {self.rate!r}")

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.fetched_at < ttl


@dataclass(frozen=True)
class CurrencyState:
    """
    Public snapshot published by CurrencyStore.

    Attributes:
        currency_code: Currency amounts are displayed in
        symbol: Symbol for currency_code
        location: Resolved location, None before the first resolution
        exchange_rate: Units of currency_code per 1 base unit
        loading: True while a resolution is in flight
        error: Diagnostic message; never blocks conversion or formatting
    """
    currency_code: str
    symbol: str
    location: Optional[LocationRecord] = None
    exchange_rate: float = 1.0
    loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class MonetaryRecord:
    """
    Historical agreement/payment record as stored upstream.

    The classifier reads these and never mutates them.
    """
    total_amount: float = 0.0
    currency: Optional[str] = None
    gateway: Optional[str] = None
    native_amount: Optional[float] = None
    exchange_rate: Optional[float] = None
    paid_amount: float = 0.0
    status: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MonetaryRecord":
        """
        Build a record from either the flat shape or the stored agreement shape.

        The stored shape nests currency metadata under ``paymentPreferences``
        and uses camelCase keys (``totalAmount``, ``nativeAmount``, ...).

        Args:
            data: Raw record mapping

        Returns:
            MonetaryRecord with numeric fields coerced to float
        """
        prefs = data.get("paymentPreferences") or data.get("payment_preferences") or {}

        def pick(*keys: str) -> Any:
            for source in (prefs, data):
                for key in keys:
                    if source.get(key) is not None:
                        return source[key]
            return None

        def num(value: Any) -> Optional[float]:
            if value is None:
                return None
            try:
                return float(value)
            except (TypeError, ValueError):
                return None

        return cls(
            total_amount=num(pick("totalAmount", "total_amount")) or 0.0,
            currency=pick("currency"),
            gateway=pick("gateway"),
            native_amount=num(pick("nativeAmount", "native_amount")),
            exchange_rate=num(pick("exchangeRate", "exchange_rate")),
            paid_amount=num(pick("paidAmount", "paid_amount")) or 0.0,
            status=pick("status"),
        )
