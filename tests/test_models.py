# tests/test_models.py
"""
Domain Model Tests - Records, Currency Tables and Validators

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- geofx.domain (models, currency tables, errors)
- geofx.shared.validators (validation helpers)
"""
from datetime import datetime, timedelta, timezone

import pytest

from geofx.domain.currencies import currency_for_country, currency_info, fallback_rate, normalize_currency
from geofx.domain.errors import InvalidRateError
from geofx.domain.models import (
    CachedLocationEntry,
    DetectionMethod,
    ExchangeRateEntry,
    LocationRecord,
    MonetaryRecord,
)
from geofx.shared.validators import (
    parse_positive_rate,
    validate_coordinates,
    validate_country_code,
    validate_currency_code,
)

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestCurrencies:
    def test_normalize(self):
        assert normalize_currency("NGN") == "ngn"
        assert normalize_currency(" kes ") == "kes"
        assert normalize_currency("xyz") == "usd"
        assert normalize_currency(None) == "usd"

    def test_country_lookup(self):
        assert currency_for_country("NG").code == "ngn"
        assert currency_for_country("fr").code == "eur"
        unknown = currency_for_country("br")
        assert unknown.code == "usd"
        assert unknown.flag == "🌍"
        assert currency_for_country("us").flag == "🇺🇸"

    def test_decimals(self):
        assert currency_info("ngn").decimals == 0
        assert currency_info("usd").decimals == 2

    def test_fallback_rate(self):
        assert fallback_rate("NGN") == 1500.0
        assert fallback_rate("usd") == 1.0
        assert fallback_rate("xyz") == 1.0


class TestLocationRecord:
    def test_normalizes_on_construction(self):
        record = LocationRecord("Nigeria", "NG", None, "NGN", "₦", "🇳🇬", "fallback", resolved_at=T0)
        assert record.country_code == "ng"
        assert record.currency_code == "ngn"
        assert record.detection_method is DetectionMethod.FALLBACK
        assert record.display_name == "Nigeria"

    def test_unknown_currency_becomes_base(self):
        record = LocationRecord("Mars", "mx", None, "mars", "?", "🌍", "geolocation", resolved_at=T0)
        assert record.currency_code == "usd"

    def test_json_round_trip(self):
        record = LocationRecord(
            "Kenya", "ke", "Nairobi", "kes", "KSh", "🇰🇪", DetectionMethod.GEOLOCATION,
            latitude=-1.29, longitude=36.82, resolved_at=T0,
        )
        assert LocationRecord.from_json(record.to_json()) == record

    def test_from_json_accepts_z_suffix(self):
        data = {
            "country": "Kenya", "country_code": "ke", "city": None, "currency_code": "kes",
            "currency_symbol": "KSh", "flag": "🇰🇪", "detection_method": "geolocation",
            "resolved_at": "2026-01-01T12:00:00Z",
        }
        assert LocationRecord.from_json(data).resolved_at == T0

    def test_cached_entry_expiry(self):
        record = LocationRecord("Kenya", "ke", None, "kes", "KSh", "🇰🇪", "geolocation", resolved_at=T0)
        entry = CachedLocationEntry(record, expires_at=T0 + timedelta(hours=2))
        assert not entry.is_expired(T0 + timedelta(hours=1))
        assert entry.is_expired(T0 + timedelta(hours=2))
        assert CachedLocationEntry.from_json(entry.to_json()) == entry


class TestExchangeRateEntry:
    def test_rejects_non_positive_rate(self):
        with pytest.raises(InvalidRateError):
            ExchangeRateEntry("ngn", 0, T0)
        with pytest.raises(InvalidRateError):
            ExchangeRateEntry("ngn", -1.5, T0)

    def test_freshness(self):
        entry = ExchangeRateEntry("ngn", 1500.0, T0, provider="test")
        ttl = timedelta(minutes=10)
        assert entry.is_fresh(T0 + timedelta(minutes=9), ttl)
        assert not entry.is_fresh(T0 + timedelta(minutes=10), ttl)
        assert entry.base_currency == "usd"


class TestMonetaryRecord:
    def test_flat_shape(self):
        record = MonetaryRecord.from_mapping({"total_amount": "100", "currency": "ngn", "status": "active"})
        assert record.total_amount == 100.0
        assert record.currency == "ngn"
        assert record.paid_amount == 0.0

    def test_nested_preferences_win(self):
        record = MonetaryRecord.from_mapping({
            "totalAmount": 50,
            "currency": "usd",
            "paymentPreferences": {"currency": "ngn", "gateway": "paystack", "nativeAmount": "75000"},
        })
        assert record.currency == "ngn"
        assert record.gateway == "paystack"
        assert record.native_amount == 75000.0
        assert record.exchange_rate is None

    def test_bad_numbers_become_none(self):
        record = MonetaryRecord.from_mapping({"totalAmount": "n/a", "nativeAmount": "??"})
        assert record.total_amount == 0.0
        assert record.native_amount is None


class TestValidators:
    def test_currency_code(self):
        assert validate_currency_code("NGN")
        assert not validate_currency_code("XYZ")
        assert not validate_currency_code("")

    def test_country_code(self):
        assert validate_country_code("ng")
        assert not validate_country_code("NGA")
        assert not validate_country_code(None)

    def test_coordinates(self):
        assert validate_coordinates(6.5, 3.4)
        assert validate_coordinates("6.5", "3.4")
        assert not validate_coordinates(91, 0)
        assert not validate_coordinates(0, -181)
        assert not validate_coordinates(float("nan"), 0)
        assert not validate_coordinates(None, 0)

    def test_positive_rate(self):
        assert parse_positive_rate("1530.5") == 1530.5
        assert parse_positive_rate(0) is None
        assert parse_positive_rate(False) is None
        assert parse_positive_rate(float("inf")) is None
        assert parse_positive_rate({}) is None
