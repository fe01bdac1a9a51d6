# src/geofx/domain/currencies.py
"""
Currency Tables - Static Reference Data

This module holds the fixed reference tables the engine works from:
supported currencies with their symbols and flags, the country→currency
mapping used after reverse geocoding, the static fallback exchange rates,
and the anchor-market defaults.

Files that USE this module:
- geofx.domain.models (normalizes currency codes)
- geofx.application.location_chain (country lookup, anchor market)
- geofx.application.rates_service (fallback rate table)
- geofx.application.currency_store (symbols, gateways)
- geofx.application.classifier (recognized codes, gateway currencies)
- geofx.adapters.formatting.formatter (symbols, decimals)

Files that this module USES:
- None (pure data)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


BASE_CURRENCY = "usd"

# Anchor market: used whenever no other signal is available
ANCHOR_COUNTRY = "Nigeria"
ANCHOR_COUNTRY_CODE = "ng"
ANCHOR_CITY = "Lagos"
ANCHOR_CURRENCY = "ngn"

UNKNOWN_FLAG = "🌍"


@dataclass(frozen=True)
class CurrencyInfo:
    """
    Display metadata for one supported currency.

    Attributes:
        code: Lowercase ISO-4217 code (e.g., "ngn")
        symbol: Display symbol (e.g., "₦")
        flag: Flag glyph of the issuing country
        decimals: Fraction digits shown when formatting
    """
    code: str
    symbol: str
    flag: str
    decimals: int = 2


SUPPORTED_CURRENCIES: Dict[str, CurrencyInfo] = {
    "usd": CurrencyInfo("usd", "$", "🇺🇸"),
    "ngn": CurrencyInfo("ngn", "₦", "🇳🇬", decimals=0),
    "kes": CurrencyInfo("kes", "KSh", "🇰🇪"),
    "gbp": CurrencyInfo("gbp", "£", "🇬🇧"),
    "eur": CurrencyInfo("eur", "€", "🇪🇺"),
    "cad": CurrencyInfo("cad", "C$", "🇨🇦"),
    "aud": CurrencyInfo("aud", "A$", "🇦🇺"),
    "zar": CurrencyInfo("zar", "R", "🇿🇦"),
    "ghs": CurrencyInfo("ghs", "₵", "🇬🇭"),
    "tzs": CurrencyInfo("tzs", "TSh", "🇹🇿", decimals=0),
    "ugx": CurrencyInfo("ugx", "USh", "🇺🇬", decimals=0),
    "jpy": CurrencyInfo("jpy", "¥", "🇯🇵", decimals=0),
    "inr": CurrencyInfo("inr", "₹", "🇮🇳"),
}

# ISO-2 country code (lowercase) -> currency code
COUNTRY_CURRENCIES: Dict[str, str] = {
    "ng": "ngn",
    "ke": "kes",
    "us": "usd",
    "gb": "gbp",
    "ca": "cad",
    "au": "aud",
    "za": "zar",
    "gh": "ghs",
    "tz": "tzs",
    "ug": "ugx",
    "jp": "jpy",
    "in": "inr",
    # Eurozone
    "de": "eur",
    "fr": "eur",
    "it": "eur",
    "es": "eur",
    "nl": "eur",
    "be": "eur",
    "ie": "eur",
    "pt": "eur",
    "at": "eur",
    "fi": "eur",
    "gr": "eur",
}

# Units of currency per 1 USD, used only when every live source fails
FALLBACK_RATES: Dict[str, float] = {
    "usd": 1.0,
    "ngn": 1500.0,
    "eur": 0.85,
    "gbp": 0.75,
    "cad": 1.35,
    "aud": 1.45,
    "jpy": 110.0,
    "inr": 75.0,
    "kes": 150.0,
    "ghs": 12.0,
    "zar": 18.0,
    "tzs": 2500.0,
    "ugx": 3700.0,
}

# Gateways that only ever settle in a single non-base currency
GATEWAY_CURRENCIES: Dict[str, str] = {
    "paystack": "ngn",
    "flutterwave": "ngn",
}

LOCAL_GATEWAY = "paystack"
INTERNATIONAL_GATEWAY = "stripe"


def normalize_currency(code: Optional[str], default: str = BASE_CURRENCY) -> str:
    """
    Lowercase and validate a currency code.

    Args:
        code: Raw currency code in any case (may be None)
        default: Returned when the code is missing or unsupported

    Returns:
        A code from SUPPORTED_CURRENCIES
    """
    if not code or not isinstance(code, str):
        return default
    normalized = code.strip().lower()
    return normalized if normalized in SUPPORTED_CURRENCIES else default


def is_supported(code: Optional[str]) -> bool:
    return isinstance(code, str) and code.strip().lower() in SUPPORTED_CURRENCIES


def currency_info(code: Optional[str]) -> CurrencyInfo:
    """Return display metadata, falling back to the base currency."""
    return SUPPORTED_CURRENCIES[normalize_currency(code)]


def currency_for_country(country_code: Optional[str]) -> CurrencyInfo:
    """
    Map an ISO-2 country code to the currency shown to visitors from there.

    Countries outside the table are billed in the base currency and get the
    neutral globe glyph instead of the US flag.
    """
    cc = (country_code or "").strip().lower()
    code = COUNTRY_CURRENCIES.get(cc)
    if code is None:
        base = SUPPORTED_CURRENCIES[BASE_CURRENCY]
        return CurrencyInfo(base.code, base.symbol, UNKNOWN_FLAG, base.decimals)
    return SUPPORTED_CURRENCIES[code]


def fallback_rate(code: Optional[str]) -> float:
    """Static USD→code rate; 1.0 for currencies outside the table."""
    if not code:
        return 1.0
    return FALLBACK_RATES.get(code.strip().lower(), 1.0)
