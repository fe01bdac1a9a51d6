# src/geofx/adapters/formatting/formatter.py
"""
Amount Formatter - Text Formatting and Presentation

This module handles all text formatting for amounts, rates, locations and
the published currency state. Grouping and decimal separators follow the
requested locale (via Babel); the number of fraction digits follows the
currency (naira, yen and the East African shillings are shown whole).

Files that USE this module:
- geofx.application.currency_store (format helpers)
- geofx.app (prints the resolved state)
- tests.test_formatter (unit tests)

Files that this module USES:
- geofx.domain.currencies (symbols and decimals)
- geofx.domain.models (LocationRecord, CurrencyState)
"""
from __future__ import annotations

import math
from typing import Any, List, Optional

from babel.numbers import format_decimal

from geofx.domain.currencies import BASE_CURRENCY, currency_info
from geofx.domain.models import CurrencyState, LocationRecord

DEFAULT_LOCALE = "en_US"


def _as_number(amount: Any) -> float:
    """Coerce display input to a finite float; anything else is 0."""
    if amount is None or isinstance(amount, bool):
        return 0.0
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(value) or math.isinf(value) else value


def format_amount(
    amount: Any,
    currency: Optional[str] = None,
    locale: str = DEFAULT_LOCALE,
    show_symbol: bool = True,
) -> str:
    """
    Render an amount with the currency symbol and locale grouping.

    Args:
        amount: Amount in ``currency`` units (None/invalid render as 0)
        currency: Currency code (defaults to the base currency)
        locale: Babel locale identifier (default: en_US)
        show_symbol: Whether to prefix the currency symbol

    Returns:
        Formatted string such as "₦1,530,000" or "$12.50"
    """
    info = currency_info(currency or BASE_CURRENCY)
    value = round(_as_number(amount), info.decimals)
    pattern = "#,##0" if info.decimals == 0 else "#,##0." + "0" * info.decimals
    digits = format_decimal(abs(value), format=pattern, locale=locale)
    sign = "-" if value < 0 else ""
    symbol = info.symbol if show_symbol else ""
    return f"{sign}{symbol}{digits}"


def format_rate(rate: float, currency: str, base: str = BASE_CURRENCY, locale: str = DEFAULT_LOCALE) -> str:
    """Format a base→currency rate, e.g. "1 USD = ₦1,530"."""
    return f"1 {base.upper()} = {format_amount(rate, currency, locale=locale)}"


def format_location(record: Optional[LocationRecord]) -> str:
    if record is None:
        return "Location: N/A"
    return f"{record.flag} {record.display_name} ({record.detection_method.value})"


def state_lines(state: CurrencyState, base: str = BASE_CURRENCY, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format the published currency state as plain text lines.

    Args:
        state: Snapshot to describe
        base: Base currency the rate is quoted against
        locale: Babel locale identifier

    Returns:
        Multi-line string: location, currency, rate and (if any) the diagnostic error
    """
    lines: List[str] = [
        format_location(state.location),
        f"Currency: {state.currency_code.upper()} ({state.symbol})",
        f"Rate: {format_rate(state.exchange_rate, state.currency_code, base=base, locale=locale)}",
    ]
    if state.loading:
        lines.append("Status: resolving…")
    if state.error:
        lines.append(f"Note: {state.error}")
    return "\n".join(lines)
