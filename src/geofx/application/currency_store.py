# src/geofx/application/currency_store.py
"""
Currency Store - Centralized Currency State Management

This module owns the public CurrencyState: which currency amounts are shown
in, its symbol, the resolved location and the base→currency rate. It replaces
ad-hoc globals with one object that:

- resolves location then rate on initialize()/refresh() and publishes a new
  CurrencyState as a whole (loading stays True until both steps finish)
- converts and formats amounts synchronously from the rates it already knows
- never raises; a degraded resolution only sets the diagnostic ``error`` field

Files that USE this module:
- geofx.application.classifier (display conversion for dashboards)
- geofx.app (wiring and CLI output)
- tests.test_currency_store (unit tests)

Files that this module USES:
- geofx.application.location_chain (LocationFallbackChain)
- geofx.application.rates_service (ExchangeRateProvider)
- geofx.adapters.formatting.formatter (format_amount)
- geofx.domain.currencies (symbols, gateway constants)
- geofx.domain.models (CurrencyState)
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Dict, Optional

from geofx.adapters.formatting.formatter import DEFAULT_LOCALE, format_amount
from geofx.application.location_chain import LocationFallbackChain
from geofx.application.rates_service import ExchangeRateProvider
from geofx.domain.currencies import (
    INTERNATIONAL_GATEWAY,
    LOCAL_GATEWAY,
    currency_info,
    normalize_currency,
)
from geofx.domain.models import CurrencyState
from geofx.shared.single_flight import SingleFlight

log = logging.getLogger(__name__)


def _as_amount(amount: Any) -> float:
    """Numeric amount or 0 for None, booleans, non-numeric and non-finite input."""
    if amount is None or isinstance(amount, bool):
        return 0.0
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


class CurrencyStore:
    """Manages the visitor's currency state."""

    def __init__(
        self,
        chain: LocationFallbackChain,
        rates: ExchangeRateProvider,
        locale: str = DEFAULT_LOCALE,
    ):
        """
        Args:
            chain: Location resolution (cache → live → anchor market)
            rates: Exchange-rate acquisition (cache → providers → table)
            locale: Babel locale used by the format helpers
        """
        self.chain = chain
        self.rates = rates
        self.locale = locale
        self.base_currency = rates.base_currency
        base = currency_info(self.base_currency)
        self._state = CurrencyState(currency_code=base.code, symbol=base.symbol)
        self._flight = SingleFlight()
        self._in_flight = 0

    @property
    def state(self) -> CurrencyState:
        """Current published snapshot (read-only)."""
        return self._state

    @property
    def currency(self) -> str:
        return self._state.currency_code

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def loading(self) -> bool:
        return self._state.loading

    async def initialize(self) -> CurrencyState:
        """
        Resolve location then rate and publish the result.

        Concurrent calls share one resolution.

        Returns:
            The published CurrencyState
        """
        return await self._flight.run("initialize", lambda: self._resolve(force_refresh=False))

    async def refresh(self) -> CurrencyState:
        """Like initialize(), but bypasses the durable location cache read."""
        return await self._flight.run("refresh", lambda: self._resolve(force_refresh=True))

    async def _resolve(self, force_refresh: bool) -> CurrencyState:
        # initialize and refresh may overlap; loading clears when the last one ends
        self._in_flight += 1
        self._state = replace(self._state, loading=True)
        try:
            state = await self._build_state(force_refresh)
        finally:
            self._in_flight -= 1
        self._state = replace(state, loading=self._in_flight > 0)
        return self._state

    async def _build_state(self, force_refresh: bool) -> CurrencyState:
        try:
            location = await self.chain.resolve_location(force_refresh=force_refresh)
            rate = await self.rates.get_rate(location.currency_code)
            error = self.chain.last_error
        except Exception as e:
            log.exception("Currency resolution failed unexpectedly, using anchor market: %s", e)
            location = self.chain.fallback_record()
            rate = self.rates.fallback_rate(location.currency_code)
            error = f"{type(e).__name__}: {e}"

        info = currency_info(location.currency_code)
        log.info("Currency state: %s (%s) rate=%s via %s",
                 info.code, location.display_name, rate, location.detection_method.value)
        return CurrencyState(
            currency_code=info.code,
            symbol=info.symbol,
            location=location,
            exchange_rate=rate,
            error=error,
        )

    def _rate(self, currency: str) -> float:
        # Units of ``currency`` per 1 base unit, without I/O
        if currency == self._state.currency_code:
            return self._state.exchange_rate
        return self.rates.known_rate(currency)

    def convert(self, amount: Any, from_currency: Optional[str] = None, to_currency: Optional[str] = None) -> float:
        """
        Convert between two currencies using known rates only.

        Args:
            amount: Amount in ``from_currency`` (None/0/non-numeric give 0)
            from_currency: Source code (defaults to the base currency)
            to_currency: Target code (defaults to the resolved currency)

        Returns:
            Converted amount
        """
        value = _as_amount(amount)
        if value == 0:
            return 0.0
        source = normalize_currency(from_currency, self.base_currency)
        target = normalize_currency(to_currency, self._state.currency_code)
        if source == target:
            return value
        return value / self._rate(source) * self._rate(target)

    def convert_from_base(self, amount: Any) -> float:
        return self.convert(amount, self.base_currency, self._state.currency_code)

    def convert_to_base(self, amount: Any) -> float:
        return self.convert(amount, self._state.currency_code, self.base_currency)

    def format(self, amount: Any, currency: Optional[str] = None) -> str:
        """Render ``amount`` (already in ``currency``) with symbol and locale rules."""
        return format_amount(_as_amount(amount), currency or self._state.currency_code, locale=self.locale)

    def format_base(self, amount: Any) -> str:
        return self.format(amount, self.base_currency)

    def format_local(self, base_amount: Any) -> str:
        """Convert a base-currency amount to the resolved currency and format it."""
        return self.format(self.convert_from_base(base_amount), self._state.currency_code)

    def multi_currency_display(self, base_amount: Any) -> Dict[str, Dict[str, Any]]:
        """
        Show a base-currency amount side by side with its local equivalent.

        Returns:
            {"base": {...}, "local": {...}} with amount, formatted text and upper-case code
        """
        value = _as_amount(base_amount)
        local_amount = self.convert_from_base(value)
        local = self._state.currency_code
        return {
            "base": {
                "amount": value,
                "formatted": self.format_base(value),
                "currency": self.base_currency.upper(),
            },
            "local": {
                "amount": local_amount,
                "formatted": self.format(local_amount, local),
                "currency": local.upper(),
            },
        }

    def is_base(self) -> bool:
        return self._state.currency_code == self.base_currency

    def recommended_gateway(self) -> str:
        """Payment gateway for the resolved currency: local for non-base, international otherwise."""
        return INTERNATIONAL_GATEWAY if self.is_base() else LOCAL_GATEWAY
