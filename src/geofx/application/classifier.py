# src/geofx/application/classifier.py
"""
Agreement Currency Classifier - Infer the Currency of Historical Records

Stored agreement/payment records do not always say which currency their
amounts are in. The classifier infers it from whatever metadata is present,
without side effects and without any network call. Rules, first match wins:

1. An explicit, recognized currency other than the base currency.
2. A gateway that only ever settles in one currency (paystack, flutterwave).
3. A native amount that differs from the total while the stored rate is 1
   (the amount was never converted, so it is in the local currency).
4. A native amount above the magnitude threshold (too large for the base
   currency in practice).
5. The stated currency if recognized, otherwise the base currency.

Display conversion uses the CurrencyStore's CURRENT rate. Records do not keep
the rate at transaction time, so converted historical amounts are approximate.

Files that USE this module:
- geofx.application (package export for dashboard consumers)
- tests.test_classifier (unit tests)

Files that this module USES:
- geofx.application.currency_store (display conversion)
- geofx.domain.currencies (recognized codes, gateway table)
- geofx.domain.models (MonetaryRecord)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from geofx.application.currency_store import CurrencyStore
from geofx.domain.currencies import (
    ANCHOR_CURRENCY,
    BASE_CURRENCY,
    GATEWAY_CURRENCIES,
    is_supported,
)
from geofx.domain.models import MonetaryRecord

log = logging.getLogger(__name__)

RecordLike = Union[MonetaryRecord, Mapping[str, Any]]

DEFAULT_NATIVE_THRESHOLD = 5000.0

COMPLETED_STATUSES = frozenset({"completed"})
PENDING_STATUSES = frozenset({"pending", "active"})


def _as_record(record: RecordLike) -> MonetaryRecord:
    if isinstance(record, MonetaryRecord):
        return record
    return MonetaryRecord.from_mapping(record)


@dataclass(frozen=True)
class EarningsSummary:
    """Totals of a set of records, all expressed in ``currency``."""
    currency: str
    total: float = 0.0
    available: float = 0.0
    pending: float = 0.0
    records: int = 0


class AgreementCurrencyClassifier:
    def __init__(
        self,
        local_currency: str = ANCHOR_CURRENCY,
        threshold: float = DEFAULT_NATIVE_THRESHOLD,
        base_currency: str = BASE_CURRENCY,
    ):
        """
        Args:
            local_currency: Currency assumed by the native-amount rules
            threshold: Native amounts above this are taken as local currency
            base_currency: Currency assumed when nothing else is known
        """
        self.local_currency = local_currency.lower()
        self.threshold = threshold
        self.base_currency = base_currency.lower()

    def classify(self, record: RecordLike) -> str:
        """
        Infer the currency a record's amounts are denominated in.

        Args:
            record: MonetaryRecord or raw mapping (flat or paymentPreferences shape)

        Returns:
            Lowercase currency code
        """
        rec = _as_record(record)
        stated = rec.currency.strip().lower() if isinstance(rec.currency, str) else None
        recognized = stated if stated and is_supported(stated) else None

        if recognized and recognized != self.base_currency:
            return recognized

        gateway = rec.gateway.strip().lower() if isinstance(rec.gateway, str) else None
        if gateway in GATEWAY_CURRENCIES:
            return GATEWAY_CURRENCIES[gateway]

        native = rec.native_amount
        if native and native != rec.total_amount and rec.exchange_rate == 1:
            return self.local_currency

        if native and native > self.threshold:
            return self.local_currency

        return recognized or self.base_currency

    def to_display(self, amount: Any, record: RecordLike, store: CurrencyStore,
                   display_currency: Optional[str] = None) -> float:
        """
        Convert an amount of ``record`` into the display currency.

        Uses the store's current rates, so the result is approximate for
        records made when rates were different.
        """
        return store.convert(amount, self.classify(record), display_currency or store.currency)

    def summarize_earnings(self, records: Iterable[RecordLike], store: CurrencyStore,
                           display_currency: Optional[str] = None) -> EarningsSummary:
        """
        Aggregate earnings across records in one display currency.

        Completed records contribute their paid amount to total and available;
        pending/active records contribute the unpaid remainder to pending.

        Args:
            records: Records in any currency
            store: Source of conversion rates
            display_currency: Target currency (defaults to the store's currency)

        Returns:
            EarningsSummary in the display currency
        """
        target = (display_currency or store.currency).lower()
        total = available = pending = 0.0
        count = 0

        for raw in records:
            if raw is None:
                continue
            rec = _as_record(raw)
            status = (rec.status or "").lower()
            currency = self.classify(rec)
            count += 1

            if status in COMPLETED_STATUSES and rec.paid_amount > 0:
                earned = store.convert(rec.paid_amount, currency, target)
                total += earned
                available += earned
            elif status in PENDING_STATUSES and rec.total_amount > 0:
                pending += store.convert(rec.total_amount - rec.paid_amount, currency, target)

        log.debug("Summarized %d records in %s: total=%s pending=%s", count, target, total, pending)
        return EarningsSummary(currency=target, total=total, available=available, pending=pending, records=count)
