# src/geofx/__init__.py
"""
geofx - Location & Currency Resolution Engine

Detects a visitor's country and currency (device position, reverse
geocoding, durable cache, anchor-market fallback), keeps exchange rates
fresh across several free providers with a static safety net, and infers
the currency of historical payment records for dashboards.
"""

__version__ = "1.0.0"
