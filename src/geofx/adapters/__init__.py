# src/geofx/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- HTTP client
- Positioning sources
- Reverse geocoders
- Rate providers (APIs)
- Persistence (storage)
- Formatting (output)
"""

__all__ = []
