# src/geofx/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Formatting

This package contains formatters for amounts, rates and currency state.
"""

from geofx.adapters.formatting.formatter import (
    format_amount,
    format_location,
    format_rate,
    state_lines,
)

__all__ = [
    "format_amount",
    "format_rate",
    "format_location",
    "state_lines",
]
