"""Utility functions for bitlayout.

This module provides layout size calculation and field placement reports.
"""

from __future__ import annotations

from .sizing import FieldPlacement, field_map, field_widths, layout_bits, layout_size

__all__ = [
    "FieldPlacement",
    "field_map",
    "field_widths",
    "layout_bits",
    "layout_size",
]
