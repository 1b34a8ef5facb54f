"""Layout declarations for bitlayout.

This module provides the Layout base class and its presets, the Position
field declaration, and the builder that gives each layout instance its own
buffer.
"""

from __future__ import annotations

from .base import Layout
from .builder import MISSING, Field, LayoutBuilder
from .config import LayoutConfig
from .conventions import ByteArrayConvention, ByteConvention, Convention, WordConvention
from .fields import Int8, Int16, Int32, Int64, Position, UInt8, UInt16, UInt32, UInt64
from .presets import ByteArrayLayout, ByteLayout, SMBusWordLayout, WordLayout

__all__ = [
    "Layout",
    "ByteLayout",
    "WordLayout",
    "SMBusWordLayout",
    "ByteArrayLayout",
    "Position",
    "Field",
    "LayoutBuilder",
    "LayoutConfig",
    "MISSING",
    "Convention",
    "ByteConvention",
    "WordConvention",
    "ByteArrayConvention",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
]
