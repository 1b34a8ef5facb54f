"""Bit-range codec for bitlayout.

This module provides the byte buffer, the bit-range codec that moves integers
in and out of arbitrary bit ranges of it, and the value adapters that convert
between raw bits and semantic field types.
"""

from __future__ import annotations

from .adapters import BoolAdapter, EnumAdapter, IntAdapter, IntFormat, ValueAdapter, resolve_adapter
from .bitrange import WORD_BITS, BitRangeCodec, FieldDescriptor
from .buffer import ByteBuffer

__all__ = [
    "ByteBuffer",
    "BitRangeCodec",
    "FieldDescriptor",
    "WORD_BITS",
    "ValueAdapter",
    "BoolAdapter",
    "IntAdapter",
    "EnumAdapter",
    "IntFormat",
    "resolve_adapter",
]
