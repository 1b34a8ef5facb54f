"""Preset layout bases for common register shapes.

Each preset fixes a coordinate convention for its Position declarations:

- ByteLayout: one byte, bits 7..0
- WordLayout: big-endian two-byte word, bits 15..0 (bit 15 in the first byte)
- SMBusWordLayout: little-endian two-byte word, bits 15..0 (bit 0 in the first byte)
- ByteArrayLayout: any number of bytes, numbered from 1 as in datasheets
"""

from __future__ import annotations

from typing import ClassVar

from .base import Layout
from .conventions import ByteArrayConvention, ByteConvention, Convention, WordConvention


class ByteLayout(Layout):
    """Fields packed into a single byte.

    Example:
        >>> class FlagAndSmallValue(ByteLayout):
        ...     flag: bool = Position(bit=7)
        ...     small_value: UInt8 = Position(msb=4, lsb=0, default=0b1_1111)
    """

    convention: ClassVar[Convention] = ByteConvention()
    layout_byte_width: ClassVar[int | None] = 1


class WordLayout(Layout):
    """Fields packed into a big-endian 16-bit word.

    Example:
        >>> class FlagAndMediumValue(WordLayout):
        ...     flag: bool = Position(bit=15)
        ...     medium_value: UInt16 = Position(msb=13, lsb=3)
    """

    convention: ClassVar[Convention] = WordConvention()
    layout_byte_width: ClassVar[int | None] = 2


class SMBusWordLayout(Layout):
    """Fields packed into a little-endian 16-bit word, as SMBus transfers words."""

    convention: ClassVar[Convention] = WordConvention(little_endian=True)
    layout_byte_width: ClassVar[int | None] = 2


class ByteArrayLayout(Layout):
    """Fields placed at 1-indexed byte numbers of a message of any length.

    Example:
        >>> class SomeMappedValues(ByteArrayLayout):
        ...     leading_flag: bool = Position(byte=1, bit=7)
        ...     spanning_word: Int16 = Position(
        ...         significant_byte=1, msb=4, minor_byte=3, lsb=5, signed=True, default=-1)
        ...     small_value: UInt8 = Position(byte=3, msb=4, lsb=0, default=0b1_1111)
    """

    convention: ClassVar[Convention] = ByteArrayConvention(index_base=1)
